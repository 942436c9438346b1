"""Settings state models."""

from kubetally.models.state.app_settings import (
    AuditSettings,
    ConfigError,
    ConfigLoadError,
)
from kubetally.models.state.config_manager import ConfigManager

__all__ = ["AuditSettings", "ConfigError", "ConfigLoadError", "ConfigManager"]
