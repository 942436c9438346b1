"""Settings loading from YAML files.

Lookup order: explicit path, ``$KUBETALLY_CONFIG``, ``./kubetally.yaml``.
With no file present the model defaults apply.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from kubetally.constants.defaults import CONFIG_ENV_VAR, CONFIG_FILE_DEFAULT
from kubetally.models.state.app_settings import AuditSettings, ConfigLoadError

logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads AuditSettings from YAML."""

    @staticmethod
    def resolve_path(
        path: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Path | None:
        """Return the settings file to read, or None when there is none."""
        if path is not None:
            return Path(path)
        env = os.environ if environ is None else environ
        env_path = env.get(CONFIG_ENV_VAR, "").strip()
        if env_path:
            return Path(env_path)
        default_path = Path(CONFIG_FILE_DEFAULT)
        return default_path if default_path.is_file() else None

    @classmethod
    def load(
        cls,
        path: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> AuditSettings:
        """Load settings, falling back to defaults when no file exists.

        Raises:
            ConfigLoadError: If the file is unreadable, not valid YAML, or
                holds invalid values.
        """
        config_path = cls.resolve_path(path, environ)
        if config_path is None:
            logger.debug("No settings file found, using defaults")
            return AuditSettings()

        try:
            with config_path.open(encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(f"Cannot read settings from {config_path}: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigLoadError(f"Settings file {config_path} must contain a mapping")

        try:
            settings = AuditSettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid settings in {config_path}: {exc}") from exc

        logger.info("Loaded settings from %s", config_path)
        return settings
