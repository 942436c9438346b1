"""Application settings models."""

from pydantic import BaseModel, ConfigDict, Field

from kubetally.constants.defaults import (
    LOG_LEVEL_DEFAULT,
    MAX_CONCURRENT_NAMESPACES_DEFAULT,
    OUTPUT_DIR_DEFAULT,
    WORKLOAD_KINDS_DEFAULT,
)
from kubetally.constants.enums import WorkloadKind
from kubetally.constants.limits import (
    MAX_CONCURRENT_NAMESPACES_MAX,
    MAX_CONCURRENT_NAMESPACES_MIN,
)
from kubetally.constants.patterns import (
    HOSTED_REGISTRY_PATTERNS,
    PRIVATE_REGISTRY_PATTERN,
)
from kubetally.constants.timeouts import (
    KUBECTL_COMMAND_TIMEOUT,
    NAMESPACE_FETCH_TIMEOUT,
)


class AuditSettings(BaseModel):
    """Audit run settings with validation."""

    model_config = ConfigDict(populate_by_name=True)

    # Cluster
    context: str | None = None
    workload_kinds: list[WorkloadKind] = Field(
        default_factory=lambda: [WorkloadKind(kind) for kind in WORKLOAD_KINDS_DEFAULT]
    )

    # Image policy
    private_registry_pattern: str = PRIVATE_REGISTRY_PATTERN
    hosted_registry_patterns: list[str] = Field(
        default_factory=lambda: list(HOSTED_REGISTRY_PATTERNS)
    )

    # Concurrency
    max_concurrent_namespaces: int = Field(
        default=MAX_CONCURRENT_NAMESPACES_DEFAULT,
        ge=MAX_CONCURRENT_NAMESPACES_MIN,
        le=MAX_CONCURRENT_NAMESPACES_MAX,
    )
    namespace_timeout_seconds: float = Field(default=NAMESPACE_FETCH_TIMEOUT, gt=0)
    kubectl_timeout_seconds: int = Field(default=KUBECTL_COMMAND_TIMEOUT, gt=0)

    # Output
    output_dir: str = OUTPUT_DIR_DEFAULT
    log_level: str = LOG_LEVEL_DEFAULT


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""
