"""Constants module for kubetally.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- timeouts.py: Timeout values (seconds)
- limits.py: Limit values (max/min)
- defaults.py: Default values for settings
- patterns.py: Registry substring patterns
"""

from kubetally.constants.defaults import (
    CONTAINER_LEVEL_CSV_NAME,
    NODE_SELECTOR_NONE,
    OBJECT_LEVEL_CSV_NAME,
)
from kubetally.constants.enums import WorkloadKind
from kubetally.constants.patterns import (
    HOSTED_REGISTRY_PATTERNS,
    PRIVATE_REGISTRY_PATTERN,
)
from kubetally.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
)

__all__ = [
    "CLUSTER_REQUEST_TIMEOUT",
    "CONTAINER_LEVEL_CSV_NAME",
    "HOSTED_REGISTRY_PATTERNS",
    "KUBECTL_COMMAND_TIMEOUT",
    "NODE_SELECTOR_NONE",
    "OBJECT_LEVEL_CSV_NAME",
    "PRIVATE_REGISTRY_PATTERN",
    "WorkloadKind",
]
