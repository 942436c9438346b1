"""Default values for settings.

All default values used in the AuditSettings model.
"""

from typing import Final

# ============================================================================
# Inventory defaults
# ============================================================================

WORKLOAD_KINDS_DEFAULT: Final = ("pod",)
MAX_CONCURRENT_NAMESPACES_DEFAULT: Final = 8

# ============================================================================
# Report defaults
# ============================================================================

OUTPUT_DIR_DEFAULT: Final = "."
CONTAINER_LEVEL_CSV_NAME: Final = "results_by_container_name.csv"
OBJECT_LEVEL_CSV_NAME: Final = "results_by_object.csv"
NODE_SELECTOR_NONE: Final = "none"
LOG_LEVEL_DEFAULT: Final = "INFO"

# ============================================================================
# Config file defaults
# ============================================================================

CONFIG_ENV_VAR: Final = "KUBETALLY_CONFIG"
CONFIG_FILE_DEFAULT: Final = "kubetally.yaml"

__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILE_DEFAULT",
    "CONTAINER_LEVEL_CSV_NAME",
    "LOG_LEVEL_DEFAULT",
    "MAX_CONCURRENT_NAMESPACES_DEFAULT",
    "NODE_SELECTOR_NONE",
    "OBJECT_LEVEL_CSV_NAME",
    "OUTPUT_DIR_DEFAULT",
    "WORKLOAD_KINDS_DEFAULT",
]
