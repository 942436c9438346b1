"""All enum definitions for the auditor.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# Workload Enums
# =============================================================================

class WorkloadKind(str, Enum):
    """Workload kinds the inventory can list."""

    POD = "pod"
    DEPLOYMENT = "deployment"
    STATEFULSET = "statefulset"
    DAEMONSET = "daemonset"

    @property
    def resource_name(self) -> str:
        """Plural resource name accepted by ``kubectl get``."""
        return f"{self.value}s"

    @property
    def is_controller(self) -> bool:
        """Whether the kind wraps its pod spec in a template."""
        return self is not WorkloadKind.POD


__all__ = [
    "WorkloadKind",
]
