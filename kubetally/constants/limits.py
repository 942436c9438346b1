"""Limit constants for the auditor.

Validation ranges for concurrency settings.
"""

from typing import Final

# ============================================================================
# Controller limits
# ============================================================================

MAX_CONCURRENT_NAMESPACES_MIN: Final = 1
MAX_CONCURRENT_NAMESPACES_MAX: Final = 64

__all__ = [
    "MAX_CONCURRENT_NAMESPACES_MAX",
    "MAX_CONCURRENT_NAMESPACES_MIN",
]
