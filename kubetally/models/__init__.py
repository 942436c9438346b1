"""Data models for kubetally."""

from kubetally.models.core import WorkloadRecord
from kubetally.models.state import AuditSettings

__all__ = ["AuditSettings", "WorkloadRecord"]
