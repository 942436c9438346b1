"""Core domain models."""

from kubetally.models.core.workload_record import WorkloadRecord

__all__ = ["WorkloadRecord"]
