"""Error hierarchy for inventory and extraction failures.

Fatal errors abort the run; recoverable errors are caught at the smallest
enclosing scope (namespace, workload or container), logged, and skipped.
"""

from __future__ import annotations


class AuditError(Exception):
    """Base exception for audit failures."""


class ClusterConnectionError(AuditError):
    """Raised when the cluster cannot be reached."""


class NamespaceListError(AuditError):
    """Raised when namespaces cannot be enumerated."""


class FetchError(AuditError):
    """Workload listing failed for one namespace."""

    def __init__(self, namespace: str, message: str, kind: str | None = None) -> None:
        self.namespace = namespace
        self.kind = kind
        scope = f"{namespace}/{kind}" if kind else namespace
        super().__init__(f"Failed to fetch workloads for {scope}: {message}")


class ExtractionError(AuditError):
    """A workload spec is missing a field required for extraction."""

    def __init__(self, object_name: str, namespace: str | None, message: str) -> None:
        self.object_name = object_name
        self.namespace = namespace
        super().__init__(f"{namespace or '<no namespace>'}/{object_name}: {message}")


class ParseError(AuditError, ValueError):
    """A resource quantity string could not be parsed."""

    def __init__(self, quantity: str) -> None:
        self.quantity = quantity
        super().__init__(f"Failed to parse quantity {quantity!r}")


__all__ = [
    "AuditError",
    "ClusterConnectionError",
    "ExtractionError",
    "FetchError",
    "NamespaceListError",
    "ParseError",
]
