"""Base controller classes and errors."""

from kubetally.controllers.base.base_controller import BaseController, WorkerResult
from kubetally.controllers.base.errors import (
    AuditError,
    ClusterConnectionError,
    ExtractionError,
    FetchError,
    NamespaceListError,
    ParseError,
)

__all__ = [
    "AuditError",
    "BaseController",
    "ClusterConnectionError",
    "ExtractionError",
    "FetchError",
    "NamespaceListError",
    "ParseError",
    "WorkerResult",
]
