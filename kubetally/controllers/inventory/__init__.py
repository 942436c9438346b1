"""Inventory domain: namespace fan-out, workload fetching and extraction."""

from kubetally.controllers.inventory.controller import (
    InventoryController,
    InventoryResult,
)
from kubetally.controllers.inventory.fetchers import NamespaceFetcher, WorkloadFetcher
from kubetally.controllers.inventory.parsers import WorkloadParser

__all__ = [
    "InventoryController",
    "InventoryResult",
    "NamespaceFetcher",
    "WorkloadFetcher",
    "WorkloadParser",
]
