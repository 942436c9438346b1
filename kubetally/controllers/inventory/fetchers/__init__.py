"""Fetchers for inventory controller."""

from kubetally.controllers.inventory.fetchers.namespace_fetcher import NamespaceFetcher
from kubetally.controllers.inventory.fetchers.workload_fetcher import WorkloadFetcher

__all__ = ["NamespaceFetcher", "WorkloadFetcher"]
