"""Parsers for inventory controller."""

from kubetally.controllers.inventory.parsers.workload_parser import WorkloadParser

__all__ = ["WorkloadParser"]
