"""Utility functions for kubetally."""

from kubetally.utils.resource_parser import cores_for, parse_cores
from kubetally.utils.rollup import (
    aggregate,
    container_level_key,
    object_level_key,
    rank_and_filter,
    rollup,
)

__all__ = [
    "aggregate",
    "container_level_key",
    "cores_for",
    "object_level_key",
    "parse_cores",
    "rank_and_filter",
    "rollup",
]
