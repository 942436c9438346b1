"""Substring patterns for image registry classification."""

from typing import Final

# Private registry host fragment (ECR by default).
PRIVATE_REGISTRY_PATTERN: Final = "amazonaws.com/"

# Hosted registries trusted over Docker Hub.
HOSTED_REGISTRY_PATTERNS: Final = ("gcr.io", "quay.io", "ghcr.io")

__all__ = [
    "HOSTED_REGISTRY_PATTERNS",
    "PRIVATE_REGISTRY_PATTERN",
]
