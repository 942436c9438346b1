"""Image origin classification by registry substring.

Both checks are plain substring tests on the image reference; no URL parsing.
"""

from __future__ import annotations

from collections.abc import Iterable

from kubetally.constants.patterns import (
    HOSTED_REGISTRY_PATTERNS,
    PRIVATE_REGISTRY_PATTERN,
)


def is_private_registry(image: str, pattern: str = PRIVATE_REGISTRY_PATTERN) -> bool:
    """Return True when the image lives in the internal registry."""
    return bool(pattern) and pattern in image


def is_known_hosted_registry(
    image: str, patterns: Iterable[str] = HOSTED_REGISTRY_PATTERNS
) -> bool:
    """Return True when the image comes from a trusted hosted registry."""
    return any(pattern and pattern in image for pattern in patterns)


def has_trusted_image(
    image: str,
    private_pattern: str = PRIVATE_REGISTRY_PATTERN,
    hosted_patterns: Iterable[str] = HOSTED_REGISTRY_PATTERNS,
) -> bool:
    """Return True when the image is private or hosted on a trusted registry."""
    return is_private_registry(image, private_pattern) or is_known_hosted_registry(
        image, hosted_patterns
    )
