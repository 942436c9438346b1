"""Resource parsing utilities for CPU request quantities.

Quantities are parsed with a scale-then-divide convention: ``parse_cores``
returns a value that is divided by 1000 downstream to obtain whole cores.

- Millicores: "400m" -> 400.0 (0.4 cores after division)
- Whole cores: "2" -> 2000.0 (2.0 cores after division)
- Legacy "g" suffix: "2g" -> 2000.0, kept for report compatibility
"""

import math

from kubetally.controllers.base.errors import ParseError

# Scale applied to whole-core quantities so the later division is a no-op.
_CORE_SCALE = 1000.0


def _to_float(residue: str, quantity: str) -> float:
    # float() also takes "nan", "inf", "1_000" and padded text; none are quantities.
    if not residue or residue != residue.strip() or "_" in residue:
        raise ParseError(quantity)
    try:
        value = float(residue)
    except ValueError as exc:
        raise ParseError(quantity) from exc
    if not math.isfinite(value) or value < 0:
        raise ParseError(quantity)
    return value


def parse_cores(quantity: str) -> float:
    """Parse a CPU quantity string into pre-scaled millicores.

    Args:
        quantity: CPU value as string (e.g., "400m", "2", "1.5")

    Returns:
        Millicore value as float; divide by 1000 to obtain cores.

    Raises:
        ParseError: If the string is empty or its numeric part is not a finite,
            non-negative number.
    """
    quantity = str(quantity)

    if "m" in quantity:
        return _to_float(quantity.replace("m", ""), quantity)

    # Not a standard Kubernetes unit; only the numeric behavior is preserved.
    if "g" in quantity:
        return _to_float(quantity.replace("g", ""), quantity) * _CORE_SCALE

    return _to_float(quantity, quantity) * _CORE_SCALE


def cores_for(quantity: str, instance_count: int) -> float:
    """Total cores requested by ``instance_count`` copies of a container."""
    return parse_cores(quantity) * instance_count / 1000.0
