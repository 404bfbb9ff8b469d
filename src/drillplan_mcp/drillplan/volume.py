"""Weekly volume calculator and the number coercion rules coach input goes through.

All rounding here is round-half-up (2.5 -> 3, -2.5 -> -2), not Python's
round-half-even. Every derived value a coach sees depends on it.
"""

import math
import re

from drillplan_mcp.drillplan.constants import COEFFS, DAILY_SHARE

_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def round_half_up(value: float) -> int:
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def to_number(value) -> float:
    """Coerce a whole coach-entered value to a number; anything unparseable is 0."""
    if value is None:
        return 0
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else 0
    text = str(value).strip()
    if not text or "_" in text:
        return 0
    try:
        number = float(text)
    except ValueError:
        return 0
    return number if math.isfinite(number) else 0


def parse_float(value) -> float | None:
    """Parse the leading number of a value ("3 sets" -> 3.0), or None if there is none."""
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    match = _LEADING_FLOAT.match(str(value or ""))
    if not match:
        return None
    number = float(match.group(1))
    return number if math.isfinite(number) else None


def parse_sets(value) -> float:
    """Set-count parsing: no number, or zero, counts as a single set."""
    return parse_float(value) or 1


def recompute(base, fact) -> tuple[float, list[int]]:
    """Return a drill's weekly total and its raw allocation for each training day."""
    base = to_number(base)
    fact = to_number(fact)
    total = base * fact * 2
    if not math.isfinite(total):
        total = 0
    daily_average = (total * DAILY_SHARE) / 6
    daily_values = [round_half_up(daily_average * c) for c in COEFFS]
    return total, daily_values


def format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
