"""Calculator input handling.

Raw form values are parsed leniently: anything that is not a number counts
as 0 and goes through the engines' validation instead of failing here.
"""

from __future__ import annotations

import math
import re
from typing import Any, Mapping

from ..const import (
    INPUT_BATTERY_SIZE,
    INPUT_CURRENT_LEVEL,
    INPUT_DISCHARGE_DURATION,
    INPUT_DISCHARGE_RATE,
    INPUT_EXPORT_PRICE,
    INPUT_RESERVE_LEVEL,
    INPUT_SOLAR_GENERATION,
)

_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# (min, max) accepted by the input fields
INPUT_LIMITS: dict[str, tuple[float, float]] = {
    INPUT_CURRENT_LEVEL: (0.0, 1000.0),
    INPUT_BATTERY_SIZE: (0.0, 1000.0),
    INPUT_RESERVE_LEVEL: (0.0, 100.0),
    INPUT_SOLAR_GENERATION: (0.0, 100.0),
    INPUT_DISCHARGE_DURATION: (0.0, 1440.0),
    INPUT_DISCHARGE_RATE: (0.0, 100.0),
    INPUT_EXPORT_PRICE: (0.0, 100.0),
}

# Values loaded by the "Load Example" action
EXAMPLE_INPUTS: dict[str, float] = {
    INPUT_CURRENT_LEVEL: 25.5,
    INPUT_BATTERY_SIZE: 32.24,
    INPUT_RESERVE_LEVEL: 40.0,
    INPUT_SOLAR_GENERATION: 8.5,
    INPUT_DISCHARGE_DURATION: 30.0,
    INPUT_DISCHARGE_RATE: 10.0,
    INPUT_EXPORT_PRICE: 1.26,
}

# Battery size and reserve level survive a clear
CLEARABLE_INPUTS = (
    INPUT_CURRENT_LEVEL,
    INPUT_SOLAR_GENERATION,
    INPUT_DISCHARGE_DURATION,
    INPUT_DISCHARGE_RATE,
    INPUT_EXPORT_PRICE,
)


def _parse(raw: Any) -> float | None:
    """Finite number in raw, or None."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:  # ints beyond float range
            return None
    else:
        match = _NUMBER_PREFIX.match(str(raw))
        if match is None:
            return None
        value = float(match.group(0))
    if not math.isfinite(value):
        return None
    return value


def parse_number(raw: Any) -> float:
    """Parse a raw input value, treating empty or unparsable input as 0.

    Text with a numeric prefix parses the prefix ("12kWh" -> 12.0).
    NaN and infinities count as unparsable.
    """
    value = _parse(raw)
    return 0.0 if value is None else value


def is_unparsable(raw: Any) -> bool:
    """True for non-empty input that parse_number has to replace with 0."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return False
    return _parse(raw) is None


def find_out_of_range(values: Mapping[str, float]) -> list[str]:
    """Return the input keys whose values fall outside INPUT_LIMITS."""
    invalid = []
    for key, value in values.items():
        limits = INPUT_LIMITS.get(key)
        if limits is None:
            continue
        low, high = limits
        if value < low or value > high:
            invalid.append(key)
    return invalid
