"""Display formatting for calculator results.

Decides which string the user sees for every result field:
- energy: 3 decimals (kWh)
- hours: 2 decimals
- percentages: 1 decimal
- currency: Australian dollars, 2 decimals ($6.30)
- completion time: 12-hour clock (3:45 pm), or Full / Never
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from ..models.data_models import (
    ChargeResult,
    ChargeState,
    DischargeResult,
    ValidationError,
)

BLANK = "--"
BLANK_CURRENCY = "$--"
BLANK_TIME = "--:-- --"
INFINITY = "∞"
TIME_FULL = "Full"
TIME_NEVER = "Never"

CURRENCY = "AUD"
CURRENCY_SYMBOL = "$"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value)


def format_number(value: float | None, decimals: int = 2) -> str:
    """Format a number to a fixed number of decimals, '--' if not finite."""
    if not _is_number(value):
        return BLANK
    return f"{value:.{decimals}f}"


def format_energy(value: float | None) -> str:
    """Format an energy value in kWh."""
    return format_number(value, 3)


def format_percent(value: float | None) -> str:
    """Format a percentage."""
    return format_number(value, 1)


def format_hours(value: float | None) -> str:
    """Format hours, infinite time as the infinity sign."""
    if value == math.inf:
        return INFINITY
    return format_number(value, 2)


def format_minutes(value: float | None) -> str:
    """Format whole minutes, infinite time as the infinity sign."""
    if value == math.inf:
        return INFINITY
    if not _is_number(value):
        return BLANK
    return str(int(value))


def format_currency(amount: float | None) -> str:
    """Format an amount of money, e.g. $6.30 or -$1.25."""
    if not _is_number(amount):
        return BLANK_CURRENCY
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(amount):,.2f}"


def format_time(value: datetime) -> str:
    """Format a time as h:mm am/pm in the datetime's own time zone."""
    hour = value.hour % 12 or 12
    suffix = "am" if value.hour < 12 else "pm"
    return f"{hour}:{value.minute:02d} {suffix}"


def format_completion_time(result: ChargeResult) -> str:
    """Format the completion time of a charge result."""
    if result.state == ChargeState.FULL:
        return TIME_FULL
    if result.state == ChargeState.NOT_CHARGING or result.completion_time is None:
        return TIME_NEVER
    return format_time(result.completion_time)


def charge_display(result: ChargeResult | ValidationError | None) -> dict[str, str]:
    """Strings shown for a charge calculation."""
    if not isinstance(result, ChargeResult):
        return {
            "hours": BLANK,
            "minutes": BLANK,
            "completion_time": BLANK_TIME,
            "status": result.message if result else "",
        }
    return {
        "hours": format_hours(result.hours_to_full),
        "minutes": format_minutes(result.minutes_to_full),
        "completion_time": format_completion_time(result),
        "status": result.message,
    }


def discharge_display(
    result: DischargeResult | ValidationError | None,
) -> dict[str, str]:
    """Strings shown for a discharge calculation."""
    if not isinstance(result, DischargeResult) or result.is_idle:
        return {
            "energy_discharged": BLANK,
            "final_level": BLANK,
            "usage": BLANK,
            "revenue": BLANK_CURRENCY,
            "status": result.message if result else "",
        }
    return {
        "energy_discharged": format_energy(result.actual_energy_discharged_kwh),
        "final_level": format_energy(result.final_level_kwh),
        "usage": format_percent(result.usage_percent),
        "revenue": format_currency(result.revenue),
        "status": result.message,
    }
