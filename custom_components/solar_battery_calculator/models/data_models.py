"""Data models for the Solar Battery Calculator integration."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class StatusLevel(str, Enum):
    """Tone of the advisory message attached to a result."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ValidationErrorKind(str, Enum):
    """The two ways a set of battery parameters can be rejected."""

    INVALID_BATTERY_SIZE = "invalid_battery_size"
    NEGATIVE_CURRENT_LEVEL = "negative_current_level"


class ChargeState(str, Enum):
    """Outcome of a charge time calculation."""

    CHARGING = "charging"
    FULL = "full"
    NOT_CHARGING = "not_charging"


class DischargeState(str, Enum):
    """Outcome of a VPP discharge calculation."""

    IDLE = "idle"  # not enough input to compute
    AT_RESERVE = "at_reserve"
    LIMITED = "limited"
    NEAR_RESERVE = "near_reserve"
    NORMAL = "normal"


@dataclass(frozen=True)
class BatteryParameters:
    """Battery parameters shared by both calculators."""

    current_level_kwh: float
    capacity_kwh: float
    reserve_percent: float = 0.0

    @property
    def reserve_floor_kwh(self) -> float:
        """Energy kept in the battery as a discharge floor."""
        return self.capacity_kwh * self.reserve_percent / 100


@dataclass(frozen=True)
class ChargeInput:
    """Solar charging input."""

    solar_generation_kw: float


@dataclass(frozen=True)
class DischargeInput:
    """VPP discharge event input."""

    duration_minutes: float
    discharge_rate_kw: float
    export_price_per_kwh: float = 0.0

    @property
    def requested_energy_kwh(self) -> float:
        """Energy the event asks for if nothing limits it."""
        return (self.duration_minutes / 60) * self.discharge_rate_kw


@dataclass(frozen=True)
class ValidationError:
    """Tagged validation failure returned (not raised) by the engines."""

    kind: ValidationErrorKind
    message: str

    level = StatusLevel.ERROR

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"error": self.kind.value, "message": self.message}


@dataclass(frozen=True)
class ChargeResult:
    """Result of a charge time calculation."""

    state: ChargeState
    hours_to_full: float  # math.inf when not charging
    minutes_to_full: float  # whole minutes, or math.inf
    completion_time: datetime | None  # None for the Full / Never sentinels
    remaining_capacity_kwh: float
    message: str
    level: StatusLevel

    @property
    def is_charging(self) -> bool:
        """True when the result carries a real completion time."""
        return self.state == ChargeState.CHARGING

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON friendly dictionary."""
        finite = self.state != ChargeState.NOT_CHARGING
        return {
            "state": self.state.value,
            "hours_to_full": self.hours_to_full if finite else None,
            "minutes_to_full": self.minutes_to_full if finite else None,
            "completion_time": (
                self.completion_time.isoformat() if self.completion_time else None
            ),
            "remaining_capacity_kwh": self.remaining_capacity_kwh,
            "message": self.message,
            "level": self.level.value,
        }


@dataclass(frozen=True)
class DischargeResult:
    """Result of a VPP discharge calculation.

    Every numeric field is None in the idle state.
    """

    state: DischargeState
    reserve_floor_kwh: float | None = None
    available_kwh: float | None = None
    requested_energy_kwh: float | None = None
    actual_energy_discharged_kwh: float | None = None
    final_level_kwh: float | None = None
    usage_percent: float | None = None
    revenue: float | None = None
    shortfall_kwh: float | None = None
    message: str = ""
    level: StatusLevel | None = None

    @property
    def is_idle(self) -> bool:
        """True when there was not enough input to compute anything."""
        return self.state == DischargeState.IDLE

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON friendly dictionary."""
        return {
            "state": self.state.value,
            "reserve_floor_kwh": self.reserve_floor_kwh,
            "available_kwh": self.available_kwh,
            "requested_energy_kwh": self.requested_energy_kwh,
            "actual_energy_discharged_kwh": self.actual_energy_discharged_kwh,
            "final_level_kwh": self.final_level_kwh,
            "usage_percent": self.usage_percent,
            "revenue": self.revenue,
            "shortfall_kwh": self.shortfall_kwh,
            "message": self.message,
            "level": self.level.value if self.level else None,
        }
