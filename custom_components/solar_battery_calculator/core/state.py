"""Single source of truth for the calculator.

Holds the current input values and the latest results. Entities read from
CalculatorState; only the coordinator writes to it. Nothing here is
persisted: the state is rebuilt from the config entry on every setup.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any

from ..domain.discharge_revenue import DischargeRevenueEngine
from ..models.data_models import (
    BatteryParameters,
    ChargeInput,
    ChargeResult,
    DischargeInput,
    DischargeResult,
    ValidationError,
)


@dataclass
class CalculatorInputs:
    """Current values of the seven calculator inputs."""

    current_level: float = 0.0
    battery_size: float = 0.0
    reserve_level: float = 0.0
    solar_generation: float = 0.0
    discharge_duration: float = 0.0
    discharge_rate: float = 0.0
    export_price: float = 0.0

    def get(self, key: str) -> float:
        """Get an input by key."""
        if key not in self.keys():
            raise KeyError(key)
        return getattr(self, key)

    def set(self, key: str, value: float) -> None:
        """Set an input by key."""
        if key not in self.keys():
            raise KeyError(key)
        setattr(self, key, value)

    @staticmethod
    def keys() -> tuple[str, ...]:
        """All input keys."""
        return tuple(f.name for f in fields(CalculatorInputs))

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary."""
        return {key: getattr(self, key) for key in self.keys()}

    @property
    def battery(self) -> BatteryParameters:
        """Battery parameters built from the current values."""
        return BatteryParameters(
            current_level_kwh=self.current_level,
            capacity_kwh=self.battery_size,
            reserve_percent=self.reserve_level,
        )

    @property
    def charge(self) -> ChargeInput:
        """Solar charging input built from the current values."""
        return ChargeInput(solar_generation_kw=self.solar_generation)

    @property
    def discharge(self) -> DischargeInput:
        """Discharge event input built from the current values."""
        return DischargeInput(
            duration_minutes=self.discharge_duration,
            discharge_rate_kw=self.discharge_rate,
            export_price_per_kwh=self.export_price,
        )


@dataclass
class CalculatorState:
    """All calculator state."""

    inputs: CalculatorInputs = field(default_factory=CalculatorInputs)
    charge_result: ChargeResult | ValidationError | None = None
    discharge_result: DischargeResult | ValidationError | None = None
    invalid_inputs: list[str] = field(default_factory=list)
    last_calculated: datetime | None = None

    @property
    def available_for_discharge_kwh(self) -> float | None:
        """Energy above the reserve floor, None if the battery is unusable."""
        battery = self.inputs.battery
        if battery.capacity_kwh <= 0 or battery.current_level_kwh < 0:
            return None
        return DischargeRevenueEngine.available_for_discharge(battery)

    @property
    def reserve_floor_kwh(self) -> float | None:
        """Reserve floor in kWh, None without a valid battery size."""
        battery = self.inputs.battery
        if battery.capacity_kwh <= 0:
            return None
        return battery.reserve_floor_kwh

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "inputs": self.inputs.to_dict(),
            "charge_result": self.charge_result.to_dict() if self.charge_result else None,
            "discharge_result": (
                self.discharge_result.to_dict() if self.discharge_result else None
            ),
            "invalid_inputs": list(self.invalid_inputs),
            "last_calculated": (
                self.last_calculated.isoformat() if self.last_calculated else None
            ),
        }
