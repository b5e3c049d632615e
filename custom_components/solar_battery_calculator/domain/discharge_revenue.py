"""Pure VPP discharge and revenue logic.

Given the battery parameters and a discharge event (duration, rate,
export price) this works out how much energy can actually be exported
without going below the reserve level, where the battery ends up and how
much the export earns.

It has NO dependencies on Home Assistant.
"""

from __future__ import annotations

from ..models.data_models import (
    BatteryParameters,
    DischargeInput,
    DischargeResult,
    DischargeState,
    StatusLevel,
    ValidationError,
)
from .formatting import format_currency
from .validation import validate_battery

# Final levels within this distance of the reserve floor get a warning
NEAR_RESERVE_THRESHOLD_KWH = 0.1

MSG_AT_RESERVE = "Battery level is at or below reserve level"
MSG_NEAR_RESERVE = "Discharge will bring battery close to reserve level"


class DischargeRevenueEngine:
    """VPP discharge calculator."""

    @staticmethod
    def available_for_discharge(params: BatteryParameters) -> float:
        """Energy stored above the reserve floor."""
        return max(0.0, params.current_level_kwh - params.reserve_floor_kwh)

    @staticmethod
    def compute_discharge(
        params: BatteryParameters,
        discharge_input: DischargeInput,
    ) -> DischargeResult | ValidationError:
        """Calculate a VPP discharge event.

        Algorithm:
        1. Validate battery size and current level
        2. Skip (idle) when duration or rate is not positive
        3. Energy available = level above the reserve floor
        4. Requested energy = duration x rate, clamped to what is available
        5. Derive final level, capacity usage, revenue and status

        Args:
            params: Battery level, capacity and reserve percentage
            discharge_input: Duration, discharge rate and export price

        Returns:
            DischargeResult, or ValidationError for unusable battery parameters
        """
        error = validate_battery(params.current_level_kwh, params.capacity_kwh)
        if error is not None:
            return error

        if discharge_input.duration_minutes <= 0 or discharge_input.discharge_rate_kw <= 0:
            return DischargeResult(state=DischargeState.IDLE)

        reserve_floor = params.reserve_floor_kwh
        available = DischargeRevenueEngine.available_for_discharge(params)
        requested = discharge_input.requested_energy_kwh

        if available <= 0:
            return DischargeResult(
                state=DischargeState.AT_RESERVE,
                reserve_floor_kwh=reserve_floor,
                available_kwh=0.0,
                requested_energy_kwh=requested,
                actual_energy_discharged_kwh=0.0,
                final_level_kwh=params.current_level_kwh,
                usage_percent=0.0,
                revenue=0.0,
                shortfall_kwh=requested,
                message=MSG_AT_RESERVE,
                level=StatusLevel.WARNING,
            )

        actual = min(requested, available)
        final_level = params.current_level_kwh - actual
        usage_percent = actual / params.capacity_kwh * 100
        revenue = actual * discharge_input.export_price_per_kwh
        shortfall = requested - actual

        if actual < requested:
            state = DischargeState.LIMITED
            message = (
                "Discharge limited by reserve level. "
                f"Shortfall: {shortfall:.3f} kWh"
            )
            level = StatusLevel.WARNING
        elif final_level <= reserve_floor + NEAR_RESERVE_THRESHOLD_KWH:
            state = DischargeState.NEAR_RESERVE
            message = MSG_NEAR_RESERVE
            level = StatusLevel.WARNING
        else:
            state = DischargeState.NORMAL
            message = f"Discharge will use {usage_percent:.1f}% of battery capacity"
            if discharge_input.export_price_per_kwh > 0:
                message += f" and generate {format_currency(revenue)} revenue"
            level = StatusLevel.INFO

        return DischargeResult(
            state=state,
            reserve_floor_kwh=reserve_floor,
            available_kwh=available,
            requested_energy_kwh=requested,
            actual_energy_discharged_kwh=actual,
            final_level_kwh=final_level,
            usage_percent=usage_percent,
            revenue=revenue,
            shortfall_kwh=shortfall,
            message=message,
            level=level,
        )

    @staticmethod
    def calculate(
        current_level_kwh: float,
        capacity_kwh: float,
        reserve_percent: float,
        duration_minutes: float,
        discharge_rate_kw: float,
        export_price_per_kwh: float,
    ) -> DischargeResult | ValidationError:
        """Scalar form of compute_discharge."""
        return DischargeRevenueEngine.compute_discharge(
            BatteryParameters(
                current_level_kwh=current_level_kwh,
                capacity_kwh=capacity_kwh,
                reserve_percent=reserve_percent,
            ),
            DischargeInput(
                duration_minutes=duration_minutes,
                discharge_rate_kw=discharge_rate_kw,
                export_price_per_kwh=export_price_per_kwh,
            ),
        )
