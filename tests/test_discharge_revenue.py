"""Tests for the pure VPP discharge engine."""
import pytest

from custom_components.solar_battery_calculator.domain.discharge_revenue import (
    MSG_AT_RESERVE,
    MSG_NEAR_RESERVE,
    DischargeRevenueEngine,
)
from custom_components.solar_battery_calculator.models import (
    BatteryParameters,
    DischargeInput,
    DischargeResult,
    DischargeState,
    StatusLevel,
    ValidationError,
    ValidationErrorKind,
)


def _calc(level, capacity, reserve, duration, rate, price):
    return DischargeRevenueEngine.calculate(level, capacity, reserve, duration, rate, price)


class TestDischargeScenarios:
    """The documented example scenarios."""

    def test_normal_discharge(self):
        """30 min at 10 kW from 25.5 of 32.24 kWh with a 40% reserve."""
        result = _calc(25.5, 32.24, 40, 30, 10, 1.26)

        assert isinstance(result, DischargeResult)
        assert result.state == DischargeState.NORMAL
        assert result.reserve_floor_kwh == pytest.approx(12.896)
        assert result.available_kwh == pytest.approx(12.604)
        assert result.requested_energy_kwh == pytest.approx(5.0)
        assert result.actual_energy_discharged_kwh == pytest.approx(5.0)
        assert result.final_level_kwh == pytest.approx(20.5)
        assert result.usage_percent == pytest.approx(15.508, abs=1e-3)
        assert result.revenue == pytest.approx(6.3)
        assert result.shortfall_kwh == pytest.approx(0.0)
        assert result.level == StatusLevel.INFO
        assert result.message == (
            "Discharge will use 15.5% of battery capacity and generate $6.30 revenue"
        )

    def test_at_reserve(self):
        """Nothing can be exported when the level is below the floor."""
        result = _calc(10, 32.24, 40, 30, 10, 1.26)

        assert result.state == DischargeState.AT_RESERVE
        assert result.available_kwh == 0
        assert result.actual_energy_discharged_kwh == 0
        assert result.final_level_kwh == 10
        assert result.usage_percent == 0
        assert result.revenue == 0
        assert result.shortfall_kwh == pytest.approx(5.0)
        assert result.level == StatusLevel.WARNING
        assert result.message == MSG_AT_RESERVE

    def test_exactly_at_reserve(self):
        """A level equal to the floor has nothing available."""
        result = _calc(2, 10, 20, 30, 2, 1)
        assert result.state == DischargeState.AT_RESERVE

    def test_limited_by_reserve(self):
        """The request is clamped to what sits above the floor."""
        result = _calc(15, 32.24, 40, 60, 10, 1.0)

        assert result.state == DischargeState.LIMITED
        assert result.actual_energy_discharged_kwh == pytest.approx(2.104)
        assert result.final_level_kwh == pytest.approx(12.896)
        assert result.shortfall_kwh == pytest.approx(7.896)
        assert result.revenue == pytest.approx(2.104)
        assert result.level == StatusLevel.WARNING
        assert result.message == (
            "Discharge limited by reserve level. Shortfall: 7.896 kWh"
        )

    def test_near_reserve(self):
        """Final levels within 0.1 kWh of the floor get a warning."""
        result = _calc(3, 10, 20, 60, 0.95, 1.0)

        assert result.state == DischargeState.NEAR_RESERVE
        assert result.final_level_kwh == pytest.approx(2.05)
        assert result.level == StatusLevel.WARNING
        assert result.message == MSG_NEAR_RESERVE

    def test_normal_without_price(self):
        """Without an export price the message leaves out the revenue."""
        result = _calc(8, 10, 0, 30, 2, 0)

        assert result.state == DischargeState.NORMAL
        assert result.revenue == 0
        assert result.message == "Discharge will use 10.0% of battery capacity"

    @pytest.mark.parametrize("duration,rate", [(0, 10), (30, 0), (-5, 10), (30, -1)])
    def test_idle_without_event(self, duration, rate):
        """Missing duration or rate gives an empty idle result."""
        result = _calc(25.5, 32.24, 40, duration, rate, 1.26)

        assert result.state == DischargeState.IDLE
        assert result.is_idle
        assert result.actual_energy_discharged_kwh is None
        assert result.revenue is None
        assert result.message == ""
        assert result.level is None


class TestDischargeValidation:
    """Validation failures."""

    def test_invalid_battery_size(self):
        """Capacity is checked before anything else."""
        result = _calc(-1, 0, 40, 0, 0, 0)

        assert isinstance(result, ValidationError)
        assert result.kind == ValidationErrorKind.INVALID_BATTERY_SIZE

    def test_negative_current_level(self):
        """Negative level with a valid capacity."""
        result = _calc(-1, 32.24, 40, 30, 10, 1.26)

        assert isinstance(result, ValidationError)
        assert result.kind == ValidationErrorKind.NEGATIVE_CURRENT_LEVEL


class TestDischargeProperties:
    """General properties of the engine."""

    @pytest.mark.parametrize("level", [0, 5, 12.896, 14, 20, 25.5, 32.24])
    @pytest.mark.parametrize("duration,rate", [(15, 2), (30, 10), (120, 5), (600, 20)])
    def test_never_crosses_the_floor(self, level, duration, rate):
        """Exported energy stays within the request and above the floor."""
        result = _calc(level, 32.24, 40, duration, rate, 1.26)
        floor = 32.24 * 0.4

        assert 0 <= result.actual_energy_discharged_kwh <= result.requested_energy_kwh
        assert result.final_level_kwh >= min(level, floor) - 1e-9
        assert result.actual_energy_discharged_kwh + result.shortfall_kwh == (
            pytest.approx(result.requested_energy_kwh)
        )
        assert result.final_level_kwh + result.actual_energy_discharged_kwh == (
            pytest.approx(level)
        )

    def test_revenue_scales_with_price(self):
        """Revenue is linear in the export price."""
        single = _calc(25.5, 32.24, 40, 30, 10, 1.0)
        double = _calc(25.5, 32.24, 40, 30, 10, 2.0)
        assert double.revenue == pytest.approx(2 * single.revenue)

    def test_dataclass_entry_point(self):
        """compute_discharge and calculate agree."""
        params = BatteryParameters(
            current_level_kwh=25.5, capacity_kwh=32.24, reserve_percent=40
        )
        event = DischargeInput(
            duration_minutes=30, discharge_rate_kw=10, export_price_per_kwh=1.26
        )

        assert event.requested_energy_kwh == pytest.approx(5.0)
        assert DischargeRevenueEngine.compute_discharge(params, event) == _calc(
            25.5, 32.24, 40, 30, 10, 1.26
        )


@pytest.mark.parametrize(
    "level,expected",
    [(25.5, 12.604), (12.896, 0.0), (5, 0.0), (32.24, 19.344)],
)
def test_available_for_discharge(level, expected):
    """Energy above the reserve floor, never negative."""
    params = BatteryParameters(
        current_level_kwh=level, capacity_kwh=32.24, reserve_percent=40
    )
    assert DischargeRevenueEngine.available_for_discharge(params) == pytest.approx(
        expected
    )
