"""Test number entities."""
import pytest

from homeassistant.components.number import (
    ATTR_VALUE,
    DOMAIN as NUMBER_DOMAIN,
    SERVICE_SET_VALUE,
)
from homeassistant.const import ATTR_ENTITY_ID
from homeassistant.core import HomeAssistant

from custom_components.solar_battery_calculator.models import ChargeState

PREFIX = "number.solar_battery_calculator"


@pytest.mark.asyncio
async def test_numbers_created(hass: HomeAssistant, setup_integration):
    """Each input has a number entity seeded from the config entry."""
    expected = {
        f"{PREFIX}_current_battery_level": 0.0,
        f"{PREFIX}_battery_size": 32.24,
        f"{PREFIX}_reserve_level": 40.0,
        f"{PREFIX}_solar_generation": 0.0,
        f"{PREFIX}_discharge_duration": 0.0,
        f"{PREFIX}_discharge_rate": 10.0,
        f"{PREFIX}_export_price": 1.26,
    }
    for entity_id, value in expected.items():
        state = hass.states.get(entity_id)
        assert state is not None, entity_id
        assert float(state.state) == pytest.approx(value)


@pytest.mark.asyncio
async def test_number_limits(hass: HomeAssistant, setup_integration):
    """Limits come from the input ranges."""
    reserve = hass.states.get(f"{PREFIX}_reserve_level")
    assert reserve.attributes["min"] == 0
    assert reserve.attributes["max"] == 100
    assert reserve.attributes["mode"] == "box"

    duration = hass.states.get(f"{PREFIX}_discharge_duration")
    assert duration.attributes["max"] == 1440


@pytest.mark.asyncio
async def test_set_value_recalculates(hass: HomeAssistant, coordinator):
    """Setting a number feeds the coordinator."""
    await hass.services.async_call(
        NUMBER_DOMAIN,
        SERVICE_SET_VALUE,
        {ATTR_ENTITY_ID: f"{PREFIX}_current_battery_level", ATTR_VALUE: 25.5},
        blocking=True,
    )
    await hass.services.async_call(
        NUMBER_DOMAIN,
        SERVICE_SET_VALUE,
        {ATTR_ENTITY_ID: f"{PREFIX}_solar_generation", ATTR_VALUE: 8.5},
        blocking=True,
    )
    await hass.async_block_till_done()

    assert coordinator.state.inputs.current_level == 25.5
    assert coordinator.state.charge_result.state == ChargeState.CHARGING
    assert float(hass.states.get(f"{PREFIX}_solar_generation").state) == 8.5
    assert hass.states.get("sensor.solar_battery_calculator_charging_status").state == (
        "6.74 kWh remaining to charge"
    )


@pytest.mark.asyncio
async def test_numbers_follow_bulk_changes(hass: HomeAssistant, coordinator):
    """Load example and clear update every number."""
    await coordinator.async_load_example()
    await hass.async_block_till_done()

    assert float(hass.states.get(f"{PREFIX}_current_battery_level").state) == 25.5
    assert float(hass.states.get(f"{PREFIX}_discharge_duration").state) == 30

    await coordinator.async_clear_inputs()
    await hass.async_block_till_done()

    assert float(hass.states.get(f"{PREFIX}_current_battery_level").state) == 0
    assert float(hass.states.get(f"{PREFIX}_battery_size").state) == 32.24
