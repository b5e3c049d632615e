"""Test sensor entities."""
import pytest

from homeassistant.const import STATE_UNKNOWN
from homeassistant.core import HomeAssistant

from custom_components.solar_battery_calculator.entities.sensors import (
    SENSOR_DEFINITIONS,
)

PREFIX = "sensor.solar_battery_calculator"


@pytest.mark.asyncio
async def test_sensors_created(hass: HomeAssistant, setup_integration):
    """Every sensor definition becomes an entity."""
    for entity_id in (
        f"{PREFIX}_hours_to_full",
        f"{PREFIX}_minutes_to_full",
        f"{PREFIX}_completion_time",
        f"{PREFIX}_charging_status",
        f"{PREFIX}_energy_discharged",
        f"{PREFIX}_final_battery_level",
        f"{PREFIX}_battery_usage",
        f"{PREFIX}_total_revenue",
        f"{PREFIX}_vpp_status",
        f"{PREFIX}_available_for_discharge",
        f"{PREFIX}_reserve_floor",
    ):
        assert hass.states.get(entity_id) is not None, entity_id

    assert len(SENSOR_DEFINITIONS) == 11


@pytest.mark.asyncio
async def test_initial_states(hass: HomeAssistant, setup_integration):
    """Without a level or generation the battery is not charging."""
    hours = hass.states.get(f"{PREFIX}_hours_to_full")
    assert hours.state == STATE_UNKNOWN
    assert hours.attributes["display"] == "∞"

    assert hass.states.get(f"{PREFIX}_completion_time").state == "Never"
    assert hass.states.get(f"{PREFIX}_charging_status").state == (
        "No solar generation - battery will not charge"
    )

    revenue = hass.states.get(f"{PREFIX}_total_revenue")
    assert revenue.state == STATE_UNKNOWN
    assert revenue.attributes["display"] == "$--"
    assert hass.states.get(f"{PREFIX}_vpp_status").state == STATE_UNKNOWN

    assert float(hass.states.get(f"{PREFIX}_reserve_floor").state) == pytest.approx(
        12.896
    )
    assert float(
        hass.states.get(f"{PREFIX}_available_for_discharge").state
    ) == pytest.approx(0.0)


@pytest.mark.asyncio
async def test_states_after_example(hass: HomeAssistant, coordinator):
    """Sensors follow the coordinator after the example is loaded."""
    await coordinator.async_load_example()
    await hass.async_block_till_done()

    hours = hass.states.get(f"{PREFIX}_hours_to_full")
    assert float(hours.state) == pytest.approx(0.79)
    assert hours.attributes["display"] == "0.79"
    assert float(hass.states.get(f"{PREFIX}_minutes_to_full").state) == 48

    completion = hass.states.get(f"{PREFIX}_completion_time")
    assert completion.state.endswith(("am", "pm"))
    assert completion.attributes["timestamp"] is not None

    status = hass.states.get(f"{PREFIX}_charging_status")
    assert status.state == "6.74 kWh remaining to charge"
    assert status.attributes["level"] == "info"

    assert float(
        hass.states.get(f"{PREFIX}_energy_discharged").state
    ) == pytest.approx(5.0)
    assert float(
        hass.states.get(f"{PREFIX}_final_battery_level").state
    ) == pytest.approx(20.5)
    assert float(hass.states.get(f"{PREFIX}_battery_usage").state) == pytest.approx(
        15.5
    )

    revenue = hass.states.get(f"{PREFIX}_total_revenue")
    assert float(revenue.state) == pytest.approx(6.3)
    assert revenue.attributes["display"] == "$6.30"

    vpp = hass.states.get(f"{PREFIX}_vpp_status")
    assert vpp.state == (
        "Discharge will use 15.5% of battery capacity and generate $6.30 revenue"
    )
    assert vpp.attributes["shortfall_kwh"] == 0.0

    assert float(
        hass.states.get(f"{PREFIX}_available_for_discharge").state
    ) == pytest.approx(12.604)


@pytest.mark.asyncio
async def test_validation_error_state(hass: HomeAssistant, coordinator):
    """Invalid battery size blanks the values and shows the message."""
    await coordinator.async_set_input("battery_size", 0)
    await hass.async_block_till_done()

    status = hass.states.get(f"{PREFIX}_charging_status")
    assert status.state == "Please enter a valid battery size"
    assert status.attributes["level"] == "error"

    assert hass.states.get(f"{PREFIX}_completion_time").state == "--:-- --"
    assert hass.states.get(f"{PREFIX}_reserve_floor").state == STATE_UNKNOWN
    assert hass.states.get(f"{PREFIX}_vpp_status").state == (
        "Please enter a valid battery size"
    )


@pytest.mark.asyncio
async def test_limited_discharge_attributes(hass: HomeAssistant, coordinator):
    """A discharge cut short by the reserve reports its shortfall."""
    await coordinator.async_load_example()
    await coordinator.async_set_input("current_level", 15)
    await coordinator.async_set_input("discharge_duration", 60)
    await hass.async_block_till_done()

    vpp = hass.states.get(f"{PREFIX}_vpp_status")
    assert vpp.state == "Discharge limited by reserve level. Shortfall: 7.896 kWh"
    assert vpp.attributes["level"] == "warning"
    assert vpp.attributes["shortfall_kwh"] == pytest.approx(7.896)
