"""Fixtures for testing."""
import pytest
from pytest_homeassistant_custom_component.common import MockConfigEntry

from homeassistant.core import HomeAssistant

from custom_components.solar_battery_calculator.const import (
    DOMAIN,
    CONF_BATTERY_CAPACITY,
    CONF_RESERVE_LEVEL,
    CONF_DISCHARGE_RATE,
    CONF_EXPORT_PRICE,
)


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations):
    """Enable custom integrations defined in the test dir."""
    yield


@pytest.fixture
def config_data():
    """Config entry data matching the example battery."""
    return {
        CONF_BATTERY_CAPACITY: 32.24,
        CONF_RESERVE_LEVEL: 40.0,
        CONF_DISCHARGE_RATE: 10.0,
        CONF_EXPORT_PRICE: 1.26,
    }


@pytest.fixture
def mock_config_entry(config_data):
    """Mock a config entry."""
    return MockConfigEntry(
        domain=DOMAIN,
        title="Solar Battery Calculator",
        data=config_data,
        entry_id="test_entry_id",
    )


@pytest.fixture
async def setup_integration(hass: HomeAssistant, mock_config_entry):
    """Set up the integration."""
    mock_config_entry.add_to_hass(hass)

    await hass.config_entries.async_setup(mock_config_entry.entry_id)
    await hass.async_block_till_done()

    return mock_config_entry


@pytest.fixture
def coordinator(hass: HomeAssistant, setup_integration):
    """The coordinator of the set up entry."""
    return hass.data[DOMAIN][setup_integration.entry_id]
