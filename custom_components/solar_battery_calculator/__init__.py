"""The Solar Battery Calculator integration.

Two calculators over one set of battery inputs:
- Charge time: how long solar generation takes to fill the battery
- VPP discharge: energy, final level and revenue of a discharge event,
  never going below the reserve level

Layout:
- Pure calculation engines (domain/*.py)
- Current inputs and results (core/state.py)
- Event bus (core/events.py)
- Factory-based entities (entities/*.py)
- Structured logging (calculator_logging/*.py)
"""

from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant

from .const import DOMAIN
from .coordinator import CalculatorCoordinator

_LOGGER = logging.getLogger(__name__)

PLATFORMS: list[Platform] = [
    Platform.SENSOR,
    Platform.NUMBER,
    Platform.BUTTON,
]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Solar Battery Calculator from a config entry."""
    hass.data.setdefault(DOMAIN, {})

    coordinator = CalculatorCoordinator(hass, entry)
    await coordinator.async_init()

    hass.data[DOMAIN][entry.entry_id] = coordinator

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    entry.async_on_unload(entry.add_update_listener(_async_update_listener))

    _LOGGER.info("Solar Battery Calculator initialized")
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    if unload_ok := await hass.config_entries.async_unload_platforms(entry, PLATFORMS):
        coordinator: CalculatorCoordinator = hass.data[DOMAIN].pop(entry.entry_id)
        await coordinator.async_unload()

    return unload_ok


async def _async_update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry when its options change."""
    await hass.config_entries.async_reload(entry.entry_id)
