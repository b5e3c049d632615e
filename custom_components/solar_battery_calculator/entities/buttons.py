"""Button entities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.components.button import ButtonEntity
from homeassistant.helpers.device_registry import DeviceInfo

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

from ..calculator_logging import get_logger
from ..const import DEFAULT_NAME, DOMAIN


class CalculatorButton(ButtonEntity):
    """Base class for calculator buttons."""

    _attr_has_entity_name = True

    def __init__(
        self,
        entry_id: str,
        coordinator,  # CalculatorCoordinator
        key: str,
        name: str,
    ) -> None:
        """Initialize."""
        self._coordinator = coordinator
        self._logger = get_logger()

        self._attr_unique_id = f"{entry_id}_{key}"
        self._attr_name = name

        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, entry_id)},
            name=DEFAULT_NAME,
            manufacturer="Solar Battery Calculator",
        )


class RecalculateButton(CalculatorButton):
    """Button to rerun both calculations."""

    _attr_icon = "mdi:refresh"

    def __init__(self, entry_id: str, coordinator) -> None:
        """Initialize."""
        super().__init__(entry_id, coordinator, "recalculate", "Recalculate")

    async def async_press(self) -> None:
        """Handle button press."""
        self._logger.info("RECALCULATE_BUTTON_PRESSED")
        await self._coordinator.async_recalculate()


class LoadExampleButton(CalculatorButton):
    """Button to fill in the example values."""

    _attr_icon = "mdi:clipboard-text-outline"

    def __init__(self, entry_id: str, coordinator) -> None:
        """Initialize."""
        super().__init__(entry_id, coordinator, "load_example", "Load Example")

    async def async_press(self) -> None:
        """Handle button press."""
        self._logger.info("LOAD_EXAMPLE_BUTTON_PRESSED")
        await self._coordinator.async_load_example()


class ClearInputsButton(CalculatorButton):
    """Button to clear the level, generation and discharge inputs."""

    _attr_icon = "mdi:eraser"

    def __init__(self, entry_id: str, coordinator) -> None:
        """Initialize."""
        super().__init__(entry_id, coordinator, "clear_inputs", "Clear Inputs")

    async def async_press(self) -> None:
        """Handle button press."""
        self._logger.info("CLEAR_INPUTS_BUTTON_PRESSED")
        await self._coordinator.async_clear_inputs()


async def async_setup_buttons(
    hass: HomeAssistant,
    entry: ConfigEntry,
    coordinator,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up button entities."""
    async_add_entities([
        RecalculateButton(entry.entry_id, coordinator),
        LoadExampleButton(entry.entry_id, coordinator),
        ClearInputsButton(entry.entry_id, coordinator),
    ])
