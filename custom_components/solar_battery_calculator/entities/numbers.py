"""Number entities - the calculator's input fields.

Values are not restored across restarts; battery size, reserve level,
discharge rate and export price start from the config entry, the rest at 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from homeassistant.components.number import NumberEntity, NumberMode
from homeassistant.const import PERCENTAGE, UnitOfEnergy, UnitOfPower, UnitOfTime
from homeassistant.core import callback
from homeassistant.helpers.dispatcher import async_dispatcher_connect
from homeassistant.helpers.device_registry import DeviceInfo

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

from ..calculator_logging import get_logger
from ..const import (
    DEFAULT_NAME,
    DOMAIN,
    INPUT_BATTERY_SIZE,
    INPUT_CURRENT_LEVEL,
    INPUT_DISCHARGE_DURATION,
    INPUT_DISCHARGE_RATE,
    INPUT_EXPORT_PRICE,
    INPUT_RESERVE_LEVEL,
    INPUT_SOLAR_GENERATION,
    SIGNAL_UPDATE,
)
from ..domain.formatting import CURRENCY
from ..domain.inputs import INPUT_LIMITS


@dataclass
class NumberDefinition:
    """Definition for an input number entity."""

    key: str  # input key, also the unique id suffix
    name: str
    unit: str
    step: float
    icon: str


NUMBER_DEFINITIONS: list[NumberDefinition] = [
    # Battery information
    NumberDefinition(
        key=INPUT_CURRENT_LEVEL,
        name="Current Battery Level",
        unit=UnitOfEnergy.KILO_WATT_HOUR,
        step=0.01,
        icon="mdi:battery-50",
    ),
    NumberDefinition(
        key=INPUT_BATTERY_SIZE,
        name="Battery Size",
        unit=UnitOfEnergy.KILO_WATT_HOUR,
        step=0.01,
        icon="mdi:battery-high",
    ),
    NumberDefinition(
        key=INPUT_RESERVE_LEVEL,
        name="Reserve Level",
        unit=PERCENTAGE,
        step=1,
        icon="mdi:battery-lock",
    ),

    # Solar charging
    NumberDefinition(
        key=INPUT_SOLAR_GENERATION,
        name="Solar Generation",
        unit=UnitOfPower.KILO_WATT,
        step=0.1,
        icon="mdi:solar-power",
    ),

    # VPP discharge
    NumberDefinition(
        key=INPUT_DISCHARGE_DURATION,
        name="Discharge Duration",
        unit=UnitOfTime.MINUTES,
        step=1,
        icon="mdi:timer-outline",
    ),
    NumberDefinition(
        key=INPUT_DISCHARGE_RATE,
        name="Discharge Rate",
        unit=UnitOfPower.KILO_WATT,
        step=0.1,
        icon="mdi:transmission-tower-export",
    ),
    NumberDefinition(
        key=INPUT_EXPORT_PRICE,
        name="Export Price",
        unit=f"{CURRENCY}/{UnitOfEnergy.KILO_WATT_HOUR}",
        step=0.01,
        icon="mdi:cash",
    ),
]


class CalculatorNumber(NumberEntity):
    """Input field of the calculator.

    Setting a value hands it to the coordinator, which recalculates.
    Bulk changes (load example, clear) come back through the update signal.
    """

    _attr_has_entity_name = True
    _attr_should_poll = False
    _attr_mode = NumberMode.BOX

    def __init__(
        self,
        entry_id: str,
        coordinator,  # CalculatorCoordinator
        definition: NumberDefinition,
    ) -> None:
        """Initialize."""
        self._coordinator = coordinator
        self._definition = definition
        self._logger = get_logger()

        self._attr_unique_id = f"{entry_id}_{definition.key}"
        self._attr_name = definition.name
        self._attr_native_unit_of_measurement = definition.unit
        self._attr_native_step = definition.step
        self._attr_native_min_value, self._attr_native_max_value = INPUT_LIMITS[
            definition.key
        ]
        self._attr_icon = definition.icon
        self._attr_native_value = coordinator.state.inputs.get(definition.key)

        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, entry_id)},
            name=DEFAULT_NAME,
            manufacturer="Solar Battery Calculator",
        )

    async def async_added_to_hass(self) -> None:
        """Register for updates."""
        self.async_on_remove(
            async_dispatcher_connect(self.hass, SIGNAL_UPDATE, self._handle_update)
        )

    @callback
    def _handle_update(self) -> None:
        """Sync with coordinator state."""
        self._attr_native_value = self._coordinator.state.inputs.get(self._definition.key)
        self.async_write_ha_state()

    async def async_set_native_value(self, value: float) -> None:
        """Handle value change from UI."""
        self._logger.debug(
            "INPUT_SET_REQUEST",
            key=self._definition.key,
            old_value=self._attr_native_value,
            new_value=value,
        )
        await self._coordinator.async_set_input(self._definition.key, value)

        self._attr_native_value = self._coordinator.state.inputs.get(self._definition.key)
        self.async_write_ha_state()


async def async_setup_numbers(
    hass: HomeAssistant,
    entry: ConfigEntry,
    coordinator,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up number entities."""
    async_add_entities(
        CalculatorNumber(entry.entry_id, coordinator, definition)
        for definition in NUMBER_DEFINITIONS
    )
