"""Sensor entities using factory pattern.

Each result field is one SensorDefinition. Numeric sensors report the
rounded value (unknown when it cannot be computed) and carry the string the
calculator would display in a ``display`` attribute.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorStateClass,
)
from homeassistant.const import PERCENTAGE, UnitOfEnergy, UnitOfTime
from homeassistant.core import callback
from homeassistant.helpers.dispatcher import async_dispatcher_connect
from homeassistant.helpers.device_registry import DeviceInfo

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback
    from ..core.state import CalculatorState

from ..const import DEFAULT_NAME, DOMAIN, SIGNAL_UPDATE
from ..domain.formatting import (
    CURRENCY,
    charge_display,
    discharge_display,
    format_energy,
)
from ..models.data_models import ChargeResult, DischargeResult


def _charge(state: CalculatorState) -> ChargeResult | None:
    result = state.charge_result
    return result if isinstance(result, ChargeResult) else None


def _discharge(state: CalculatorState) -> DischargeResult | None:
    result = state.discharge_result
    if isinstance(result, DischargeResult) and not result.is_idle:
        return result
    return None


def _rounded(value: float | None, digits: int) -> float | None:
    """Round a finite value, None for blanks and infinity."""
    if value is None or not math.isfinite(value):
        return None
    return round(value, digits)


def _status_attrs(result: Any, state: CalculatorState) -> dict[str, Any]:
    level = getattr(result, "level", None)
    return {
        "level": level.value if level else None,
        "invalid_inputs": list(state.invalid_inputs),
    }


@dataclass
class SensorDefinition:
    """Definition for a sensor entity."""

    key: str  # Unique identifier
    name: str  # Display name
    value_fn: Callable[[Any], Any]  # Function to get value from state
    attrs_fn: Callable[[Any], dict[str, Any]] | None = None
    unit: str | None = None
    device_class: SensorDeviceClass | None = None
    state_class: SensorStateClass | None = None
    icon: str | None = None


SENSOR_DEFINITIONS: list[SensorDefinition] = [
    # Solar charging
    SensorDefinition(
        key="hours_to_full",
        name="Hours to Full",
        value_fn=lambda s: _rounded(_charge(s) and _charge(s).hours_to_full, 2),
        attrs_fn=lambda s: {"display": charge_display(s.charge_result)["hours"]},
        unit=UnitOfTime.HOURS,
        state_class=SensorStateClass.MEASUREMENT,
        icon="mdi:timer-sand",
    ),
    SensorDefinition(
        key="minutes_to_full",
        name="Minutes to Full",
        value_fn=lambda s: _rounded(_charge(s) and _charge(s).minutes_to_full, 0),
        attrs_fn=lambda s: {"display": charge_display(s.charge_result)["minutes"]},
        unit=UnitOfTime.MINUTES,
        state_class=SensorStateClass.MEASUREMENT,
        icon="mdi:timer-outline",
    ),
    SensorDefinition(
        key="completion_time",
        name="Completion Time",
        value_fn=lambda s: charge_display(s.charge_result)["completion_time"],
        attrs_fn=lambda s: {
            "timestamp": (
                _charge(s).completion_time.isoformat()
                if _charge(s) and _charge(s).completion_time
                else None
            )
        },
        icon="mdi:clock-end",
    ),
    SensorDefinition(
        key="charging_status",
        name="Charging Status",
        value_fn=lambda s: s.charge_result.message if s.charge_result else None,
        attrs_fn=lambda s: _status_attrs(s.charge_result, s),
        icon="mdi:information-outline",
    ),

    # VPP discharge
    SensorDefinition(
        key="energy_discharged",
        name="Energy Discharged",
        value_fn=lambda s: _rounded(
            _discharge(s) and _discharge(s).actual_energy_discharged_kwh, 3
        ),
        attrs_fn=lambda s: {
            "display": discharge_display(s.discharge_result)["energy_discharged"]
        },
        unit=UnitOfEnergy.KILO_WATT_HOUR,
        device_class=SensorDeviceClass.ENERGY,
        icon="mdi:transmission-tower-export",
    ),
    SensorDefinition(
        key="final_battery_level",
        name="Final Battery Level",
        value_fn=lambda s: _rounded(_discharge(s) and _discharge(s).final_level_kwh, 3),
        attrs_fn=lambda s: {
            "display": discharge_display(s.discharge_result)["final_level"]
        },
        unit=UnitOfEnergy.KILO_WATT_HOUR,
        device_class=SensorDeviceClass.ENERGY_STORAGE,
        state_class=SensorStateClass.MEASUREMENT,
    ),
    SensorDefinition(
        key="battery_usage",
        name="Battery Usage",
        value_fn=lambda s: _rounded(_discharge(s) and _discharge(s).usage_percent, 1),
        attrs_fn=lambda s: {"display": discharge_display(s.discharge_result)["usage"]},
        unit=PERCENTAGE,
        state_class=SensorStateClass.MEASUREMENT,
        icon="mdi:battery-arrow-down",
    ),
    SensorDefinition(
        key="total_revenue",
        name="Total Revenue",
        value_fn=lambda s: _rounded(_discharge(s) and _discharge(s).revenue, 2),
        attrs_fn=lambda s: {
            "display": discharge_display(s.discharge_result)["revenue"]
        },
        unit=CURRENCY,
        device_class=SensorDeviceClass.MONETARY,
        icon="mdi:cash-plus",
    ),
    SensorDefinition(
        key="vpp_status",
        name="VPP Status",
        value_fn=lambda s: (
            s.discharge_result.message
            if s.discharge_result and s.discharge_result.message
            else None
        ),
        attrs_fn=lambda s: {
            **_status_attrs(s.discharge_result, s),
            "shortfall_kwh": _rounded(
                _discharge(s) and _discharge(s).shortfall_kwh, 3
            ),
        },
        icon="mdi:information-outline",
    ),

    # Battery information
    SensorDefinition(
        key="available_for_discharge",
        name="Available for Discharge",
        value_fn=lambda s: _rounded(s.available_for_discharge_kwh, 3),
        attrs_fn=lambda s: {"display": format_energy(s.available_for_discharge_kwh)},
        unit=UnitOfEnergy.KILO_WATT_HOUR,
        device_class=SensorDeviceClass.ENERGY_STORAGE,
        state_class=SensorStateClass.MEASUREMENT,
    ),
    SensorDefinition(
        key="reserve_floor",
        name="Reserve Floor",
        value_fn=lambda s: _rounded(s.reserve_floor_kwh, 3),
        attrs_fn=lambda s: {"display": format_energy(s.reserve_floor_kwh)},
        unit=UnitOfEnergy.KILO_WATT_HOUR,
        device_class=SensorDeviceClass.ENERGY_STORAGE,
        state_class=SensorStateClass.MEASUREMENT,
        icon="mdi:battery-lock",
    ),
]


class CalculatorSensor(SensorEntity):
    """Generic calculator sensor entity."""

    _attr_has_entity_name = True
    _attr_should_poll = False

    def __init__(
        self,
        entry_id: str,
        state: CalculatorState,
        definition: SensorDefinition,
    ) -> None:
        """Initialize the sensor."""
        self._state = state
        self._definition = definition

        self._attr_unique_id = f"{entry_id}_{definition.key}"
        self._attr_name = definition.name
        self._attr_native_unit_of_measurement = definition.unit
        self._attr_device_class = definition.device_class
        self._attr_state_class = definition.state_class
        if definition.icon:
            self._attr_icon = definition.icon

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
        self._handle_update()

    @callback
    def _handle_update(self) -> None:
        """Handle state update."""
        self._attr_native_value = self._definition.value_fn(self._state)
        if self._definition.attrs_fn:
            self._attr_extra_state_attributes = self._definition.attrs_fn(self._state)
        self.async_write_ha_state()


async def async_setup_sensors(
    hass: HomeAssistant,
    entry: ConfigEntry,
    state: CalculatorState,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up all sensor entities."""
    async_add_entities(
        CalculatorSensor(entry.entry_id, state, definition)
        for definition in SENSOR_DEFINITIONS
    )
