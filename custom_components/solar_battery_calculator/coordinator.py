"""Calculator coordinator - thin orchestrator between HA and the engines.

It:
- Builds the initial state from the config entry
- Feeds input changes to the right engine(s)
- Refreshes the completion time once a minute
- Registers the integration's services

All calculation logic lives in the domain modules.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

import voluptuous as vol

from homeassistant.core import ServiceCall, ServiceResponse, SupportsResponse
import homeassistant.helpers.config_validation as cv
from homeassistant.helpers.event import async_track_time_change
from homeassistant.util import dt as dt_util

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

from .calculator_logging import get_logger
from .const import (
    ATTR_CAPACITY,
    ATTR_CURRENT_LEVEL,
    ATTR_DISCHARGE_RATE,
    ATTR_DURATION,
    ATTR_EXPORT_PRICE,
    ATTR_NOW,
    ATTR_RESERVE_PERCENT,
    ATTR_SOLAR_RATE,
    BATTERY_INPUTS,
    CHARGE_INPUTS,
    CONF_BATTERY_CAPACITY,
    CONF_DISCHARGE_RATE,
    CONF_EXPORT_PRICE,
    CONF_FILE_LOGGING,
    CONF_RESERVE_LEVEL,
    DEFAULT_BATTERY_CAPACITY,
    DEFAULT_DISCHARGE_RATE,
    DEFAULT_EXPORT_PRICE,
    DEFAULT_FILE_LOGGING,
    DEFAULT_RESERVE_LEVEL,
    DISCHARGE_INPUTS,
    DOMAIN,
    SERVICE_CALCULATE_CHARGE_TIME,
    SERVICE_CALCULATE_DISCHARGE,
    SERVICE_CLEAR_INPUTS,
    SERVICE_LOAD_EXAMPLE,
    SERVICE_RECALCULATE,
)
from .core.events import CalculatorEvent, CalculatorEventBus
from .core.state import CalculatorInputs, CalculatorState
from .domain.charge_time import ChargeTimeEngine
from .domain.discharge_revenue import DischargeRevenueEngine
from .domain.formatting import charge_display, discharge_display
from .domain.inputs import (
    CLEARABLE_INPUTS,
    EXAMPLE_INPUTS,
    find_out_of_range,
    is_unparsable,
    parse_number,
)
from .models.data_models import (
    ChargeResult,
    DischargeResult,
    ValidationError,
)

CHARGE_TIME_SCHEMA = vol.Schema(
    {
        vol.Required(ATTR_CURRENT_LEVEL): parse_number,
        vol.Required(ATTR_CAPACITY): parse_number,
        vol.Optional(ATTR_SOLAR_RATE, default=0.0): parse_number,
        vol.Optional(ATTR_NOW): cv.datetime,
    }
)

DISCHARGE_SCHEMA = vol.Schema(
    {
        vol.Required(ATTR_CURRENT_LEVEL): parse_number,
        vol.Required(ATTR_CAPACITY): parse_number,
        vol.Optional(ATTR_RESERVE_PERCENT, default=0.0): parse_number,
        vol.Optional(ATTR_DURATION, default=0.0): parse_number,
        vol.Optional(ATTR_DISCHARGE_RATE, default=0.0): parse_number,
        vol.Optional(ATTR_EXPORT_PRICE, default=0.0): parse_number,
    }
)


class CalculatorCoordinator:
    """Thin orchestrator for the Solar Battery Calculator."""

    def __init__(self, hass: HomeAssistant, entry: ConfigEntry) -> None:
        """Initialize the coordinator."""
        self.hass = hass
        self.entry = entry
        self._listeners = []
        self._logger = get_logger()
        # Input keys whose last raw value was not a number
        self._unparsable: set[str] = set()

        self.state = self._create_state_from_config()
        self.events = CalculatorEventBus(hass)

        self._logger.info("COORDINATOR_INIT", inputs=self.state.inputs.to_dict())

    def _get_config(self, key: str, default: Any) -> Any:
        return self.entry.options.get(key, self.entry.data.get(key, default))

    def _create_state_from_config(self) -> CalculatorState:
        """Create the initial state from the config entry."""
        return CalculatorState(
            inputs=CalculatorInputs(
                battery_size=float(
                    self._get_config(CONF_BATTERY_CAPACITY, DEFAULT_BATTERY_CAPACITY)
                ),
                reserve_level=float(
                    self._get_config(CONF_RESERVE_LEVEL, DEFAULT_RESERVE_LEVEL)
                ),
                discharge_rate=float(
                    self._get_config(CONF_DISCHARGE_RATE, DEFAULT_DISCHARGE_RATE)
                ),
                export_price=float(
                    self._get_config(CONF_EXPORT_PRICE, DEFAULT_EXPORT_PRICE)
                ),
            )
        )

    async def async_init(self) -> None:
        """Initialize async components."""
        if self._get_config(CONF_FILE_LOGGING, DEFAULT_FILE_LOGGING):
            await self.hass.async_add_executor_job(self._logger.start_file_logging)

        self.calculate_all()

        # Every minute - move the completion time along with the clock
        self._listeners.append(
            async_track_time_change(self.hass, self._handle_refresh, second=0)
        )

        self._register_services()
        self._logger.info("COORDINATOR_READY")

    def _register_services(self) -> None:
        """Register HA services."""
        self.hass.services.async_register(
            DOMAIN, SERVICE_RECALCULATE, self._handle_recalculate
        )
        self.hass.services.async_register(
            DOMAIN, SERVICE_LOAD_EXAMPLE, self._handle_load_example
        )
        self.hass.services.async_register(
            DOMAIN, SERVICE_CLEAR_INPUTS, self._handle_clear_inputs
        )
        self.hass.services.async_register(
            DOMAIN,
            SERVICE_CALCULATE_CHARGE_TIME,
            self._handle_calculate_charge_time,
            schema=CHARGE_TIME_SCHEMA,
            supports_response=SupportsResponse.ONLY,
        )
        self.hass.services.async_register(
            DOMAIN,
            SERVICE_CALCULATE_DISCHARGE,
            self._handle_calculate_discharge,
            schema=DISCHARGE_SCHEMA,
            supports_response=SupportsResponse.ONLY,
        )

    async def async_unload(self) -> None:
        """Unload the coordinator."""
        for remove in self._listeners:
            remove()
        self._listeners.clear()

        for service in (
            SERVICE_RECALCULATE,
            SERVICE_LOAD_EXAMPLE,
            SERVICE_CLEAR_INPUTS,
            SERVICE_CALCULATE_CHARGE_TIME,
            SERVICE_CALCULATE_DISCHARGE,
        ):
            self.hass.services.async_remove(DOMAIN, service)

        if self._logger.file_logging_enabled:
            await self.hass.async_add_executor_job(self._logger.stop_file_logging)

        self._logger.info("COORDINATOR_UNLOADED")

    # ========== Calculations ==========

    def calculate_charging(
        self, now: datetime | None = None
    ) -> ChargeResult | ValidationError:
        """Run the charge time engine on the current inputs."""
        if now is None:
            now = dt_util.now()
        inputs = self.state.inputs

        result = ChargeTimeEngine.compute(inputs.battery, inputs.charge, now)
        self.state.charge_result = result
        self.state.last_calculated = now

        self._logger.debug(
            "CHARGE_CALCULATED",
            state=getattr(result, "state", result.__class__.__name__),
            message=result.message,
        )
        return result

    def calculate_discharge(self) -> DischargeResult | ValidationError:
        """Run the discharge engine on the current inputs."""
        inputs = self.state.inputs

        result = DischargeRevenueEngine.compute_discharge(inputs.battery, inputs.discharge)
        self.state.discharge_result = result
        self.state.last_calculated = dt_util.now()

        self._logger.debug(
            "DISCHARGE_CALCULATED",
            state=getattr(result, "state", result.__class__.__name__),
            message=result.message,
        )
        return result

    def calculate_all(self) -> None:
        """Run both engines."""
        self.calculate_charging()
        self.calculate_discharge()

    async def async_recalculate(
        self, charge: bool = True, discharge: bool = True
    ) -> None:
        """Run the selected engines and notify listeners."""
        if charge:
            result = self.calculate_charging()
            await self.events.emit(
                CalculatorEvent.CHARGE_CALCULATED, **charge_display(result)
            )
        if discharge:
            result = self.calculate_discharge()
            await self.events.emit(
                CalculatorEvent.DISCHARGE_CALCULATED, **discharge_display(result)
            )

    # ========== Input Handling ==========

    async def async_set_input(self, key: str, value: Any) -> None:
        """Store a new input value and recalculate what depends on it.

        Battery inputs feed both engines, solar generation only the charge
        engine and the discharge fields only the discharge engine.
        """
        number = parse_number(value)
        self.state.inputs.set(key, number)
        if is_unparsable(value):
            self._unparsable.add(key)
        else:
            self._unparsable.discard(key)
        self._check_ranges()

        self._logger.info("INPUT_CHANGED", key=key, value=number)
        await self.events.emit(CalculatorEvent.INPUT_CHANGED, key=key, value=number)

        await self.async_recalculate(
            charge=key in BATTERY_INPUTS or key in CHARGE_INPUTS,
            discharge=key in BATTERY_INPUTS or key in DISCHARGE_INPUTS,
        )

    async def async_load_example(self) -> None:
        """Load the example battery and discharge values."""
        for key, value in EXAMPLE_INPUTS.items():
            self.state.inputs.set(key, value)
        self._unparsable.clear()
        self._check_ranges()

        self._logger.info("EXAMPLE_LOADED")
        await self.async_recalculate()
        await self.events.emit(CalculatorEvent.EXAMPLE_LOADED, **EXAMPLE_INPUTS)

    async def async_clear_inputs(self) -> None:
        """Clear every input except battery size and reserve level."""
        for key in CLEARABLE_INPUTS:
            self.state.inputs.set(key, 0.0)
        self._unparsable.difference_update(CLEARABLE_INPUTS)
        self._check_ranges()

        self._logger.info("INPUTS_CLEARED")
        await self.async_recalculate()
        await self.events.emit(CalculatorEvent.INPUTS_CLEARED)

    def _check_ranges(self) -> None:
        """Flag inputs that are out of range or were not numbers."""
        out_of_range = find_out_of_range(self.state.inputs.to_dict())
        invalid = [
            key
            for key in CalculatorInputs.keys()
            if key in out_of_range or key in self._unparsable
        ]
        if invalid:
            self._logger.warning(
                "INPUTS_INVALID", keys=invalid, unparsable=sorted(self._unparsable)
            )
        self.state.invalid_inputs = invalid

    # ========== Event Handlers ==========

    async def _handle_refresh(self, now: datetime) -> None:
        """Recompute the completion time as the clock moves on.

        Only a charging result has a completion time that depends on now.
        """
        result = self.state.charge_result
        if not isinstance(result, ChargeResult) or not result.is_charging:
            return

        result = self.calculate_charging(dt_util.as_local(now))
        await self.events.emit(
            CalculatorEvent.CHARGE_CALCULATED, **charge_display(result)
        )

    async def _handle_recalculate(self, call: ServiceCall) -> None:
        await self.async_recalculate()

    async def _handle_load_example(self, call: ServiceCall) -> None:
        await self.async_load_example()

    async def _handle_clear_inputs(self, call: ServiceCall) -> None:
        await self.async_clear_inputs()

    async def _handle_calculate_charge_time(self, call: ServiceCall) -> ServiceResponse:
        """Run the charge time engine on the service call's values."""
        now = call.data.get(ATTR_NOW)
        if now is None:
            now = dt_util.now()
        elif now.tzinfo is None:
            # Naive times are wall-clock times in the configured zone
            now = now.replace(tzinfo=dt_util.DEFAULT_TIME_ZONE)
        else:
            now = dt_util.as_local(now)

        result = ChargeTimeEngine.compute_charge_time(
            call.data[ATTR_CURRENT_LEVEL],
            call.data[ATTR_CAPACITY],
            call.data[ATTR_SOLAR_RATE],
            now,
        )
        return {**result.to_dict(), "display": charge_display(result)}

    async def _handle_calculate_discharge(self, call: ServiceCall) -> ServiceResponse:
        """Run the discharge engine on the service call's values."""
        result = DischargeRevenueEngine.calculate(
            call.data[ATTR_CURRENT_LEVEL],
            call.data[ATTR_CAPACITY],
            call.data[ATTR_RESERVE_PERCENT],
            call.data[ATTR_DURATION],
            call.data[ATTR_DISCHARGE_RATE],
            call.data[ATTR_EXPORT_PRICE],
        )
        return {**result.to_dict(), "display": discharge_display(result)}
