"""Event bus for calculator updates.

The coordinator emits an event after every calculation or bulk input
change. Events are logged, passed to registered handlers, and turned into
the dispatcher signal the entities listen on.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from homeassistant.helpers.dispatcher import async_dispatcher_send
from homeassistant.util import dt as dt_util

from ..calculator_logging import get_logger
from ..const import SIGNAL_UPDATE

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant


class CalculatorEvent(str, Enum):
    """Event types for the calculator."""

    INPUT_CHANGED = "solar_battery_calculator.input_changed"
    CHARGE_CALCULATED = "solar_battery_calculator.charge_calculated"
    DISCHARGE_CALCULATED = "solar_battery_calculator.discharge_calculated"
    EXAMPLE_LOADED = "solar_battery_calculator.example_loaded"
    INPUTS_CLEARED = "solar_battery_calculator.inputs_cleared"


# Events that change what the entities show
UPDATE_EVENTS = frozenset(
    {
        CalculatorEvent.CHARGE_CALCULATED,
        CalculatorEvent.DISCHARGE_CALCULATED,
        CalculatorEvent.EXAMPLE_LOADED,
        CalculatorEvent.INPUTS_CLEARED,
    }
)


@dataclass
class EventData:
    """Container for event data."""

    event: CalculatorEvent
    timestamp: datetime
    data: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "event": self.event.value,
            "timestamp": self.timestamp.isoformat(),
            "data": self.data,
        }


EventHandler = Callable[[EventData], Awaitable[None]]


class CalculatorEventBus:
    """Event bus for the integration."""

    def __init__(self, hass: HomeAssistant) -> None:
        """Initialize the event bus."""
        self.hass = hass
        self._logger = get_logger()
        self._handlers: dict[CalculatorEvent, list[EventHandler]] = {}

    async def emit(self, event: CalculatorEvent, **data: Any) -> None:
        """Emit an event to handlers and, if it changes the UI, to entities.

        Args:
            event: Event type to emit
            **data: Event data
        """
        event_data = EventData(event=event, timestamp=dt_util.now(), data=data)

        self._logger.debug(f"EVENT_{event.name}", **data)

        for handler in list(self._handlers.get(event, [])):
            try:
                await handler(event_data)
            except Exception as ex:  # noqa: BLE001
                self._logger.error(
                    "EVENT_HANDLER_ERROR",
                    event=event.name,
                    handler=getattr(handler, "__name__", repr(handler)),
                    error=str(ex),
                )

        if event in UPDATE_EVENTS:
            async_dispatcher_send(self.hass, SIGNAL_UPDATE)

    def on(self, event: CalculatorEvent, handler: EventHandler) -> Callable[[], None]:
        """Register an event handler.

        Returns:
            Unsubscribe function
        """
        self._handlers.setdefault(event, []).append(handler)

        def unsubscribe() -> None:
            self.off(event, handler)

        return unsubscribe

    def off(self, event: CalculatorEvent, handler: EventHandler) -> None:
        """Unregister an event handler."""
        if handler in self._handlers.get(event, []):
            self._handlers[event].remove(handler)
