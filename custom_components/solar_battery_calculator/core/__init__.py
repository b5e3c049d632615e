"""Core module for Solar Battery Calculator.

Contains:
- State: current inputs and latest results
- Events: event bus for calculation updates
"""

from .events import CalculatorEvent, CalculatorEventBus
from .state import CalculatorInputs, CalculatorState

__all__ = ["CalculatorEvent", "CalculatorEventBus", "CalculatorInputs", "CalculatorState"]
