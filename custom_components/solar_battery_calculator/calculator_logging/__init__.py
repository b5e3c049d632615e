"""Structured logging for Solar Battery Calculator."""

from .unified_logger import CalculatorLogger, get_logger

__all__ = ["CalculatorLogger", "get_logger"]
