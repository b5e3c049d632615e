"""Data models for Solar Battery Calculator."""

from .data_models import (
    BatteryParameters,
    ChargeInput,
    ChargeResult,
    ChargeState,
    DischargeInput,
    DischargeResult,
    DischargeState,
    StatusLevel,
    ValidationError,
    ValidationErrorKind,
)

__all__ = [
    "BatteryParameters",
    "ChargeInput",
    "ChargeResult",
    "ChargeState",
    "DischargeInput",
    "DischargeResult",
    "DischargeState",
    "StatusLevel",
    "ValidationError",
    "ValidationErrorKind",
]
