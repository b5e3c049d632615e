"""Domain logic module - pure calculation logic without HA dependencies.

Everything in this package takes inputs and returns fresh result records,
with no side effects and no state kept between calls.
"""

from .charge_time import ChargeTimeEngine
from .discharge_revenue import NEAR_RESERVE_THRESHOLD_KWH, DischargeRevenueEngine

__all__ = ["ChargeTimeEngine", "DischargeRevenueEngine", "NEAR_RESERVE_THRESHOLD_KWH"]
