"""Per-participant accumulation (contributions, yield, platform fees)."""

from .participant import (
    AccumulationSnapshot,
    MonthFlows,
    accumulate_month,
    accumulation_frame,
    simulate_participant,
)

__all__ = [
    "AccumulationSnapshot",
    "MonthFlows",
    "accumulate_month",
    "simulate_participant",
    "accumulation_frame",
]
