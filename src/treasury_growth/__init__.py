"""Cohort treasury growth (treasury_growth) package.

Deterministic projection of a Bitcoin-denominated savings product across
monthly user cohorts, and of the platform treasury funded by their fees.

The package is organized into submodules:
- treasury_growth.market: decaying price-growth curve and monthly compounding
- treasury_growth.accumulation: per-participant monthly accumulation
- treasury_growth.cohorts: participant timeline and cohort composition
- treasury_growth.platform: cross-cohort aggregation, treasury compounding, runner
- treasury_growth.reporting: summary tables
- treasury_growth.utils: config dataclasses, validation, IO

Most users will interact via scripts in scripts/ or the four operations
re-exported here.
"""

from .accumulation.participant import simulate_participant
from .cohorts.composer import build_cohort_set
from .platform.aggregate import aggregate_monthly
from .platform.treasury import compound_treasury
from .utils.config import SimulationConfig

__all__ = [
    "SimulationConfig",
    "simulate_participant",
    "build_cohort_set",
    "aggregate_monthly",
    "compound_treasury",
]
