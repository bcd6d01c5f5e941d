"""Platform subpackage.

- Cross-cohort monthly aggregation of fees, holdings and participants
- Treasury compounding of the aggregated fee stream
- End-to-end runner
"""

from .aggregate import PlatformMonthlySnapshot, aggregate_monthly, platform_frame
from .treasury import PlatformTreasurySnapshot, compound_treasury
from .runner import SimulationResult, run_simulation

__all__ = [
    "PlatformMonthlySnapshot",
    "aggregate_monthly",
    "platform_frame",
    "PlatformTreasurySnapshot",
    "compound_treasury",
    "SimulationResult",
    "run_simulation",
]
