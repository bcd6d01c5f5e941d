"""treasury_growth.platform.treasury

Platform treasury compounding.

Collected fees are reinvested as platform-owned working capital that earns
its own yield, independent of the yield paid to participants:

    capital[0]  = 0
    earned[m]   = capital[m] * monthly_equivalent(platform_yield_rate)
    ending[m]   = capital[m] + total_fee[m] + earned[m]
    capital[m+1] = ending[m]

The recurrence is a strict left-to-right fold over months. With non-negative
fees and a non-negative yield rate the ending principal is non-decreasing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Sequence

from treasury_growth.market.growth_curve import monthly_equivalent
from treasury_growth.platform.aggregate import PlatformMonthlySnapshot
from treasury_growth.utils.validation import PreconditionError, require_finite

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlatformTreasurySnapshot(PlatformMonthlySnapshot):
    """Monthly snapshot extended with the treasury recurrence."""

    working_capital: float = 0.0
    earned_yield: float = 0.0
    ending_principal: float = 0.0


def _monthly_fields(snap: PlatformMonthlySnapshot) -> Dict[str, Any]:
    # treasury snapshots are accepted too; their recurrence fields are recomputed
    return {f.name: getattr(snap, f.name) for f in fields(PlatformMonthlySnapshot)}


def compound_treasury(
    monthly: Sequence[PlatformMonthlySnapshot],
    platform_yield_rate: float,
) -> List[PlatformTreasurySnapshot]:
    """Compound the monthly fee stream at ``platform_yield_rate`` (annual)."""

    rate = monthly_equivalent(require_finite(platform_yield_rate, "platform_yield_rate"))

    out: List[PlatformTreasurySnapshot] = []
    capital = 0.0
    for i, snap in enumerate(monthly):
        if snap.month != i:
            raise PreconditionError(f"monthly snapshots must be in month order; got month {snap.month} at {i}")
        earned = capital * rate
        ending = capital + snap.total_fee + earned
        out.append(
            PlatformTreasurySnapshot(
                **_monthly_fields(snap),
                working_capital=capital,
                earned_yield=earned,
                ending_principal=ending,
            )
        )
        capital = ending

    if out:
        logger.info(
            "Compounded treasury over %d months: ending principal %.8f",
            len(out),
            out[-1].ending_principal,
        )
    return out


__all__ = ["PlatformTreasurySnapshot", "compound_treasury"]
