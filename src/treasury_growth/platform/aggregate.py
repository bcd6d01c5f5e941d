"""treasury_growth.platform.aggregate

Cross-cohort monthly aggregation.

For month ``m`` every cohort with ``m >= cohort.start_month`` contributes
``count * snapshot[m]`` to the fee and holding totals and ``count`` to the
active participant total. The explicit ``start_month`` is the only thing
consulted; the position of a cohort in the list carries no meaning.

Sums use :func:`math.fsum` (correctly rounded), so the result is exactly
independent of cohort order. The reference price is read from the first
cohort; all cohorts observe the same global price path.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Iterable, List, Sequence

import numpy as np
import pandas as pd

from treasury_growth.cohorts.composer import Cohort
from treasury_growth.utils.validation import require_equal_lengths

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlatformMonthlySnapshot:
    """Platform-wide fee and holding totals for one month."""

    month: int
    price: float
    yield_fee: float
    exchange_fee: float
    total_fee: float
    active_participants: float
    participant_holdings: float = 0.0


def _weighted_matrix(cohorts: Sequence[Cohort], attr: str, active: np.ndarray, counts: np.ndarray) -> np.ndarray:
    values = np.array([[getattr(s, attr) for s in c.series] for c in cohorts], dtype=float)
    return np.where(active, counts[:, None] * values, 0.0)


def aggregate_monthly(cohorts: Sequence[Cohort]) -> List[PlatformMonthlySnapshot]:
    """Sum cohort flows per calendar month.

    Raises
    ------
    PreconditionError
        If cohort series lengths differ.
    """

    if len(cohorts) == 0:
        return []

    months = require_equal_lengths([len(c.series) for c in cohorts], "cohort series")

    starts = np.array([int(c.start_month) for c in cohorts], dtype=int)
    counts = np.array([float(c.count) for c in cohorts], dtype=float)
    active = np.arange(months)[None, :] >= starts[:, None]

    yield_fee = _weighted_matrix(cohorts, "yield_fee", active, counts)
    exchange_fee = _weighted_matrix(cohorts, "exchange_fee", active, counts)
    holdings = _weighted_matrix(cohorts, "holding", active, counts)
    participants = np.where(active, counts[:, None], 0.0)

    reference = cohorts[0].series
    out: List[PlatformMonthlySnapshot] = []
    for m in range(months):
        fy = math.fsum(yield_fee[:, m])
        fx = math.fsum(exchange_fee[:, m])
        out.append(
            PlatformMonthlySnapshot(
                month=m,
                price=float(reference[m].price),
                yield_fee=fy,
                exchange_fee=fx,
                total_fee=fy + fx,
                active_participants=math.fsum(participants[:, m]),
                participant_holdings=math.fsum(holdings[:, m]),
            )
        )

    logger.info("Aggregated %d cohorts over %d months", len(cohorts), months)
    return out


def platform_frame(snapshots: Iterable[PlatformMonthlySnapshot]) -> pd.DataFrame:
    """Tabulate platform snapshots (monthly or treasury) indexed by month.

    Adds fiat valuations of the fee totals and, for treasury snapshots, of the
    ending principal.
    """

    df = pd.DataFrame([asdict(s) for s in snapshots])
    if df.empty:
        return df
    df = df.set_index("month")
    df["total_fee_value"] = df["total_fee"] * df["price"]
    df["participant_holdings_value"] = df["participant_holdings"] * df["price"]
    if "ending_principal" in df.columns:
        df["ending_principal_value"] = df["ending_principal"] * df["price"]
    return df


__all__ = ["PlatformMonthlySnapshot", "aggregate_monthly", "platform_frame"]
