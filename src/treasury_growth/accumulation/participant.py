"""treasury_growth.accumulation.participant

Per-participant monthly accumulation simulator.

For every month ``m`` of the horizon:

1. The month's price multiplier is the monthly equivalent of the annual
   growth rate at the month midpoint ``(m + 0.5) / 12``. The snapshot records
   the price observed at the start of the month; the multiplier moves the
   price forward to month ``m + 1``.
2. The nominal contribution is the base contribution, scaled by the
   cumulative inflation factor when indexing is enabled.
3. The contribution buys units at the current price; the exchange fee is a
   fraction of the units bought.
4. Yield accrues on the holding carried *into* the month (not on this
   month's purchase); the platform keeps a fraction of the gross yield.
5. Months before the participant's start offset produce a placeholder
   snapshot with zero fees, zero contribution and zero holding.
6. Price and inflation advance every month, whether or not the participant
   has started. Both are global paths, precomputed once.

Holdings never go negative: both fees are fractions of non-negative
quantities.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable, List, NamedTuple

import numpy as np
import pandas as pd

from treasury_growth.market.growth_curve import compound_path, monthly_equivalent, rate_path
from treasury_growth.utils.config import (
    MarketConfig,
    ParticipantConfig,
    validate_market,
    validate_participant,
)


@dataclass(frozen=True)
class AccumulationSnapshot:
    """State of one participant's account for one month."""

    month: int
    price: float
    yield_fee: float
    exchange_fee: float
    holding: float
    growth_rate: float
    contribution: float = 0.0
    net_yield: float = 0.0
    inflation_factor: float = 1.0

    @property
    def total_fee(self) -> float:
        return self.yield_fee + self.exchange_fee


class MonthFlows(NamedTuple):
    """Unit flows produced by a single month of accumulation."""

    holding: float
    yield_fee: float
    exchange_fee: float
    net_yield: float


def accumulate_month(
    *,
    holding: float,
    contribution: float,
    price: float,
    monthly_yield: float,
    yield_fee_fraction: float,
    exchange_fee_fraction: float,
) -> MonthFlows:
    """Apply one month's purchase and yield to ``holding``.

    Yield is computed on ``holding`` as passed in (the balance before this
    month's purchase).
    """

    bought = contribution / price
    exchange_fee = bought * exchange_fee_fraction
    net_bought = bought - exchange_fee

    gross_yield = holding * monthly_yield
    yield_fee = gross_yield * yield_fee_fraction
    net_yield = gross_yield - yield_fee

    return MonthFlows(
        holding=holding + net_bought + net_yield,
        yield_fee=yield_fee,
        exchange_fee=exchange_fee,
        net_yield=net_yield,
    )


def simulate_participant(market: MarketConfig, participant: ParticipantConfig) -> List[AccumulationSnapshot]:
    """Simulate one participant over the full horizon.

    Returns exactly ``market.horizon_months`` snapshots regardless of the
    participant's start month.

    Raises
    ------
    PreconditionError
        If the market or participant parameters are invalid.
    """

    validate_market(market)
    validate_participant(participant)

    months = market.horizon_months
    growth = rate_path(
        months,
        start_rate=market.start_growth_rate,
        asymptote_rate=market.asymptote_growth_rate,
        settle_years=market.settle_years,
        residual_fraction=market.residual_fraction,
    )
    prices = compound_path(market.initial_price, growth)
    inflation = compound_path(1.0, np.full(months, monthly_equivalent(market.inflation_rate)))
    monthly_yield = monthly_equivalent(participant.annual_yield)

    start = int(participant.start_month)
    holding = float(participant.initial_holding)
    out: List[AccumulationSnapshot] = []

    for m in range(months):
        price = float(prices[m])
        cpi = float(inflation[m])
        rate = float(growth[m])

        if m < start:
            out.append(
                AccumulationSnapshot(
                    month=m,
                    price=price,
                    yield_fee=0.0,
                    exchange_fee=0.0,
                    holding=0.0,
                    growth_rate=rate,
                    inflation_factor=cpi,
                )
            )
            continue

        contribution = participant.monthly_contribution * cpi if market.inflation_indexing else participant.monthly_contribution
        flows = accumulate_month(
            holding=holding,
            contribution=contribution,
            price=price,
            monthly_yield=monthly_yield,
            yield_fee_fraction=participant.yield_fee_fraction,
            exchange_fee_fraction=participant.exchange_fee_fraction,
        )
        holding = flows.holding
        out.append(
            AccumulationSnapshot(
                month=m,
                price=price,
                yield_fee=flows.yield_fee,
                exchange_fee=flows.exchange_fee,
                holding=flows.holding,
                growth_rate=rate,
                contribution=float(contribution),
                net_yield=flows.net_yield,
                inflation_factor=cpi,
            )
        )

    return out


def accumulation_frame(snapshots: Iterable[AccumulationSnapshot]) -> pd.DataFrame:
    """Tabulate a participant series, adding fiat valuation columns.

    ``holding_value`` is the holding priced at the month's price and
    ``holding_value_real`` deflates it by the cumulative inflation factor.
    """

    rows = [asdict(s) for s in snapshots]
    if not rows:
        cols = [f for f in AccumulationSnapshot.__dataclass_fields__]
        extra = ["holding_value", "holding_value_real", "contribution_cum"]
        return pd.DataFrame(columns=cols + extra).set_index("month")
    df = pd.DataFrame(rows).set_index("month")
    df["holding_value"] = df["holding"] * df["price"]
    df["holding_value_real"] = df["holding_value"] / df["inflation_factor"]
    df["contribution_cum"] = df["contribution"].cumsum()
    return df


__all__ = [
    "AccumulationSnapshot",
    "MonthFlows",
    "accumulate_month",
    "simulate_participant",
    "accumulation_frame",
]
