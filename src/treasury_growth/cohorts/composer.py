"""treasury_growth.cohorts.composer

Compose per-cohort accumulation series.

A cohort is a group of participants that join in the same month and share a
single accumulation series, scaled by the cohort size. The composed set is:

- a base cohort holding the platform's initial population
  (``start_month=0``, ``count=start_count``, participant parameters as given);
- one cohort per month ``m`` of the horizon with ``start_month=m`` and
  ``count`` equal to that month's joiners. Zero-sized cohorts are kept so the
  set always has ``1 + horizon_months`` entries.

Every cohort carries a full-length series; months before its start are
zero-valued placeholders produced by the accumulator itself. Each cohort's
series is independent of the others and is stored as a tuple so it cannot be
mutated after construction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from treasury_growth.accumulation.participant import AccumulationSnapshot, simulate_participant
from treasury_growth.cohorts.timeline import ParticipantTimeline, build_participant_timeline
from treasury_growth.utils.config import (
    MarketConfig,
    ParticipantConfig,
    PlatformGrowthConfig,
    validate_market,
    validate_platform,
)
from treasury_growth.utils.validation import PreconditionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cohort:
    """Participants joining in ``start_month``, sharing one series."""

    start_month: int
    count: float
    series: Tuple[AccumulationSnapshot, ...]

    @property
    def months(self) -> int:
        return len(self.series)


def build_timeline(platform: PlatformGrowthConfig, market: MarketConfig) -> ParticipantTimeline:
    """Timeline for ``platform`` over the market horizon."""

    return build_participant_timeline(
        platform.start_count,
        platform.end_count,
        platform.shape,
        market.horizon_years,
        whole_participants=platform.whole_participants,
    )


def build_cohort_set(
    platform: PlatformGrowthConfig,
    market: MarketConfig,
    participant: ParticipantConfig,
    *,
    timeline: Optional[ParticipantTimeline] = None,
) -> List[Cohort]:
    """Build the base cohort plus one cohort per month of the horizon.

    Parameters
    ----------
    platform:
        Participant-growth parameters (start/end counts and shape).
    market:
        Market parameters; the horizon is taken from here.
    participant:
        Contribution, yield and fee parameters shared by every cohort.
    timeline:
        Optional precomputed timeline; built from ``platform`` if omitted.

    Returns
    -------
    list[Cohort]
        ``1 + market.horizon_months`` cohorts with identical series lengths.
    """

    validate_market(market)
    validate_platform(platform)

    if timeline is None:
        timeline = build_timeline(platform, market)
    months = market.horizon_months
    if timeline.months != months:
        raise PreconditionError(
            f"timeline covers {timeline.months} months but the market horizon is {months}"
        )

    cohorts: List[Cohort] = [
        Cohort(
            start_month=0,
            count=float(platform.start_count),
            series=tuple(simulate_participant(market, participant)),
        )
    ]

    for m in range(months):
        joined = float(timeline.new_participants[m])
        series = simulate_participant(market, replace(participant, start_month=m))
        cohorts.append(Cohort(start_month=m, count=joined, series=tuple(series)))

    logger.info(
        "Built %d cohorts over %d months (base=%s, joiners=%.2f)",
        len(cohorts),
        months,
        platform.start_count,
        float(timeline.new_participants.sum()),
    )
    return cohorts


__all__ = ["Cohort", "build_timeline", "build_cohort_set"]
