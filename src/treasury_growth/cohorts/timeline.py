"""treasury_growth.cohorts.timeline

Monthly participant-growth timeline.

The cumulative participant count ``c[i]`` moves from ``start`` (month 0) to
``end`` (last month) over ``steps = months - 1`` steps, either linearly or at
a constant per-step ratio. New joiners per month are the first difference of
the cumulative series against ``start``, clamped at zero (there is no churn
model, so a shrinking target simply means no new joiners).

With a one-month horizon there are no steps; the single month jumps straight
to ``end``.

Exponential growth from zero has no defined ratio. In that case the timeline
falls back to the linear shape and logs a warning.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from treasury_growth.utils.config import GROWTH_SHAPES, GrowthShape
from treasury_growth.utils.validation import PreconditionError, require_non_negative, require_positive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParticipantTimeline:
    """Per-month joiners and cumulative joined participants."""

    shape: GrowthShape
    start_count: float
    end_count: float
    new_participants: np.ndarray
    total_participants: np.ndarray

    @property
    def months(self) -> int:
        return int(len(self.new_participants))


def _cumulative_linear(start: float, end: float, months: int) -> np.ndarray:
    steps = months - 1
    if steps == 0:
        return np.array([end], dtype=float)
    return start + (end - start) * np.arange(months, dtype=float) / steps


def _cumulative_exponential(start: float, end: float, months: int) -> np.ndarray:
    steps = months - 1
    if steps == 0:
        return np.array([end], dtype=float)
    ratio = (end / start) ** (1.0 / steps)
    return start * np.power(ratio, np.arange(months, dtype=float))


def round_preserving_total(values: np.ndarray) -> np.ndarray:
    """Round non-negative values to integers, keeping the rounded total.

    Largest-remainder method: floor everything, then hand out the missing
    units to the entries with the largest fractional parts (earlier months
    win ties).
    """

    x = np.asarray(values, dtype=float)
    floors = np.floor(x)
    need = int(round(float(x.sum()))) - int(floors.sum())
    if need > 0:
        order = np.argsort(-(x - floors), kind="stable")
        floors[order[:need]] += 1.0
    return floors


def build_participant_timeline(
    start_count: float,
    end_count: float,
    shape: GrowthShape,
    horizon_years: float,
    *,
    whole_participants: bool = False,
) -> ParticipantTimeline:
    """Build the monthly joiner counts for ``horizon_years * 12`` months.

    Parameters
    ----------
    start_count, end_count:
        Cumulative participants at the first and last month.
    shape:
        ``"linear"`` or ``"exponential"``.
    horizon_years:
        Horizon length; ``floor(horizon_years * 12)`` months are produced.
    whole_participants:
        If True, joiners are rounded to integers with the total preserved.

    Raises
    ------
    PreconditionError
        On negative/non-finite counts, a non-positive horizon or unknown shape.
    """

    start = require_non_negative(start_count, "start_count")
    end = require_non_negative(end_count, "end_count")
    require_positive(horizon_years, "horizon_years")
    if shape not in GROWTH_SHAPES:
        raise PreconditionError(f"shape must be one of {GROWTH_SHAPES}, got {shape!r}")

    months = int(math.floor(horizon_years * 12))
    if months < 1:
        raise PreconditionError(f"horizon_years={horizon_years} is shorter than one month")

    if shape == "exponential" and start == 0:
        logger.warning(
            "Exponential growth from start_count=0 is undefined; using linear growth to end_count=%s",
            end,
        )
        shape_used: GrowthShape = "linear"
    else:
        shape_used = shape

    if shape_used == "linear":
        cumulative = _cumulative_linear(start, end, months)
    else:
        cumulative = _cumulative_exponential(start, end, months)

    new = np.maximum(0.0, np.diff(cumulative, prepend=start))
    if whole_participants:
        new = round_preserving_total(new)
    total = start + np.cumsum(new)

    logger.debug(
        "Participant timeline: shape=%s months=%d joiners=%.2f",
        shape_used,
        months,
        float(new.sum()),
    )

    return ParticipantTimeline(
        shape=shape_used,
        start_count=start,
        end_count=end,
        new_participants=new,
        total_participants=total,
    )


__all__ = [
    "ParticipantTimeline",
    "round_preserving_total",
    "build_participant_timeline",
]
