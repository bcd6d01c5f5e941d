"""treasury_growth.market.growth_curve

Time-varying price growth with asymptotic settling.

The annual growth rate of the asset starts at ``a0`` and approaches a
long-run asymptote ``a_inf`` exponentially:

    a(t) = a_inf + (a0 - a_inf) * exp(-t / tau),   tau = -T / ln(eps)

where ``T`` is the settling horizon in years and ``eps`` the residual
fraction: at ``t = T`` the rate has covered ``1 - eps`` of the gap to the
asymptote. Changing the parameterisation changes every downstream price
path, so the formula is kept exactly as stated.

Monthly figures are derived with the compounding equivalence
``(1 + a) ** (1/12) - 1``. Annual rates at or below -99.9% are clamped to
-0.999 before exponentiation. This is a deliberate approximation that keeps
the base of the power positive; it is not treated as an error.
"""

from __future__ import annotations

import math

import numpy as np

RESIDUAL_FRACTION_MIN = 1e-6
RESIDUAL_FRACTION_MAX = 0.999999

# Floor for annual rates fed into the monthly conversion
ANNUAL_RATE_FLOOR = -0.999

MONTHS_PER_YEAR = 12


def annual_rate(
    years_since_start: float,
    start_rate: float,
    asymptote_rate: float,
    settle_years: float,
    residual_fraction: float = 0.05,
) -> float:
    """Annual growth rate in effect ``years_since_start`` years into the horizon.

    ``settle_years <= 0`` means immediate settling: the asymptote is returned
    for every ``t`` regardless of ``start_rate``.
    """

    if settle_years <= 0:
        return float(asymptote_rate)
    eps = min(max(float(residual_fraction), RESIDUAL_FRACTION_MIN), RESIDUAL_FRACTION_MAX)
    tau = -float(settle_years) / math.log(eps)
    # a_inf + (a0 - a_inf) * w, written so that t=0 returns a0 exactly
    w = math.exp(-float(years_since_start) / tau)
    return float(start_rate * w + asymptote_rate * (1.0 - w))


def monthly_equivalent(annual: float) -> float:
    """Monthly rate that compounds to ``annual`` over twelve months."""

    a = max(float(annual), ANNUAL_RATE_FLOOR)
    return (1.0 + a) ** (1.0 / MONTHS_PER_YEAR) - 1.0


def rate_path(
    months: int,
    *,
    start_rate: float,
    asymptote_rate: float,
    settle_years: float,
    residual_fraction: float = 0.05,
) -> np.ndarray:
    """Monthly growth rate for each month, evaluated at the month midpoint.

    Month ``m`` uses the annual rate at ``(m + 0.5) / 12`` years elapsed.
    """

    if months < 0:
        raise ValueError("months must be >= 0")
    out = np.empty(int(months), dtype=float)
    for m in range(int(months)):
        a = annual_rate(
            (m + 0.5) / MONTHS_PER_YEAR,
            start_rate,
            asymptote_rate,
            settle_years,
            residual_fraction,
        )
        out[m] = monthly_equivalent(a)
    return out


def compound_path(start_value: float, rates: np.ndarray) -> np.ndarray:
    """Value at the start of each month when month ``m`` grows by ``rates[m]``.

    ``out[0] == start_value`` and ``out[m] = out[m-1] * (1 + rates[m-1])``;
    the growth of the last month is not applied.
    """

    r = np.asarray(rates, dtype=float)
    if r.ndim != 1:
        raise ValueError("rates must be 1-dimensional")
    if len(r) == 0:
        return np.empty(0, dtype=float)
    growth = np.concatenate(([1.0], 1.0 + r[:-1]))
    return float(start_value) * np.cumprod(growth)


__all__ = [
    "RESIDUAL_FRACTION_MIN",
    "RESIDUAL_FRACTION_MAX",
    "ANNUAL_RATE_FLOOR",
    "MONTHS_PER_YEAR",
    "annual_rate",
    "monthly_equivalent",
    "rate_path",
    "compound_path",
]
