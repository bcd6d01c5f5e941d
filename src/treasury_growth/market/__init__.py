"""Market subpackage.

Deterministic price growth curve (decaying CAGR) and monthly compounding
helpers shared by the participant and treasury stages.
"""

from .growth_curve import (
    ANNUAL_RATE_FLOOR,
    MONTHS_PER_YEAR,
    annual_rate,
    compound_path,
    monthly_equivalent,
    rate_path,
)

__all__ = [
    "ANNUAL_RATE_FLOOR",
    "MONTHS_PER_YEAR",
    "annual_rate",
    "monthly_equivalent",
    "rate_path",
    "compound_path",
]
