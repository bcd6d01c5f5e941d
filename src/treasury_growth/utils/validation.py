"""treasury_growth.utils.validation

Precondition checks shared by every stage of the pipeline.

All public operations are total functions over validated inputs. Invalid
inputs fail fast with :class:`PreconditionError` (a ``ValueError`` subclass)
rather than producing a partial or silently truncated series. Degenerate but
valid inputs (zero contribution, zero yield, zero participants) are *not*
precondition violations.
"""

from __future__ import annotations

import math
from typing import Sequence


class PreconditionError(ValueError):
    """Raised when an input violates a hard precondition of the model."""


def require_finite(value: float, name: str) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise PreconditionError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(v):
        raise PreconditionError(f"{name} must be finite, got {value!r}")
    return v


def require_positive(value: float, name: str) -> float:
    v = require_finite(value, name)
    if v <= 0:
        raise PreconditionError(f"{name} must be > 0, got {v}")
    return v


def require_non_negative(value: float, name: str) -> float:
    v = require_finite(value, name)
    if v < 0:
        raise PreconditionError(f"{name} must be >= 0, got {v}")
    return v


def require_fraction(value: float, name: str) -> float:
    """Closed unit interval [0, 1]; used for fee fractions."""
    v = require_finite(value, name)
    if not (0.0 <= v <= 1.0):
        raise PreconditionError(f"{name} must be a fraction in [0, 1], got {v}")
    return v


def require_open_unit_interval(value: float, name: str) -> float:
    v = require_finite(value, name)
    if not (0.0 < v < 1.0):
        raise PreconditionError(f"{name} must lie strictly inside (0, 1), got {v}")
    return v


def require_non_negative_int(value: int, name: str) -> int:
    if isinstance(value, bool) or int(value) != value:
        raise PreconditionError(f"{name} must be an integer, got {value!r}")
    v = int(value)
    if v < 0:
        raise PreconditionError(f"{name} must be >= 0, got {v}")
    return v


def require_equal_lengths(lengths: Sequence[int], what: str) -> int:
    """Return the common length, or raise if any length differs."""

    if not lengths:
        return 0
    n = int(lengths[0])
    bad = [i for i, k in enumerate(lengths) if int(k) != n]
    if bad:
        raise PreconditionError(
            f"All {what} must have the same length ({n}); mismatch at positions {bad[:10]}"
        )
    return n


def percent_to_fraction(pct: float) -> float:
    """Convert a percentage-form rate (5 -> 0.05) to fractional form."""

    return require_finite(pct, "pct") / 100.0


__all__ = [
    "PreconditionError",
    "require_finite",
    "require_positive",
    "require_non_negative",
    "require_fraction",
    "require_open_unit_interval",
    "require_non_negative_int",
    "require_equal_lengths",
    "percent_to_fraction",
]
