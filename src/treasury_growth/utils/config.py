"""Configuration utilities.

This module establishes the project-wide unit and timing conventions and
provides strict, explicit configuration dataclasses.

Key conventions:
- All rates and fee fractions are fractional (0.05 = 5%). Percentage-form
  values are only accepted through :func:`config_from_dict`, which normalises
  every ``*_pct`` key with :func:`percent_to_fraction`.
- Time is measured in whole months, 0-indexed. ``horizon_months`` is
  ``floor(horizon_years * 12)``.
- Prices are fiat per unit of the crypto asset; holdings and fees are in
  units of the asset.

Every stage of the pipeline consumes the frozen dataclasses below, so a full
run can be snapshotted to YAML and re-created exactly.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Literal

from .validation import (
    PreconditionError,
    percent_to_fraction,
    require_finite,
    require_fraction,
    require_non_negative,
    require_non_negative_int,
    require_open_unit_interval,
    require_positive,
)


GrowthShape = Literal["linear", "exponential"]

GROWTH_SHAPES = ("linear", "exponential")


@dataclass(frozen=True)
class MarketConfig:
    """Global price path, inflation and horizon."""

    initial_price: float = 100_000.0

    # Annual price growth decays from start to asymptote over settle_years
    start_growth_rate: float = 0.35
    asymptote_growth_rate: float = 0.14
    settle_years: float = 8.0

    # Share of the start/asymptote gap still left after settle_years (epsilon)
    residual_fraction: float = 0.05

    inflation_rate: float = 0.03
    inflation_indexing: bool = False

    horizon_years: float = 25.0

    @property
    def horizon_months(self) -> int:
        return int(math.floor(self.horizon_years * 12))


@dataclass(frozen=True)
class ParticipantConfig:
    """One participant's contribution, yield and fee parameters."""

    monthly_contribution: float = 100.0
    initial_holding: float = 0.0
    start_month: int = 0

    annual_yield: float = 0.02

    # Platform cut of gross yield, and of every fiat -> unit purchase
    yield_fee_fraction: float = 0.10
    exchange_fee_fraction: float = 0.001


@dataclass(frozen=True)
class PlatformGrowthConfig:
    """Participant-count growth of the platform over the horizon."""

    start_count: float = 50_000
    end_count: float = 1_000_000
    shape: GrowthShape = "exponential"

    # Round monthly joiners to integers (largest remainder, total preserved)
    whole_participants: bool = True


@dataclass(frozen=True)
class TreasuryConfig:
    """Yield earned by the platform on its own reinvested fees."""

    platform_yield_rate: float = 0.02


@dataclass(frozen=True)
class SimulationConfig:
    """Top-level configuration container."""

    market: MarketConfig = field(default_factory=MarketConfig)
    participant: ParticipantConfig = field(default_factory=ParticipantConfig)
    platform: PlatformGrowthConfig = field(default_factory=PlatformGrowthConfig)
    treasury: TreasuryConfig = field(default_factory=TreasuryConfig)

    run_name: str = "base"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def deep_update(base: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively update nested dictionaries."""

    out = dict(base)
    for k, v in updates.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_update(out[k], v)
        else:
            out[k] = v
    return out


def validate_market(m: MarketConfig) -> None:
    require_positive(m.initial_price, "initial_price")
    require_finite(m.start_growth_rate, "start_growth_rate")
    require_finite(m.asymptote_growth_rate, "asymptote_growth_rate")
    require_finite(m.settle_years, "settle_years")
    require_open_unit_interval(m.residual_fraction, "residual_fraction")
    require_finite(m.inflation_rate, "inflation_rate")
    require_positive(m.horizon_years, "horizon_years")
    if m.horizon_months < 1:
        raise PreconditionError(
            f"horizon_years={m.horizon_years} is shorter than one month"
        )


def validate_participant(p: ParticipantConfig) -> None:
    require_non_negative(p.monthly_contribution, "monthly_contribution")
    require_non_negative(p.initial_holding, "initial_holding")
    require_non_negative_int(p.start_month, "start_month")
    require_non_negative(p.annual_yield, "annual_yield")
    require_fraction(p.yield_fee_fraction, "yield_fee_fraction")
    require_fraction(p.exchange_fee_fraction, "exchange_fee_fraction")


def validate_platform(g: PlatformGrowthConfig) -> None:
    require_non_negative(g.start_count, "start_count")
    require_non_negative(g.end_count, "end_count")
    if g.shape not in GROWTH_SHAPES:
        raise PreconditionError(f"shape must be one of {GROWTH_SHAPES}, got {g.shape!r}")


def validate_treasury(t: TreasuryConfig) -> None:
    require_finite(t.platform_yield_rate, "platform_yield_rate")


def validate_config(cfg: SimulationConfig) -> None:
    """Run every section validator; raises PreconditionError on the first failure."""

    validate_market(cfg.market)
    validate_participant(cfg.participant)
    validate_platform(cfg.platform)
    validate_treasury(cfg.treasury)


def _normalise_section(cls: type, d: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    out = {k: v for k, v in d.items() if not k.endswith("_pct")}
    # percent keys win over their fractional counterparts
    for k, v in d.items():
        if k.endswith("_pct"):
            target = k[: -len("_pct")]
            if target not in names:
                raise PreconditionError(f"{cls.__name__} has no field {target!r} (from {k!r})")
            out[target] = percent_to_fraction(v)
    return out


def config_from_dict(d: Dict[str, Any]) -> SimulationConfig:
    """Build and validate a :class:`SimulationConfig` from a nested dict.

    Sections missing from ``d`` fall back to defaults. Keys suffixed with
    ``_pct`` are read as percentages, e.g. ``annual_yield_pct: 2`` sets
    ``annual_yield = 0.02``.
    """

    cfg = SimulationConfig(
        market=MarketConfig(**_normalise_section(MarketConfig, d.get("market", {}))),
        participant=ParticipantConfig(**_normalise_section(ParticipantConfig, d.get("participant", {}))),
        platform=PlatformGrowthConfig(**_normalise_section(PlatformGrowthConfig, d.get("platform", {}))),
        treasury=TreasuryConfig(**_normalise_section(TreasuryConfig, d.get("treasury", {}))),
        run_name=d.get("run_name", d.get("name", "base")),
    )
    validate_config(cfg)
    return cfg


__all__ = [
    "GrowthShape",
    "GROWTH_SHAPES",
    "MarketConfig",
    "ParticipantConfig",
    "PlatformGrowthConfig",
    "TreasuryConfig",
    "SimulationConfig",
    "deep_update",
    "validate_market",
    "validate_participant",
    "validate_platform",
    "validate_treasury",
    "validate_config",
    "config_from_dict",
]
