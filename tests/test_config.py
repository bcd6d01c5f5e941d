"""Configuration loading and validation tests."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import numpy as np
import pytest

from treasury_growth.cohorts.composer import build_timeline
from treasury_growth.utils.config import (
    MarketConfig,
    SimulationConfig,
    config_from_dict,
    deep_update,
    validate_config,
)
from treasury_growth.utils.io import load_yaml, save_yaml
from treasury_growth.utils.validation import PreconditionError, percent_to_fraction

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_defaults_validate() -> None:
    cfg = SimulationConfig()
    validate_config(cfg)
    assert cfg.market.horizon_months == 300
    assert cfg.platform.shape == "exponential"


def test_base_yaml_matches_defaults() -> None:
    cfg = config_from_dict(load_yaml(REPO_ROOT / "configs" / "base.yaml"))
    assert cfg == SimulationConfig()


def test_percent_keys_are_normalised() -> None:
    cfg = config_from_dict(
        {
            "participant": {"annual_yield_pct": 5, "exchange_fee_fraction_pct": 0.1},
            "treasury": {"platform_yield_rate_pct": 3},
        }
    )
    assert cfg.participant.annual_yield == pytest.approx(0.05)
    assert cfg.participant.exchange_fee_fraction == pytest.approx(0.001)
    assert cfg.treasury.platform_yield_rate == pytest.approx(0.03)
    assert percent_to_fraction(12.5) == 0.125


def test_percent_key_wins_over_fraction_key() -> None:
    for section in ({"annual_yield_pct": 4, "annual_yield": 0.5}, {"annual_yield": 0.5, "annual_yield_pct": 4}):
        cfg = config_from_dict({"participant": section})
        assert cfg.participant.annual_yield == pytest.approx(0.04)


def test_unknown_percent_key_raises() -> None:
    with pytest.raises(PreconditionError):
        config_from_dict({"market": {"volatility_pct": 40}})


@pytest.mark.parametrize(
    "d",
    [
        {"market": {"residual_fraction": 1.0}},
        {"market": {"horizon_years": 0}},
        {"participant": {"yield_fee_fraction_pct": 150}},
        {"platform": {"shape": "logistic"}},
        {"platform": {"start_count": -1}},
    ],
)
def test_invalid_values_raise(d) -> None:
    with pytest.raises(PreconditionError):
        config_from_dict(d)


def test_deep_update_merges_nested_sections() -> None:
    base = SimulationConfig().to_dict()
    upd = deep_update(base, {"market": {"horizon_years": 3.0}, "run_name": "short"})
    assert upd["market"]["horizon_years"] == 3.0
    assert upd["market"]["initial_price"] == base["market"]["initial_price"]
    assert upd["run_name"] == "short"
    # base untouched
    assert base["market"]["horizon_years"] == 25.0


def test_yaml_snapshot_recreates_config(tmp_path) -> None:
    cfg = replace(
        SimulationConfig(run_name="snap"),
        market=MarketConfig(horizon_years=7.5, inflation_indexing=True),
    )
    path = tmp_path / "cfg.yaml"
    save_yaml(cfg.to_dict(), path)
    assert config_from_dict(load_yaml(path)) == cfg


def test_default_platform_rounds_joiners_to_whole_participants() -> None:
    cfg = SimulationConfig()
    assert cfg.platform.whole_participants is True
    tl = build_timeline(cfg.platform, replace(cfg.market, horizon_years=5))
    assert (tl.new_participants == np.round(tl.new_participants)).all()
    assert tl.total_participants[-1] == 1_000_000.0
