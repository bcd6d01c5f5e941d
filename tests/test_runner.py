"""End-to-end runner tests (small horizon, written artifacts)."""

from __future__ import annotations

import pandas as pd
import pytest

from treasury_growth.platform.runner import run_simulation
from treasury_growth.utils.config import MarketConfig, PlatformGrowthConfig, SimulationConfig, config_from_dict
from treasury_growth.utils.io import load_json, load_yaml


def _small_cfg() -> SimulationConfig:
    return SimulationConfig(
        market=MarketConfig(horizon_years=3.0),
        platform=PlatformGrowthConfig(start_count=200, end_count=2_000, shape="linear"),
        run_name="small",
    )


def test_run_simulation_writes_artifacts(tmp_path) -> None:
    cfg = _small_cfg()
    res = run_simulation(cfg, out_dir=tmp_path)

    for name in ["participant.csv", "platform.csv", "summary.json", "config_snapshot.yaml"]:
        assert (tmp_path / name).exists()

    summary = load_json(tmp_path / "summary.json")
    assert summary["run_name"] == "small"
    assert summary["platform"]["months"] == 36
    assert summary["participant"]["months"] == 36

    assert config_from_dict(load_yaml(tmp_path / "config_snapshot.yaml")) == cfg

    df = pd.read_csv(tmp_path / "platform.csv", index_col=0)
    assert len(df) == 36
    assert df["ending_principal"].iloc[-1] == pytest.approx(res.treasury[-1].ending_principal)


def test_run_simulation_results_are_consistent() -> None:
    res = run_simulation(_small_cfg())

    assert len(res.cohorts) == 1 + 36
    assert len(res.monthly) == len(res.treasury) == 36
    plat = res.summary["platform"]
    assert plat["final_principal"] == res.treasury[-1].ending_principal
    assert plat["final_active_participants"] == pytest.approx(2_000.0)
    assert plat["total_fee"] == pytest.approx(sum(s.total_fee for s in res.monthly))
    assert plat["final_principal"] >= plat["total_fee"]
    assert res.platform_table.index.name == "month"


def test_run_simulation_is_deterministic() -> None:
    a = run_simulation(_small_cfg())
    b = run_simulation(_small_cfg())
    assert a.treasury == b.treasury
    pd.testing.assert_frame_equal(a.platform_table, b.platform_table)
