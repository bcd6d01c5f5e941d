"""Platform treasury runner.

Runs the full cohort pipeline (timeline -> cohorts -> monthly aggregation ->
treasury compounding) for one config and writes under the output directory:
- participant.csv, platform.csv
- platform_yearly.csv
- summary.json, config_snapshot.yaml

Usage:
  python scripts/02_run_platform.py --config configs/base.yaml --out_dir reports/base

Or with overrides:
  python scripts/02_run_platform.py --years 10 --growth_shape linear --start_count 1000 --end_count 20000
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict

from treasury_growth.platform import run_simulation
from treasury_growth.reporting import yearly_table
from treasury_growth.utils import (
    GROWTH_SHAPES,
    SimulationConfig,
    config_from_dict,
    deep_update,
    load_yaml,
    save_csv,
)


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Cohort-aggregated platform treasury projection")
    p.add_argument("--config", type=str, default=None, help="YAML config (defaults are used if omitted)")
    p.add_argument("--out_dir", type=str, default=None, help="Output directory (default: reports/<run_name>)")
    p.add_argument("--run_name", type=str, default=None)
    p.add_argument("--years", type=float, default=None, help="Override market.horizon_years")
    p.add_argument("--start_count", type=float, default=None, help="Participants at month 0")
    p.add_argument("--end_count", type=float, default=None, help="Participants at the final month")
    p.add_argument("--growth_shape", type=str, choices=list(GROWTH_SHAPES), default=None)
    p.add_argument(
        "--fractional_participants",
        action="store_true",
        help="Keep real-valued monthly joiners instead of rounding to whole participants",
    )
    p.add_argument(
        "--platform_yield_pct",
        type=float,
        default=None,
        help="Override treasury yield on reinvested fees, in percent",
    )
    p.add_argument("--log_level", type=str, default="INFO")
    return p.parse_args()


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    upd: Dict[str, Any] = {"market": {}, "platform": {}, "treasury": {}}
    if args.run_name is not None:
        upd["run_name"] = args.run_name
    if args.years is not None:
        upd["market"]["horizon_years"] = float(args.years)
    if args.start_count is not None:
        upd["platform"]["start_count"] = float(args.start_count)
    if args.end_count is not None:
        upd["platform"]["end_count"] = float(args.end_count)
    if args.growth_shape is not None:
        upd["platform"]["shape"] = args.growth_shape
    if args.fractional_participants:
        upd["platform"]["whole_participants"] = False
    if args.platform_yield_pct is not None:
        upd["treasury"]["platform_yield_rate_pct"] = float(args.platform_yield_pct)
    return upd


def main() -> None:
    args = _parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    base = load_yaml(Path(args.config)) if args.config is not None else SimulationConfig().to_dict()
    cfg = config_from_dict(deep_update(base, _overrides(args)))

    out = Path(args.out_dir) if args.out_dir is not None else Path("reports") / cfg.run_name
    res = run_simulation(cfg, out_dir=out)

    yearly = yearly_table(
        res.platform_table,
        sum_cols=["yield_fee", "exchange_fee", "total_fee", "earned_yield"],
        last_cols=["price", "active_participants", "ending_principal", "ending_principal_value"],
    )
    save_csv(yearly, out / "platform_yearly.csv")

    plat = res.summary["platform"]
    print(
        f"Final principal: {plat['final_principal']:.6f} units "
        f"({plat['final_principal_value']:,.2f} fiat), "
        f"{plat['final_active_participants']:,.0f} participants"
    )
    print(f"Wrote platform artifacts to: {out}")


if __name__ == "__main__":
    main()
