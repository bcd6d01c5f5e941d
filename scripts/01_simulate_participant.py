"""Single-participant accumulation runner.

Simulates one participant's monthly accumulation under the market and
participant sections of a config and writes:
- participant.csv (monthly snapshots with fiat valuation)
- participant_yearly.csv
- participant_summary.json

Usage:
  python scripts/01_simulate_participant.py --config configs/base.yaml --out_dir reports/participant

Percent-form overrides are accepted for rates, e.g. ``--annual_yield_pct 5``.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict

from treasury_growth.accumulation import accumulation_frame, simulate_participant
from treasury_growth.reporting import participant_summary, yearly_table
from treasury_growth.utils import (
    SimulationConfig,
    config_from_dict,
    deep_update,
    ensure_dir,
    load_yaml,
    save_csv,
    save_json,
)


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Simulate one participant's accumulation")
    p.add_argument("--config", type=str, default=None, help="YAML config (defaults are used if omitted)")
    p.add_argument("--out_dir", type=str, default="reports/participant", help="Output directory")
    p.add_argument("--years", type=float, default=None, help="Override market.horizon_years")
    p.add_argument("--monthly_contribution", type=float, default=None, help="Override monthly fiat contribution")
    p.add_argument("--start_month", type=int, default=None, help="Override participant start month")
    p.add_argument("--annual_yield_pct", type=float, default=None, help="Override participant yield, in percent")
    p.add_argument("--indexing", action="store_true", help="Index contributions to inflation")
    p.add_argument("--log_level", type=str, default="INFO")
    return p.parse_args()


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    upd: Dict[str, Any] = {"market": {}, "participant": {}}
    if args.years is not None:
        upd["market"]["horizon_years"] = float(args.years)
    if args.indexing:
        upd["market"]["inflation_indexing"] = True
    if args.monthly_contribution is not None:
        upd["participant"]["monthly_contribution"] = float(args.monthly_contribution)
    if args.start_month is not None:
        upd["participant"]["start_month"] = int(args.start_month)
    if args.annual_yield_pct is not None:
        upd["participant"]["annual_yield_pct"] = float(args.annual_yield_pct)
    return upd


def main() -> None:
    args = _parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    base = load_yaml(Path(args.config)) if args.config is not None else SimulationConfig().to_dict()
    cfg = config_from_dict(deep_update(base, _overrides(args)))

    series = simulate_participant(cfg.market, cfg.participant)
    df = accumulation_frame(series)

    out = ensure_dir(Path(args.out_dir))
    save_csv(df, out / "participant.csv")
    yearly = yearly_table(
        df,
        sum_cols=["contribution", "yield_fee", "exchange_fee", "net_yield"],
        last_cols=["price", "holding", "holding_value", "holding_value_real"],
    )
    save_csv(yearly, out / "participant_yearly.csv")
    save_json(participant_summary(df), out / "participant_summary.json")

    print(f"Wrote participant artifacts to: {out}")


if __name__ == "__main__":
    main()
