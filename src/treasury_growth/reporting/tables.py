"""treasury_growth.reporting.tables

Minimal tabular reporting helpers.

Turns the monthly frames produced by the pipeline into flat summary dicts
and CSV-friendly tables. Charts and any other presentation are left to the
consumer.
"""

from __future__ import annotations

from typing import Dict, Iterable

import pandas as pd

__all__ = [
    "participant_summary",
    "platform_summary",
    "yearly_table",
]


def participant_summary(df: pd.DataFrame) -> Dict[str, float]:
    """Headline numbers for one participant series (see ``accumulation_frame``)."""

    if df.empty:
        return {}
    last = df.iloc[-1]
    contributed = float(df["contribution"].sum())
    value = float(last["holding_value"])
    return {
        "months": int(len(df)),
        "final_price": float(last["price"]),
        "final_holding": float(last["holding"]),
        "final_holding_value": value,
        "final_holding_value_real": float(last["holding_value_real"]),
        "total_contributed": contributed,
        "total_yield_fee": float(df["yield_fee"].sum()),
        "total_exchange_fee": float(df["exchange_fee"].sum()),
        "value_multiple": value / contributed if contributed > 0 else float("nan"),
    }


def platform_summary(df: pd.DataFrame) -> Dict[str, float]:
    """Headline numbers for a platform treasury frame (see ``platform_frame``)."""

    if df.empty:
        return {}
    last = df.iloc[-1]
    out = {
        "months": int(len(df)),
        "final_active_participants": float(last["active_participants"]),
        "total_yield_fee": float(df["yield_fee"].sum()),
        "total_exchange_fee": float(df["exchange_fee"].sum()),
        "total_fee": float(df["total_fee"].sum()),
        "final_participant_holdings": float(last["participant_holdings"]),
    }
    if "ending_principal" in df.columns:
        out["total_earned_yield"] = float(df["earned_yield"].sum())
        out["final_principal"] = float(last["ending_principal"])
        out["final_principal_value"] = float(last["ending_principal_value"])
    return out


def yearly_table(df: pd.DataFrame, *, sum_cols: Iterable[str] = (), last_cols: Iterable[str] = ()) -> pd.DataFrame:
    """Collapse a month-indexed frame to years.

    ``sum_cols`` are flows summed within each year; ``last_cols`` are stocks
    taken at the year's final month. Year 1 covers months 0-11.
    """

    if df.empty:
        return pd.DataFrame()
    year = pd.Series(df.index // 12 + 1, index=df.index, name="year")
    grouped = df.groupby(year)
    parts = []
    sum_cols = list(sum_cols)
    last_cols = list(last_cols)
    if sum_cols:
        parts.append(grouped[sum_cols].sum())
    if last_cols:
        parts.append(grouped[last_cols].last())
    if not parts:
        return pd.DataFrame(index=sorted(year.unique()))
    return pd.concat(parts, axis=1)
