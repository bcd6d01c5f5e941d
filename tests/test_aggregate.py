"""Cross-cohort aggregation tests."""

from __future__ import annotations

import pytest

from treasury_growth.accumulation.participant import simulate_participant
from treasury_growth.cohorts.composer import Cohort, build_cohort_set, build_timeline
from treasury_growth.platform.aggregate import aggregate_monthly, platform_frame
from treasury_growth.utils.config import MarketConfig, ParticipantConfig, PlatformGrowthConfig
from treasury_growth.utils.validation import PreconditionError


def _market(years: float = 2.0) -> MarketConfig:
    return MarketConfig(
        initial_price=50_000.0,
        start_growth_rate=0.3,
        asymptote_growth_rate=0.1,
        settle_years=4.0,
        horizon_years=years,
    )


def _participant() -> ParticipantConfig:
    return ParticipantConfig(
        monthly_contribution=1000.0,
        annual_yield=0.05,
        yield_fee_fraction=0.1,
        exchange_fee_fraction=0.01,
    )


def test_zero_growth_platform_is_scaled_base_cohort() -> None:
    platform = PlatformGrowthConfig(start_count=100, end_count=100, shape="exponential")
    cohorts = build_cohort_set(platform, _market(), _participant())
    monthly = aggregate_monthly(cohorts)
    base = cohorts[0].series

    assert len(monthly) == 24
    for snap, s in zip(monthly, base):
        assert snap.price == s.price
        assert snap.yield_fee == 100.0 * s.yield_fee
        assert snap.exchange_fee == 100.0 * s.exchange_fee
        assert snap.total_fee == pytest.approx(100.0 * s.total_fee, rel=1e-12)
        assert snap.active_participants == 100.0
        assert snap.participant_holdings == 100.0 * s.holding


def test_aggregation_is_independent_of_cohort_order() -> None:
    platform = PlatformGrowthConfig(start_count=1000, end_count=25_000, shape="exponential")
    cohorts = build_cohort_set(platform, _market(), _participant())
    forward = aggregate_monthly(cohorts)
    backward = aggregate_monthly(list(reversed(cohorts)))
    assert forward == backward


def test_cohort_excluded_before_explicit_start_month() -> None:
    # series is non-zero from month 0, but the cohort is declared to start at 3
    series = tuple(simulate_participant(_market(1.0), _participant()))
    assert series[0].exchange_fee > 0.0
    monthly = aggregate_monthly([Cohort(start_month=3, count=10.0, series=series)])

    for snap in monthly[:3]:
        assert snap.total_fee == 0.0
        assert snap.active_participants == 0.0
        assert snap.participant_holdings == 0.0
    assert monthly[3].exchange_fee == 10.0 * series[3].exchange_fee
    assert monthly[3].active_participants == 10.0


def test_active_participants_follow_timeline() -> None:
    platform = PlatformGrowthConfig(start_count=100, end_count=500, shape="linear")
    tl = build_timeline(platform, _market())
    monthly = aggregate_monthly(build_cohort_set(platform, _market(), _participant(), timeline=tl))
    active = [s.active_participants for s in monthly]
    assert active == pytest.approx(list(tl.total_participants), rel=1e-12)
    assert active[-1] == pytest.approx(500.0)


def test_fees_are_non_negative_and_total_is_sum() -> None:
    platform = PlatformGrowthConfig(start_count=10, end_count=200, shape="exponential")
    monthly = aggregate_monthly(build_cohort_set(platform, _market(), _participant()))
    for s in monthly:
        assert s.yield_fee >= 0.0 and s.exchange_fee >= 0.0
        assert s.total_fee == s.yield_fee + s.exchange_fee


def test_mismatched_series_lengths_raise() -> None:
    a = tuple(simulate_participant(_market(1.0), _participant()))
    b = tuple(simulate_participant(_market(2.0), _participant()))
    with pytest.raises(PreconditionError):
        aggregate_monthly([Cohort(0, 1.0, a), Cohort(0, 1.0, b)])


def test_empty_cohort_list_gives_empty_result() -> None:
    assert aggregate_monthly([]) == []
    assert platform_frame([]).empty


def test_platform_frame_values_fees_at_price() -> None:
    platform = PlatformGrowthConfig(start_count=10, end_count=20, shape="linear")
    monthly = aggregate_monthly(build_cohort_set(platform, _market(1.0), _participant()))
    df = platform_frame(monthly)
    assert list(df.index) == list(range(12))
    assert df["total_fee_value"].iloc[5] == pytest.approx(monthly[5].total_fee * monthly[5].price)
    assert "ending_principal_value" not in df.columns
