"""Date-range filtering, rollups, ranking and daily bucketing."""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(__file__))

from streamsync.services.aggregation import (
    Rollup,
    account_daily_comparison,
    account_rollups,
    aggregate,
    daily_buckets,
    filter_by_range,
    host_revenue_share,
    host_roster,
    rank_hosts,
    rollup_for_host,
)
from streamsync.services.records import Host, HostStatus, Session

HOSTS = [
    Host("h1", "Angela", "", "2024-01-01"),
    Host("h2", "Miguel", "", "2024-01-01"),
    Host("h3", "Bea", "", "2024-01-01", HostStatus.ON_LEAVE),
]


def make_session(id_, host_id="h1", date="2025-11-05", revenue=1000.0,
                 revenue_usd=17.1, duration=120, account_id="acc_big"):
    names = {h.id: h.name for h in HOSTS}
    return Session(
        id=id_,
        host_id=host_id,
        host_name=names.get(host_id, host_id),
        account_id=account_id,
        account_name="anta_globalstore" if account_id == "acc_big" else "keepmovingofficial",
        date=date,
        start_time="19:00",
        duration_minutes=duration,
        revenue=revenue,
        revenue_usd=revenue_usd,
        views=100,
    )


# ── filter_by_range ──────────────────────────────────────────────────────────
def test_range_includes_dates_inside_window():
    s = make_session("a", date="2025-11-15")
    assert filter_by_range([s], "2025-11-01", "2025-11-30") == [s]
    assert filter_by_range([s], "2025-12-01", "2025-12-31") == []


def test_range_is_inclusive_on_both_ends():
    first = make_session("a", date="2025-11-01")
    last = make_session("b", date="2025-11-30")
    outside = make_session("c", date="2025-12-01")
    assert filter_by_range([first, last, outside], "2025-11-01", "2025-11-30") == [first, last]


def test_inverted_range_is_empty():
    s = make_session("a", date="2025-11-15")
    assert filter_by_range([s], "2025-11-30", "2025-11-01") == []


def test_range_does_not_mutate_input():
    sessions = [make_session("a", date="2025-10-01"), make_session("b", date="2025-11-02")]
    snapshot = list(sessions)
    filter_by_range(sessions, "2025-11-01", "2025-11-30")
    assert sessions == snapshot


# ── aggregate ────────────────────────────────────────────────────────────────
def test_empty_aggregate_is_all_zero():
    r = aggregate([])
    assert (r.count, r.total_revenue, r.total_revenue_usd, r.total_duration_minutes) == (0, 0, 0, 0)
    assert r.avg_revenue == 0
    assert r.hourly_rate == 0
    assert r.avg_revenue_usd == 0


def test_zero_duration_gives_zero_hourly_rate():
    r = Rollup(count=1, total_revenue=500.0, total_revenue_usd=8.5, total_duration_minutes=0)
    assert r.hourly_rate == 0
    assert r.avg_revenue == 500.0


def test_usd_total_is_summed_not_converted():
    sessions = [
        make_session("a", revenue=1000, revenue_usd=17.0),
        make_session("b", revenue=1000, revenue_usd=20.0),
    ]
    assert aggregate(sessions).total_revenue_usd == pytest.approx(37.0)


def test_additive_fields_combine_and_derived_fields_are_recomputed():
    left = [make_session("a", revenue=1000, duration=60), make_session("b", revenue=3000, duration=60)]
    right = [make_session("c", revenue=200, duration=240)]

    combined = aggregate(left).combine(aggregate(right))
    union = aggregate(left + right)

    assert combined.count == union.count == 3
    assert combined.total_revenue == union.total_revenue == 4200
    assert combined.total_revenue_usd == pytest.approx(union.total_revenue_usd)
    assert combined.total_duration_minutes == union.total_duration_minutes == 360
    assert combined.avg_revenue == union.avg_revenue == 1400
    assert combined.hourly_rate == union.hourly_rate == 700

    averaged = (aggregate(left).avg_revenue + aggregate(right).avg_revenue) / 2
    assert averaged != union.avg_revenue


def test_host_scenario_over_november():
    sessions = [
        make_session("a", date="2025-11-05", revenue=1000, revenue_usd=17.1, duration=120),
        make_session("b", date="2025-11-06", revenue=2000, revenue_usd=34.2, duration=180),
    ]
    r = rollup_for_host(filter_by_range(sessions, "2025-11-01", "2025-11-30"), "h1")
    assert r.count == 2
    assert r.total_revenue == 3000
    assert r.total_duration_minutes == 300
    assert r.avg_revenue == 1500
    assert r.hourly_rate == 600
    assert r.total_revenue_usd == pytest.approx(51.3)


def test_account_rollups_cover_both_accounts():
    sessions = [
        make_session("a", account_id="acc_big", revenue_usd=10),
        make_session("b", account_id="acc_small", revenue_usd=4),
        make_session("c", account_id="acc_small", revenue_usd=6),
    ]
    by_id = {a.account_id: a for a in account_rollups(sessions)}
    assert by_id["acc_big"].rollup.count == 1
    assert by_id["acc_small"].rollup.avg_revenue_usd == pytest.approx(5)
    assert by_id["acc_small"].account_name == "keepmovingofficial"


# ── ranking ──────────────────────────────────────────────────────────────────
def test_ranking_drops_hosts_without_sessions_and_sorts_descending():
    sessions = [
        make_session("a", host_id="h1", revenue=1000),
        make_session("b", host_id="h2", revenue=5000),
    ]
    ranked = rank_hosts(HOSTS, sessions)
    assert [e.host.id for e in ranked] == ["h2", "h1"]


def test_ranking_ties_keep_host_order():
    sessions = [
        make_session("a", host_id="h2", revenue=1000),
        make_session("b", host_id="h1", revenue=1000),
    ]
    assert [e.host.id for e in rank_hosts(HOSTS, sessions)] == ["h1", "h2"]


def test_zero_revenue_host_with_sessions_stays_ranked():
    sessions = [make_session("a", host_id="h3", revenue=0, revenue_usd=0)]
    assert [e.host.id for e in rank_hosts(HOSTS, sessions)] == ["h3"]


def test_roster_keeps_every_host():
    sessions = [make_session("a", host_id="h2", revenue=10)]
    roster = host_roster(HOSTS, sessions)
    assert [e.host.id for e in roster] == ["h2", "h1", "h3"]
    assert roster[1].rollup.count == 0


# ── time series ──────────────────────────────────────────────────────────────
def test_daily_buckets_sum_per_date_in_ascending_order():
    sessions = [
        make_session("a", host_id="h2", date="2025-11-06", revenue=300, revenue_usd=5),
        make_session("b", host_id="h1", date="2025-11-05", revenue=100, revenue_usd=2),
        make_session("c", host_id="h1", date="2025-11-06", revenue=200, revenue_usd=3),
    ]
    buckets = daily_buckets(sessions)
    assert [(b.date, b.revenue) for b in buckets] == [("2025-11-05", 100), ("2025-11-06", 500)]
    assert buckets[1].label == "11-06"
    assert buckets[1].host_names == ("Miguel", "Angela")

    usd = daily_buckets(sessions, "USD")
    assert [b.revenue for b in usd] == [2, 8]


def test_daily_buckets_of_empty_set():
    assert daily_buckets([]) == []


def test_account_daily_comparison_splits_usd_by_account():
    sessions = [
        make_session("a", date="2025-11-02", account_id="acc_small", revenue_usd=4),
        make_session("b", date="2025-11-01", account_id="acc_big", revenue_usd=10),
        make_session("c", date="2025-11-02", account_id="acc_big", revenue_usd=7),
    ]
    days = account_daily_comparison(sessions)
    assert [(d.label, d.big_revenue_usd, d.small_revenue_usd) for d in days] == [
        ("11-01", 10, 0),
        ("11-02", 7, 4),
    ]


def test_host_revenue_share_drops_zero_revenue_hosts():
    sessions = [make_session("a", host_id="h2", revenue=900), make_session("b", host_id="h2", revenue=100)]
    assert host_revenue_share(HOSTS, sessions) == [("Miguel", 1000)]
