"""Date-range filtering, rollups, host ranking and daily bucketing.

Every view re-derives its numbers from the raw session list through these
functions.  They are pure: inputs are never mutated and nothing is cached.

Dates are ``YYYY-MM-DD`` strings and are compared lexicographically, which is
only correct for well-formed ISO dates.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Literal, Sequence

from streamsync.services.records import ACCOUNTS, Host, Session

Currency = Literal["PHP", "USD"]


def filter_by_range(sessions: Iterable[Session], start: str, end: str) -> list[Session]:
    """Sessions whose date lies inclusively within [start, end]."""
    return [s for s in sessions if start <= s.date <= end]


def filter_by_host(sessions: Iterable[Session], host_id: str) -> list[Session]:
    return [s for s in sessions if s.host_id == host_id]


def filter_by_account(sessions: Iterable[Session], account_id: str) -> list[Session]:
    return [s for s in sessions if s.account_id == account_id]


@dataclass(frozen=True)
class Rollup:
    count: int = 0
    total_revenue: float = 0.0
    total_revenue_usd: float = 0.0
    total_duration_minutes: int = 0

    @property
    def avg_revenue(self) -> float:
        return self.total_revenue / self.count if self.count > 0 else 0

    @property
    def avg_revenue_usd(self) -> float:
        return self.total_revenue_usd / self.count if self.count > 0 else 0

    @property
    def total_hours(self) -> float:
        return self.total_duration_minutes / 60

    @property
    def hourly_rate(self) -> float:
        if self.total_duration_minutes > 0:
            return self.total_revenue / (self.total_duration_minutes / 60)
        return 0

    def combine(self, other: Rollup) -> Rollup:
        """Rollup of the union of two disjoint session sets.

        Only the additive totals are summed; averages and the hourly rate are
        properties and so follow from the summed totals.
        """
        return Rollup(
            count=self.count + other.count,
            total_revenue=self.total_revenue + other.total_revenue,
            total_revenue_usd=self.total_revenue_usd + other.total_revenue_usd,
            total_duration_minutes=self.total_duration_minutes + other.total_duration_minutes,
        )


def aggregate(sessions: Iterable[Session]) -> Rollup:
    count = 0
    revenue = 0.0
    revenue_usd = 0.0
    duration = 0
    for s in sessions:
        count += 1
        revenue += s.revenue
        revenue_usd += s.revenue_usd
        duration += s.duration_minutes
    return Rollup(
        count=count,
        total_revenue=revenue,
        total_revenue_usd=revenue_usd,
        total_duration_minutes=duration,
    )


def rollup_for_host(sessions: Iterable[Session], host_id: str) -> Rollup:
    return aggregate(filter_by_host(sessions, host_id))


def rollup_for_account(sessions: Iterable[Session], account_id: str) -> Rollup:
    return aggregate(filter_by_account(sessions, account_id))


# ── Ranking ─────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class HostRollup:
    host: Host
    rollup: Rollup


def host_roster(hosts: Iterable[Host], sessions: Sequence[Session]) -> list[HostRollup]:
    """Every host with its rollup, highest total revenue first (stable)."""
    entries = [HostRollup(host=h, rollup=rollup_for_host(sessions, h.id)) for h in hosts]
    entries.sort(key=lambda e: e.rollup.total_revenue, reverse=True)
    return entries


def rank_hosts(hosts: Iterable[Host], sessions: Sequence[Session]) -> list[HostRollup]:
    """Leaderboard: like the roster, minus hosts with no sessions in the set."""
    return [e for e in host_roster(hosts, sessions) if e.rollup.count > 0]


@dataclass(frozen=True)
class AccountRollup:
    account_id: str
    account_name: str
    rollup: Rollup


def account_rollups(sessions: Sequence[Session]) -> list[AccountRollup]:
    return [
        AccountRollup(account_id=acc_id, account_name=name, rollup=rollup_for_account(sessions, acc_id))
        for acc_id, name in ACCOUNTS.items()
    ]


# ── Time series ─────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class DailyBucket:
    date: str
    revenue: float
    host_names: tuple[str, ...] = ()

    @property
    def label(self) -> str:
        return self.date[5:]


def _amount(session: Session, currency: Currency) -> float:
    return session.revenue_usd if currency == "USD" else session.revenue


def daily_buckets(sessions: Iterable[Session], currency: Currency = "PHP") -> list[DailyBucket]:
    """Revenue summed per exact date, ascending.

    ``host_names`` lists who broadcast that day, for tooltips only.
    """
    totals: dict[str, float] = defaultdict(float)
    names: dict[str, list[str]] = defaultdict(list)
    for s in sessions:
        totals[s.date] += _amount(s, currency)
        if s.host_name not in names[s.date]:
            names[s.date].append(s.host_name)
    return [
        DailyBucket(date=day, revenue=totals[day], host_names=tuple(names[day]))
        for day in sorted(totals)
    ]


@dataclass(frozen=True)
class AccountDay:
    date: str
    big_revenue_usd: float = 0.0
    small_revenue_usd: float = 0.0

    @property
    def label(self) -> str:
        return self.date[5:]


def account_daily_comparison(sessions: Iterable[Session]) -> list[AccountDay]:
    """Per-date USD revenue of the big and small accounts side by side."""
    big: dict[str, float] = defaultdict(float)
    small: dict[str, float] = defaultdict(float)
    for s in sessions:
        if s.account_id == "acc_big":
            big[s.date] += s.revenue_usd
        else:
            small[s.date] += s.revenue_usd
    days = sorted(set(big) | set(small))
    return [AccountDay(date=d, big_revenue_usd=big[d], small_revenue_usd=small[d]) for d in days]


def host_revenue_share(hosts: Iterable[Host], sessions: Sequence[Session]) -> list[tuple[str, float]]:
    """(host name, total PHP revenue) in host order, zero-revenue hosts dropped."""
    share = [(h.name, rollup_for_host(sessions, h.id).total_revenue) for h in hosts]
    return [(name, value) for name, value in share if value > 0]
