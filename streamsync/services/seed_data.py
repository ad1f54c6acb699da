"""Demo hosts and sessions the store is reset to on every start.

The session history is generated from a fixed random seed, so the same
October / November 2025 dataset comes back after each restart.  USD amounts
are drawn with a slightly varying PHP/USD rate per record, the way historical
entries were keyed in at different effective rates.
"""
from __future__ import annotations

import random
from datetime import date, timedelta

from streamsync.services.records import ACCOUNTS, Host, HostStatus, Session

SEED = 20251121

DATA_START = date(2025, 10, 1)
DATA_END = date(2025, 11, 21)

SEED_HOSTS: tuple[Host, ...] = (
    Host("h1", "Angela Cruz", "https://picsum.photos/seed/h1/100/100", "2024-03-15", HostStatus.ACTIVE),
    Host("h2", "Miguel Santos", "https://picsum.photos/seed/h2/100/100", "2024-06-01", HostStatus.ACTIVE),
    Host("h3", "Bea Reyes", "https://picsum.photos/seed/h3/100/100", "2024-09-10", HostStatus.ACTIVE),
    Host("h4", "Joshua Tan", "https://picsum.photos/seed/h4/100/100", "2025-01-20", HostStatus.ACTIVE),
    Host("h5", "Kim Dela Rosa", "https://picsum.photos/seed/h5/100/100", "2024-11-05", HostStatus.ON_LEAVE),
    Host("h6", "Paolo Garcia", "https://picsum.photos/seed/h6/100/100", "2024-02-12", HostStatus.INACTIVE),
)

# Last date each non-active host still broadcast
_LAST_ON_AIR = {"h5": date(2025, 11, 7), "h6": date(2025, 10, 18)}

# account id -> (min, max) PHP revenue per session
_REVENUE_RANGE = {"acc_big": (18_000, 95_000), "acc_small": (4_000, 32_000)}

_START_TIMES = ("10:00", "14:00", "19:00", "21:00")


def _hosts_on_air(day: date) -> list[Host]:
    return [h for h in SEED_HOSTS if day <= _LAST_ON_AIR.get(h.id, DATA_END)]


def build_seed_sessions() -> list[Session]:
    rng = random.Random(SEED)
    sessions: list[Session] = []
    day = DATA_START
    while day <= DATA_END:
        for account_id, account_name in ACCOUNTS.items():
            lo, hi = _REVENUE_RANGE[account_id]
            per_day = 2 if account_id == "acc_big" and day.weekday() >= 4 else 1
            for host, start_time in zip(
                rng.sample(_hosts_on_air(day), per_day),
                sorted(rng.sample(_START_TIMES, per_day)),
            ):
                revenue = round(rng.uniform(lo, hi), 2)
                rate = rng.uniform(56.8, 58.9)
                sessions.append(Session(
                    id=f"s{len(sessions) + 1:04d}",
                    host_id=host.id,
                    host_name=host.name,
                    account_id=account_id,
                    account_name=account_name,
                    date=day.isoformat(),
                    start_time=start_time,
                    duration_minutes=rng.choice((90, 120, 150, 180, 240)),
                    revenue=revenue,
                    revenue_usd=round(revenue / rate, 2),
                    views=rng.randint(800, 15_000),
                ))
        day += timedelta(days=1)
    return sessions


def seed_hosts() -> list[Host]:
    return list(SEED_HOSTS)
