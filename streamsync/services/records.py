"""Host and Session records plus the errors raised when writing them."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class HostStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    ON_LEAVE = "On Leave"


# The two storefronts sessions are attributed to: account id -> display name
ACCOUNTS: dict[str, str] = {
    "acc_big": "anta_globalstore",
    "acc_small": "keepmovingofficial",
}


@dataclass(frozen=True)
class Host:
    id: str
    name: str
    avatar: str
    join_date: str
    status: HostStatus = HostStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status is HostStatus.ACTIVE


@dataclass(frozen=True)
class Session:
    """One live-streaming broadcast.

    ``host_name`` and ``account_name`` are snapshots taken when the record is
    written; they are not refreshed if the host is renamed later.
    ``revenue`` is PHP and ``revenue_usd`` is USD, stored independently.
    """

    id: str
    host_id: str
    host_name: str
    account_id: str
    account_name: str
    date: str
    start_time: str
    duration_minutes: int
    revenue: float
    revenue_usd: float
    views: int = 0


class StreamSyncError(Exception):
    """Base class for record-store errors."""


class SessionNotFoundError(StreamSyncError):
    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session '{session_id}' not found.")
        self.session_id = session_id


class InvalidSessionError(StreamSyncError, ValueError):
    """Raised when a session write carries unusable field values."""
