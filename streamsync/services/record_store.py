"""In-memory Host / Session store backing every view.

State lives only in process memory and is rebuilt from the seed data on
restart.  Route handlers run in the server threadpool, so every write (and the
id allocation it depends on) happens under the store lock.
"""
from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Iterable

from streamsync.config import get_settings
from streamsync.services.records import (
    ACCOUNTS,
    Host,
    InvalidSessionError,
    Session,
    SessionNotFoundError,
)

logger = logging.getLogger(__name__)

# field name -> target type; values are coerced before they are stored
NUMERIC_FIELDS: dict[str, type] = {
    "revenue": float,
    "revenue_usd": float,
    "duration_minutes": int,
    "views": int,
}

def resolve_display_fields(
    hosts: Iterable[Host], host_id: str, account_id: str,
) -> tuple[str, str]:
    """Return the (host_name, account_name) snapshot for a session write."""
    host = next((h for h in hosts if h.id == host_id), None)
    if host is None:
        raise InvalidSessionError(f"Unknown host '{host_id}'.")
    account_name = ACCOUNTS.get(account_id)
    if account_name is None:
        raise InvalidSessionError(f"Unknown account '{account_id}'.")
    return host.name, account_name


def coerce_numeric(name: str, value: Any) -> int | float:
    """Coerce a form value to the field's numeric type.

    Non-numeric, NaN and infinite values are rejected rather than stored.
    """
    kind = NUMERIC_FIELDS[name]
    if isinstance(value, bool):
        raise InvalidSessionError(f"{name} must be numeric, got {value!r}.")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidSessionError(f"{name} must be numeric, got {value!r}.") from exc
    if not math.isfinite(number):
        raise InvalidSessionError(f"{name} must be a finite number, got {value!r}.")

    if kind is int:
        if not number.is_integer():
            raise InvalidSessionError(f"{name} must be a whole number, got {value!r}.")
        number = int(number)

    if name == "duration_minutes" and number <= 0:
        raise InvalidSessionError("duration_minutes must be positive.")
    if name == "views" and number < 0:
        raise InvalidSessionError("views must not be negative.")
    return number


@dataclass
class SearchResult:
    sessions: list[Session]
    total: int
    limit: int

    @property
    def limited(self) -> bool:
        return self.total > self.limit


@dataclass
class RecordStore:
    hosts: list[Host] = field(default_factory=list)
    sessions: list[Session] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    # ── Hosts (read-only) ───────────────────────────────────────────────
    def get_host(self, host_id: str) -> Host | None:
        return next((h for h in self.hosts if h.id == host_id), None)

    def active_hosts(self) -> list[Host]:
        return [h for h in self.hosts if h.is_active]

    # ── Sessions ────────────────────────────────────────────────────────
    def get(self, session_id: str) -> Session | None:
        return next((s for s in self.sessions if s.id == session_id), None)

    def create(self, session: Session) -> Session:
        """Append *session* under a freshly generated id.

        Repeated host/date/account combinations are legal (several
        broadcasts a day), so no business-level duplicate check is made.
        """
        with self._lock:
            stored = replace(session, id=self._next_id())
            self.sessions.append(stored)
        logger.info(
            "Session created: id=%s host=%s account=%s date=%s",
            stored.id, stored.host_id, stored.account_id, stored.date,
        )
        return stored

    def update(self, session_id: str, patch: dict[str, Any]) -> Session:
        """Merge *patch* over the stored record and replace it in place."""
        with self._lock:
            for index, current in enumerate(self.sessions):
                if current.id == session_id:
                    break
            else:
                raise SessionNotFoundError(session_id)

            merged = asdict(current)
            merged.update((k, v) for k, v in patch.items() if k in merged and k != "id")
            for name in NUMERIC_FIELDS:
                merged[name] = coerce_numeric(name, merged[name])
            merged["host_name"], merged["account_name"] = resolve_display_fields(
                self.hosts, merged["host_id"], merged["account_id"],
            )

            updated = Session(**merged)
            self.sessions[index] = updated
        logger.info("Session updated: id=%s fields=%s", session_id, sorted(patch))
        return updated

    def delete(self, session_id: str) -> bool:
        """Remove the session; unknown ids are a no-op.  Returns whether one was removed."""
        with self._lock:
            before = len(self.sessions)
            self.sessions = [s for s in self.sessions if s.id != session_id]
            removed = len(self.sessions) != before
        if removed:
            logger.info("Session deleted: id=%s", session_id)
        return removed

    def search(self, term: str = "", limit: int | None = None) -> SearchResult:
        """Match host/account names (case-insensitive) or the date string.

        Results are newest first and capped at *limit* rows; ``total`` keeps
        the full match count so callers can tell the cap was applied.
        """
        if limit is None:
            limit = get_settings().search_display_limit
        needle = term.lower()
        matches = [
            s for s in self.sessions
            if needle in s.host_name.lower()
            or needle in s.account_name.lower()
            or term in s.date
        ]
        matches.sort(key=lambda s: s.date, reverse=True)
        return SearchResult(sessions=matches[:limit], total=len(matches), limit=limit)

    def _next_id(self) -> str:
        # caller holds the lock
        base = f"s{int(time.time() * 1000)}"
        taken = {s.id for s in self.sessions}
        candidate = base
        suffix = 1
        while candidate in taken:
            suffix += 1
            candidate = f"{base}-{suffix}"
        return candidate
