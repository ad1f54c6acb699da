"""Application state container shared by all routes.

One ``AppState`` is created per app and handed to the route handlers through
the ``get_app_state`` dependency.  Every mutation goes through a named
operation here rather than touching the store directly.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from fastapi import Request

from streamsync.config import Settings
from streamsync.services.gemini_report import ReportRequestor
from streamsync.services.record_store import (
    RecordStore,
    coerce_numeric,
    resolve_display_fields,
)
from streamsync.services.records import InvalidSessionError, Session
from streamsync.services.session_stats import ActivityStats

logger = logging.getLogger(__name__)


class View(str, Enum):
    DASHBOARD = "DASHBOARD"
    ANALYTICS = "ANALYTICS"
    HOSTS = "HOSTS"
    LOG_SESSION = "LOG_SESSION"
    DATA_CENTER = "DATA_CENTER"


@dataclass
class AppState:
    settings: Settings
    store: RecordStore
    report_requestor: ReportRequestor
    current_view: View = View.DASHBOARD
    report_generating: bool = False
    last_report: str | None = None
    activity: ActivityStats = field(default_factory=ActivityStats)

    def navigate(self, view: View) -> View:
        logger.debug("View: %s -> %s", self.current_view.value, view.value)
        self.current_view = view
        return view

    def log_session(
        self,
        host_id: str,
        account_id: str,
        date: str,
        start_time: str,
        duration_minutes: Any,
        revenue: Any,
        views: Any = 0,
        revenue_usd: Any = None,
    ) -> Session:
        """Record a new broadcast and return to the dashboard.

        Only active hosts can be logged.  When no USD amount is given it is
        derived from the PHP revenue at the configured rate.
        """
        host = self.store.get_host(host_id)
        if host is None or not host.is_active:
            raise InvalidSessionError(f"Host '{host_id}' is not an active host.")
        host_name, account_name = resolve_display_fields(self.store.hosts, host_id, account_id)

        revenue = coerce_numeric("revenue", revenue)
        if revenue_usd is None:
            revenue_usd = revenue / self.settings.php_per_usd

        session = self.store.create(Session(
            id="",
            host_id=host_id,
            host_name=host_name,
            account_id=account_id,
            account_name=account_name,
            date=date,
            start_time=start_time,
            duration_minutes=coerce_numeric("duration_minutes", duration_minutes),
            revenue=revenue,
            revenue_usd=coerce_numeric("revenue_usd", revenue_usd),
            views=coerce_numeric("views", views),
        ))
        self.activity.sessions_logged += 1
        self.navigate(View.DASHBOARD)
        return session

    def update_session(self, session_id: str, patch: dict[str, Any]) -> Session:
        session = self.store.update(session_id, patch)
        self.activity.sessions_updated += 1
        return session

    def delete_session(self, session_id: str) -> None:
        if self.store.delete(session_id):
            self.activity.sessions_deleted += 1

    # ── Report generation ───────────────────────────────────────────────
    def begin_report(self) -> bool:
        """Enter the generating state; False if a report is already pending."""
        if self.report_generating:
            return False
        self.report_generating = True
        return True

    def finish_report(self, report: str | None) -> None:
        self.report_generating = False
        if report is not None:
            self.last_report = report
            self.activity.reports_generated += 1


def get_app_state(request: Request) -> AppState:
    return request.app.state.dashboard
