"""
Overview dashboard and service health.

  GET /api/health
  GET /api/dashboard?start=YYYY-MM-DD&end=YYYY-MM-DD

The KPI cards always use the fixed dataset anchors (current month, last seven
days); the leaderboard and the daily chart follow the selected period, which
defaults to the current month.
"""
from fastapi import APIRouter, Depends

from streamsync.schemas.response import (
    ActivityOut,
    DailyBucketOut,
    DashboardResponse,
    HealthResponse,
    HostRollupOut,
    KpiCards,
    Period,
    SessionOut,
)
from streamsync.services.aggregation import (
    aggregate,
    daily_buckets,
    filter_by_range,
    rank_hosts,
)
from streamsync.services.app_state import AppState, get_app_state

APP_VERSION = "0.3.0"

router = APIRouter(tags=["dashboard"])


@router.get("/api/health", response_model=HealthResponse)
def get_health(state: AppState = Depends(get_app_state)) -> HealthResponse:
    """Return service status, Gemini availability and activity counters."""
    return HealthResponse(
        version=APP_VERSION,
        gemini_configured=bool(state.settings.gemini_api_key),
        report_generating=state.report_generating,
        stats=ActivityOut.model_validate(state.activity),
    )


@router.get("/api/dashboard", response_model=DashboardResponse)
def get_dashboard(
    start: str | None = None,
    end: str | None = None,
    state: AppState = Depends(get_app_state),
) -> DashboardResponse:
    settings = state.settings
    start = start or settings.current_month_start
    end = end or settings.current_month_end
    sessions = state.store.sessions

    month = aggregate(filter_by_range(sessions, settings.current_month_start, settings.current_month_end))
    week = aggregate(filter_by_range(sessions, settings.last_week_start, settings.current_month_end))

    window = filter_by_range(sessions, start, end)
    recent = sessions[max(len(sessions) - settings.recent_sessions_limit, 0):][::-1]

    return DashboardResponse(
        period=Period(start=start, end=end),
        kpis=KpiCards(
            month_revenue_usd=month.total_revenue_usd,
            week_revenue=week.total_revenue,
            month_hours=month.total_hours,
            active_hosts=len(state.store.active_hosts()),
        ),
        host_rankings=[HostRollupOut.model_validate(e) for e in rank_hosts(state.store.hosts, window)],
        daily_revenue=[DailyBucketOut.model_validate(b) for b in daily_buckets(window, "PHP")],
        recent_sessions=[SessionOut.model_validate(s) for s in recent],
    )
