"""
Analytics view and AI report.

  GET  /api/analytics
  POST /api/analytics/report

The account comparison covers the current month only; the host share and the
duration/revenue series use the whole history.  The report is built from the
full, unfiltered record set.
"""
import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException

from streamsync.schemas.response import (
    AccountDayOut,
    AccountRollupOut,
    AnalyticsResponse,
    DurationRevenuePoint,
    HostShare,
    Period,
    ReportBlockOut,
    ReportResponse,
)
from streamsync.services.aggregation import (
    account_daily_comparison,
    account_rollups,
    filter_by_range,
    host_revenue_share,
)
from streamsync.services.app_state import AppState, get_app_state
from streamsync.services.report_markdown import format_report, render_html

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analytics"])


@router.get("/api/analytics", response_model=AnalyticsResponse)
def get_analytics(state: AppState = Depends(get_app_state)) -> AnalyticsResponse:
    settings = state.settings
    sessions = state.store.sessions
    month = filter_by_range(sessions, settings.current_month_start, settings.current_month_end)

    return AnalyticsResponse(
        period=Period(start=settings.current_month_start, end=settings.current_month_end),
        accounts=[AccountRollupOut.model_validate(a) for a in account_rollups(month)],
        daily_comparison=[AccountDayOut.model_validate(d) for d in account_daily_comparison(month)],
        revenue_by_host=[
            HostShare(name=name, value=value)
            for name, value in host_revenue_share(state.store.hosts, sessions)
        ],
        duration_revenue=[
            DurationRevenuePoint(
                label=s.date[5:],
                date=s.date,
                host_name=s.host_name,
                duration=s.duration_minutes,
                revenue=s.revenue,
            )
            for s in sessions
        ],
    )


@router.post("/api/analytics/report", response_model=ReportResponse)
async def generate_report(state: AppState = Depends(get_app_state)) -> ReportResponse:
    """Ask Gemini for a performance report over the full history.

    Only one report can be pending at a time; a second request while one is
    running gets 409.  Gemini failures come back as fallback text, not errors.
    """
    if not state.begin_report():
        logger.info("Report request rejected: one is already pending")
        raise HTTPException(status_code=409, detail="A report is already being generated.")

    report: str | None = None
    try:
        loop = asyncio.get_running_loop()
        report = await loop.run_in_executor(
            None,
            state.report_requestor.generate_report,
            list(state.store.sessions),
            list(state.store.hosts),
        )
    finally:
        state.finish_report(report)

    blocks = format_report(report)
    return ReportResponse(
        report=report,
        blocks=[ReportBlockOut.model_validate(b) for b in blocks],
        html=render_html(blocks),
    )
