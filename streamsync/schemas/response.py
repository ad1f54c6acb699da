from pydantic import BaseModel, ConfigDict, Field

from streamsync.services.app_state import View
from streamsync.services.records import HostStatus

ISO_DATE = r"^\d{4}-\d{2}-\d{2}$"
HH_MM = r"^\d{2}:\d{2}$"


class _FromAttributes(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# ── Records ───────────────────────────────────────────────────────────────────
class HostOut(_FromAttributes):
    id: str
    name: str
    avatar: str
    join_date: str
    status: HostStatus


class SessionOut(_FromAttributes):
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
    views: int


# ── Session-entry form / data-center edit ────────────────────────────────────
class SessionCreate(BaseModel):
    host_id: str
    account_id: str = "acc_big"
    date: str = Field(pattern=ISO_DATE)
    start_time: str = Field("19:00", pattern=HH_MM)
    duration_minutes: int = Field(120, gt=0)
    revenue: float = 0
    revenue_usd: float | None = None
    views: int = Field(0, ge=0)


class SessionUpdate(BaseModel):
    host_id: str | None = None
    account_id: str | None = None
    date: str | None = Field(None, pattern=ISO_DATE)
    start_time: str | None = Field(None, pattern=HH_MM)
    duration_minutes: int | None = Field(None, gt=0)
    revenue: float | None = None
    revenue_usd: float | None = None
    views: int | None = Field(None, ge=0)


class SearchResponse(BaseModel):
    term: str
    total: int
    limit: int
    limited: bool
    sessions: list[SessionOut]


# ── Derived metrics ───────────────────────────────────────────────────────────
class RollupOut(_FromAttributes):
    count: int
    total_revenue: float
    total_revenue_usd: float
    total_duration_minutes: int
    total_hours: float
    avg_revenue: float
    avg_revenue_usd: float
    hourly_rate: float


class HostRollupOut(_FromAttributes):
    host: HostOut
    rollup: RollupOut


class AccountRollupOut(_FromAttributes):
    account_id: str
    account_name: str
    rollup: RollupOut


class DailyBucketOut(_FromAttributes):
    date: str
    label: str
    revenue: float
    host_names: list[str]


class AccountDayOut(_FromAttributes):
    date: str
    label: str
    big_revenue_usd: float
    small_revenue_usd: float


class HostShare(BaseModel):
    name: str
    value: float


class DurationRevenuePoint(BaseModel):
    label: str
    date: str
    host_name: str
    duration: int
    revenue: float


class Period(BaseModel):
    start: str
    end: str


# ── Views ─────────────────────────────────────────────────────────────────────
class KpiCards(BaseModel):
    month_revenue_usd: float
    week_revenue: float
    month_hours: float
    active_hosts: int


class DashboardResponse(BaseModel):
    period: Period
    kpis: KpiCards
    host_rankings: list[HostRollupOut]
    daily_revenue: list[DailyBucketOut]
    recent_sessions: list[SessionOut]


class AnalyticsResponse(BaseModel):
    period: Period
    accounts: list[AccountRollupOut]
    daily_comparison: list[AccountDayOut]
    revenue_by_host: list[HostShare]
    duration_revenue: list[DurationRevenuePoint]


class HostsResponse(BaseModel):
    period: Period
    hosts: list[HostRollupOut]


class ReportBlockOut(_FromAttributes):
    kind: str
    text: str
    level: int


class ReportResponse(BaseModel):
    report: str
    blocks: list[ReportBlockOut]
    html: str


class ViewState(BaseModel):
    view: View


# ── Health ────────────────────────────────────────────────────────────────────
class ActivityOut(_FromAttributes):
    sessions_logged: int
    sessions_updated: int
    sessions_deleted: int
    reports_generated: int
    uptime_seconds: int


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    gemini_configured: bool
    report_generating: bool
    stats: ActivityOut
