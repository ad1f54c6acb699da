"""
Host roster.

  GET /api/hosts?start=YYYY-MM-DD&end=YYYY-MM-DD
  GET /api/hosts/active
"""
from fastapi import APIRouter, Depends

from streamsync.schemas.response import HostOut, HostRollupOut, HostsResponse, Period
from streamsync.services.aggregation import filter_by_range, host_roster
from streamsync.services.app_state import AppState, get_app_state

router = APIRouter(tags=["hosts"])


@router.get("/api/hosts", response_model=HostsResponse)
def list_hosts(
    start: str | None = None,
    end: str | None = None,
    state: AppState = Depends(get_app_state),
) -> HostsResponse:
    """Every host with its stats for the period, best earners first."""
    start = start or state.settings.current_month_start
    end = end or state.settings.current_month_end
    window = filter_by_range(state.store.sessions, start, end)
    return HostsResponse(
        period=Period(start=start, end=end),
        hosts=[HostRollupOut.model_validate(e) for e in host_roster(state.store.hosts, window)],
    )


@router.get("/api/hosts/active", response_model=list[HostOut])
def list_active_hosts(state: AppState = Depends(get_app_state)) -> list[HostOut]:
    """Hosts selectable on the session-entry form."""
    return [HostOut.model_validate(h) for h in state.store.active_hosts()]
