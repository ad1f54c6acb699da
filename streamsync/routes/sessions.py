"""
Data center and session entry.

  GET    /api/sessions?q=term
  GET    /api/sessions/{session_id}
  POST   /api/sessions
  PUT    /api/sessions/{session_id}
  DELETE /api/sessions/{session_id}
"""
from fastapi import APIRouter, Depends, HTTPException, Response

from streamsync.schemas.response import (
    SearchResponse,
    SessionCreate,
    SessionOut,
    SessionUpdate,
)
from streamsync.services.app_state import AppState, get_app_state
from streamsync.services.records import InvalidSessionError, SessionNotFoundError

router = APIRouter(tags=["sessions"])


@router.get("/api/sessions", response_model=SearchResponse)
def search_sessions(q: str = "", state: AppState = Depends(get_app_state)) -> SearchResponse:
    """Search by host, account or date; newest first, capped for display."""
    result = state.store.search(q, limit=state.settings.search_display_limit)
    return SearchResponse(
        term=q,
        total=result.total,
        limit=result.limit,
        limited=result.limited,
        sessions=[SessionOut.model_validate(s) for s in result.sessions],
    )


@router.get("/api/sessions/{session_id}", response_model=SessionOut)
def get_session(session_id: str, state: AppState = Depends(get_app_state)) -> SessionOut:
    session = state.store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found.")
    return SessionOut.model_validate(session)


@router.post("/api/sessions", response_model=SessionOut, status_code=201)
def log_session(body: SessionCreate, state: AppState = Depends(get_app_state)) -> SessionOut:
    try:
        session = state.log_session(**body.model_dump())
    except InvalidSessionError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return SessionOut.model_validate(session)


@router.put("/api/sessions/{session_id}", response_model=SessionOut)
def update_session(
    session_id: str,
    body: SessionUpdate,
    state: AppState = Depends(get_app_state),
) -> SessionOut:
    try:
        session = state.update_session(session_id, body.model_dump(exclude_none=True))
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except InvalidSessionError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return SessionOut.model_validate(session)


@router.delete("/api/sessions/{session_id}", status_code=204)
def delete_session(session_id: str, state: AppState = Depends(get_app_state)) -> Response:
    """Deleting an unknown id is not an error."""
    state.delete_session(session_id)
    return Response(status_code=204)
