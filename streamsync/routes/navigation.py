"""
Current view of the single-page front-end.

  GET /api/view
  PUT /api/view
"""
from fastapi import APIRouter, Depends

from streamsync.schemas.response import ViewState
from streamsync.services.app_state import AppState, get_app_state

router = APIRouter(tags=["navigation"])


@router.get("/api/view", response_model=ViewState)
def get_view(state: AppState = Depends(get_app_state)) -> ViewState:
    return ViewState(view=state.current_view)


@router.put("/api/view", response_model=ViewState)
def set_view(body: ViewState, state: AppState = Depends(get_app_state)) -> ViewState:
    return ViewState(view=state.navigate(body.view))
