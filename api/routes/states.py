"""
api/routes/states.py -- Read-only state routes.

Routes:
  GET /states/                   -- list all states
  GET /states/{state_id}/        -- one state
  GET /states/{state_id}/stats/  -- case totals over the state's districts

Every route requires a valid Bearer token (router-level dependency).
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from api.models import ErrorDetail, StateResponse, StateStatsResponse
from auth.dependencies import get_current_user
from portal.store import PortalStore

router = APIRouter(dependencies=[Depends(get_current_user)])


def _state_not_found() -> HTTPException:
    return HTTPException(
        status_code=404,
        detail=ErrorDetail(code="state_not_found", message="State not found").model_dump(),
    )


@router.get("/states/", response_model=list[StateResponse])
def list_states(request: Request) -> list[StateResponse]:
    portal: PortalStore = request.app.state.portal
    return [StateResponse.from_state(s) for s in portal.list_states()]


@router.get("/states/{state_id}/", response_model=StateResponse)
def get_state(request: Request, state_id: int) -> StateResponse:
    portal: PortalStore = request.app.state.portal
    state = portal.get_state(state_id)
    if state is None:
        raise _state_not_found()
    return StateResponse.from_state(state)


@router.get("/states/{state_id}/stats/", response_model=StateStatsResponse)
def get_state_stats(request: Request, state_id: int) -> StateStatsResponse:
    """Return totalCases/totalCured/totalActive/totalDeaths for one state.

    A state with no districts reports zeros; an unknown state is a 404.
    """
    portal: PortalStore = request.app.state.portal
    if portal.get_state(state_id) is None:
        raise _state_not_found()
    return StateStatsResponse.from_stats(portal.get_state_stats(state_id))
