"""
api/routes/districts.py -- District CRUD routes.

Routes:
  POST   /districts/                -- create a district
  GET    /districts/{district_id}/  -- one district
  PUT    /districts/{district_id}/  -- replace every field of a district
  DELETE /districts/{district_id}/  -- remove a district

Every route requires a valid Bearer token (router-level dependency).
Writes check that the referenced state exists and answer 404 otherwise.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from api.models import DistrictBody, DistrictResponse, ErrorDetail, MessageResponse
from auth.dependencies import get_current_user
from portal.store import PortalStore

router = APIRouter(dependencies=[Depends(get_current_user)])


def _not_found(code: str, message: str) -> HTTPException:
    return HTTPException(status_code=404, detail=ErrorDetail(code=code, message=message).model_dump())


def _require_state(portal: PortalStore, state_id: int) -> None:
    if portal.get_state(state_id) is None:
        raise _not_found("state_not_found", "State not found")


@router.post("/districts/", response_model=MessageResponse)
def create_district(request: Request, body: DistrictBody) -> MessageResponse:
    portal: PortalStore = request.app.state.portal
    _require_state(portal, body.state_id)
    portal.create_district(body.to_district())
    return MessageResponse(message="District Successfully Added")


@router.get("/districts/{district_id}/", response_model=DistrictResponse)
def get_district(request: Request, district_id: int) -> DistrictResponse:
    portal: PortalStore = request.app.state.portal
    district = portal.get_district(district_id)
    if district is None:
        raise _not_found("district_not_found", "District not found")
    return DistrictResponse.from_district(district)


@router.put("/districts/{district_id}/", response_model=MessageResponse)
def update_district(request: Request, district_id: int, body: DistrictBody) -> MessageResponse:
    portal: PortalStore = request.app.state.portal
    if portal.get_district(district_id) is None:
        raise _not_found("district_not_found", "District not found")
    _require_state(portal, body.state_id)
    portal.update_district(district_id, body.to_district())
    return MessageResponse(message="District Details Updated")


@router.delete("/districts/{district_id}/", response_model=MessageResponse)
def delete_district(request: Request, district_id: int) -> MessageResponse:
    portal: PortalStore = request.app.state.portal
    if not portal.delete_district(district_id):
        raise _not_found("district_not_found", "District not found")
    return MessageResponse(message="District Removed")
