"""
Building listing API endpoints: submission with photos, lookup, filtering,
removal and the admin approval workflow.
"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import Response
from typing import Optional

from rental_premises.models.building import Building
from rental_premises.models.user import User
from rental_premises.services.building import BuildingService
from rental_premises.schemas.building import BuildingResponse, BuildingListResponse
from rental_premises.utils.dependencies import (
    get_building_service,
    get_current_admin_user,
    get_current_user,
    get_current_username
)
from rental_premises.utils.exceptions import (
    BuildingNotFoundError,
    InsufficientPermissionsError,
    UnauthorizedError
)


router = APIRouter(prefix="/buildings", tags=["Buildings"])


def _to_response(building: Building) -> BuildingResponse:
    return BuildingResponse.model_validate(building.to_dict(include_images=True))


@router.post(
    "",
    response_model=BuildingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit new premises",
    description="Create a listing owned by the caller with up to three photos (facade, entrance, interior)."
)
async def create_building(
    name: str = Form(..., min_length=1, max_length=255),
    location: str = Form(..., min_length=1, max_length=255),
    price: int = Form(..., ge=0),
    facade_file: Optional[UploadFile] = File(None, description="Facade photo, used as preview"),
    entrance_file: Optional[UploadFile] = File(None, description="Entrance photo"),
    interior_file: Optional[UploadFile] = File(None, description="Interior photo"),
    username: Optional[str] = Depends(get_current_username),
    building_service: BuildingService = Depends(get_building_service)
) -> BuildingResponse:
    building = Building(name=name.strip(), location=location.strip(), price=price)
    saved = await building_service.create_listing(
        username,
        building,
        facade_file,
        entrance_file,
        interior_file
    )
    return _to_response(saved)


@router.get(
    "",
    response_model=BuildingListResponse,
    summary="List premises",
    description="List buildings matching every supplied filter. Empty name/location filters are ignored."
)
async def list_buildings(
    name: Optional[str] = Query(None, description="Exact premises name"),
    location: Optional[str] = Query(None, description="Exact location"),
    price: Optional[int] = Query(None, description="Maximum price (inclusive)"),
    approved: Optional[bool] = Query(None, description="Approval state"),
    building_service: BuildingService = Depends(get_building_service)
) -> BuildingListResponse:
    buildings = await building_service.list_listings(
        name=name,
        location=location,
        max_price=price,
        approved=approved
    )
    return BuildingListResponse(
        buildings=[_to_response(building) for building in buildings],
        total=len(buildings)
    )


@router.get(
    "/{building_id}",
    response_model=BuildingResponse,
    summary="Get premises by ID"
)
async def get_building(
    building_id: int,
    building_service: BuildingService = Depends(get_building_service)
) -> BuildingResponse:
    building = await building_service.get_listing(building_id)
    if building is None:
        raise BuildingNotFoundError(building_id)
    return _to_response(building)


@router.delete(
    "/{building_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete premises",
    description="Delete a listing and its photos. Deleting an unknown ID succeeds."
)
async def delete_building(
    building_id: int,
    current_user: User = Depends(get_current_user),
    building_service: BuildingService = Depends(get_building_service)
) -> Response:
    if current_user.is_anonymous:
        raise UnauthorizedError()

    building = await building_service.get_listing(building_id)
    if building is not None and building.user_id != current_user.id and not current_user.is_admin:
        raise InsufficientPermissionsError("delete this building")

    await building_service.remove_listing(building_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{building_id}/approve",
    response_model=BuildingResponse,
    summary="Approve premises (admin)"
)
async def approve_building(
    building_id: int,
    admin: User = Depends(get_current_admin_user),
    building_service: BuildingService = Depends(get_building_service)
) -> BuildingResponse:
    building = await building_service.set_approval_status(building_id, True, admin)
    return _to_response(building)


@router.post(
    "/{building_id}/reject",
    response_model=BuildingResponse,
    summary="Reject premises (admin)"
)
async def reject_building(
    building_id: int,
    admin: User = Depends(get_current_admin_user),
    building_service: BuildingService = Depends(get_building_service)
) -> BuildingResponse:
    building = await building_service.set_approval_status(building_id, False, admin)
    return _to_response(building)
