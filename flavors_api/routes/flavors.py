"""
Flavors API — Flavor Route Handlers
====================================

What:  The five CRUD endpoints under /api/flavors.
How:   FastAPI validates the path id (a 32-bit integer) and JSON body, the
       handler delegates to the repository, and typed errors raised there are
       turned into status codes by the handlers registered in main.py.

    GET    /api/flavors          200 list
    GET    /api/flavors/{id}     200 | 404
    POST   /api/flavors          201
    PUT    /api/flavors/{id}     200 | 404
    DELETE /api/flavors/{id}     204 | 404
"""

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from flavors_api.database import get_db_session
from flavors_api.schemas.flavor import ErrorResponse, FlavorIn, FlavorResponse
from flavors_api.services.flavor_repository import flavor_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/flavors", tags=["Flavors"])

_ERRORS = {
    400: {"description": "Invalid id or body", "model": ErrorResponse},
    500: {"description": "Statement failed", "model": ErrorResponse},
    503: {"description": "Database unavailable", "model": ErrorResponse},
}
_NOT_FOUND = {404: {"description": "Flavor not found", "model": ErrorResponse}}

# SERIAL is int4; anything outside it can never match a row
FlavorId = Annotated[int, Path(ge=-(2**31), le=2**31 - 1)]


@router.get(
    "",
    response_model=List[FlavorResponse],
    responses=_ERRORS,
    summary="List all flavors",
)
async def list_flavors(db: AsyncSession = Depends(get_db_session)) -> List[FlavorResponse]:
    return await flavor_repository.list_all(db)


@router.get(
    "/{flavor_id}",
    response_model=FlavorResponse,
    responses={**_NOT_FOUND, **_ERRORS},
    summary="Get a single flavor by id",
)
async def get_flavor(
    flavor_id: FlavorId,
    db: AsyncSession = Depends(get_db_session),
) -> FlavorResponse:
    return await flavor_repository.get_by_id(db, flavor_id)


@router.post(
    "",
    response_model=FlavorResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Create a flavor",
)
async def create_flavor(
    payload: FlavorIn,
    db: AsyncSession = Depends(get_db_session),
) -> FlavorResponse:
    """
    Create a flavor; id and both timestamps are assigned by the store.

    Example:
        POST /api/flavors {"name": "Rocky Road", "is_favorite": false}
        → 201 {"id": 5, "name": "Rocky Road", "is_favorite": false, ...}
    """
    return await flavor_repository.create(db, payload.name, payload.is_favorite)


@router.put(
    "/{flavor_id}",
    response_model=FlavorResponse,
    responses={**_NOT_FOUND, **_ERRORS},
    summary="Replace a flavor's name and favorite flag",
)
async def update_flavor(
    flavor_id: FlavorId,
    payload: FlavorIn,
    db: AsyncSession = Depends(get_db_session),
) -> FlavorResponse:
    return await flavor_repository.update(db, flavor_id, payload.name, payload.is_favorite)


@router.delete(
    "/{flavor_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_NOT_FOUND, **_ERRORS},
    summary="Delete a flavor",
)
async def delete_flavor(
    flavor_id: FlavorId,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await flavor_repository.delete(db, flavor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
