"""
PartCat Backend — Component Route Handlers
============================================

What:  CRUD endpoints for catalog entries under /component.
How:   Same shape as the user routes: router-level authentication, thin
       handlers, errors rendered by the global handlers.
"""

from fastapi import APIRouter, Depends

from partcat.database import PersistenceGateway, get_gateway
from partcat.routes.guard import require_auth
from partcat.schemas.common import ErrorResponse, MessageResponse
from partcat.schemas.component import (
    ComponentCreateRequest,
    ComponentListResponse,
    ComponentResponse,
    ComponentUpdateRequest,
)
from partcat.services.component_service import component_service

router = APIRouter(
    prefix="/component",
    tags=["Components"],
    dependencies=[Depends(require_auth)],
    responses={401: {"description": "Missing or invalid credentials", "model": ErrorResponse}},
)

_not_found = {404: {"description": "Component not found", "model": ErrorResponse}}
_invalid = {400: {"description": "Invalid data", "model": ErrorResponse}}


@router.get("/list", response_model=ComponentListResponse, summary="List all components")
async def list_components(
    gateway: PersistenceGateway = Depends(get_gateway),
) -> ComponentListResponse:
    return await component_service.list_components(gateway)


@router.post("/new", response_model=ComponentResponse, responses=_invalid, summary="Create a component")
async def create_component(
    body: ComponentCreateRequest,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> ComponentResponse:
    return await component_service.create_component(gateway, body.model_dump())


@router.get("/{component_id}", response_model=ComponentResponse, responses=_not_found)
async def get_component(
    component_id: int,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> ComponentResponse:
    return await component_service.get_component(gateway, component_id)


@router.put(
    "/{component_id}",
    response_model=ComponentResponse,
    responses={**_not_found, **_invalid},
    summary="Update a component",
)
async def update_component(
    component_id: int,
    body: ComponentUpdateRequest,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> ComponentResponse:
    """Change only the fields present in the body."""
    return await component_service.update_component(
        gateway, component_id, body.model_dump(exclude_unset=True)
    )


@router.delete("/{component_id}", response_model=MessageResponse, responses=_not_found)
async def delete_component(
    component_id: int,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> MessageResponse:
    return await component_service.delete_component(gateway, component_id)
