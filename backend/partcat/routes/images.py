"""
PartCat Backend — Image Route Handlers
========================================

What:  Endpoints for component images under /image, including serving the
       stored file.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from partcat.database import PersistenceGateway, get_gateway
from partcat.routes.guard import require_auth
from partcat.schemas.common import ErrorResponse, MessageResponse
from partcat.schemas.image import ImageCreateRequest, ImageListResponse, ImageResponse
from partcat.services.image_service import image_service

router = APIRouter(
    prefix="/image",
    tags=["Images"],
    dependencies=[Depends(require_auth)],
    responses={401: {"description": "Missing or invalid credentials", "model": ErrorResponse}},
)

_not_found = {404: {"description": "Image not found", "model": ErrorResponse}}


@router.get("/list", response_model=ImageListResponse, summary="List all images")
async def list_images(
    gateway: PersistenceGateway = Depends(get_gateway),
) -> ImageListResponse:
    return await image_service.list_images(gateway)


@router.post(
    "/new",
    response_model=ImageResponse,
    responses={400: {"description": "Missing name or unreadable file", "model": ErrorResponse}},
    summary="Register an image file",
)
async def create_image(
    body: ImageCreateRequest,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> ImageResponse:
    return await image_service.create_image(gateway, name=body.name, path=body.path)


@router.get("/{image_id}", response_model=ImageResponse, responses=_not_found)
async def get_image(
    image_id: int,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> ImageResponse:
    return await image_service.get_image(gateway, image_id)


@router.get(
    "/{image_id}/file",
    responses={200: {"description": "Image file"}, **_not_found},
    summary="Serve the stored image file",
)
async def get_image_file(
    image_id: int,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> FileResponse:
    path = await image_service.image_file(gateway, image_id)
    # media type is guessed from the file name
    return FileResponse(path=str(path), headers={"Cache-Control": "no-store"})


@router.delete("/{image_id}", response_model=MessageResponse, responses=_not_found)
async def delete_image(
    image_id: int,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> MessageResponse:
    return await image_service.delete_image(gateway, image_id)
