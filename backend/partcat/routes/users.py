"""
PartCat Backend — User Route Handlers
=======================================

What:  GET /user/list, GET /user/{id}, DELETE /user/{id}, POST /user/new.
How:   Every route requires the Email/Password headers (router-level
       dependency), then delegates to UserService.

Error responses (handled by global exception handlers):
    HTTP 400: Invalid body or failed insert
    HTTP 401: Missing or wrong credentials
    HTTP 404: Unknown user id
"""

import logging

from fastapi import APIRouter, Depends

from partcat.database import PersistenceGateway, get_gateway
from partcat.routes.guard import require_auth
from partcat.schemas.common import ErrorResponse, MessageResponse
from partcat.schemas.user import UserCreateRequest, UserListResponse, UserResponse
from partcat.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/user",
    tags=["Users"],
    dependencies=[Depends(require_auth)],
    responses={401: {"description": "Missing or invalid credentials", "model": ErrorResponse}},
)


# /list and /new are declared before /{user_id} so they are matched first
@router.get("/list", response_model=UserListResponse, summary="List all users")
async def list_users(
    gateway: PersistenceGateway = Depends(get_gateway),
) -> UserListResponse:
    return await user_service.list_users(gateway)


@router.post(
    "/new",
    response_model=UserResponse,
    responses={400: {"description": "Invalid data or insert failed", "model": ErrorResponse}},
    summary="Create a user",
)
async def create_user(
    body: UserCreateRequest,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> UserResponse:
    """Create an account with the default permission level."""
    logger.info("Creating user %s", body.email)
    return await user_service.create_user(gateway, email=body.email, password=body.password)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Get a single user",
)
async def get_user(
    user_id: int,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> UserResponse:
    return await user_service.get_user(gateway, user_id)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Delete a user",
)
async def delete_user(
    user_id: int,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> MessageResponse:
    return await user_service.delete_user(gateway, user_id)
