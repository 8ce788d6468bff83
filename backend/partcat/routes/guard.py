"""
PartCat Backend — Authentication Guard Dependency
===================================================

What:  FastAPI dependency that authenticates a request from its Email and
       Password headers.
How:   Attached at router level (`dependencies=[Depends(require_auth)]`), so
       it runs before any handler of the router. On failure it raises
       UnauthorizedError, which the global handler renders as 401.
"""

from typing import Optional

from fastapi import Depends, Header

from partcat.database import PersistenceGateway, get_gateway
from partcat.models.user import User
from partcat.services.auth_service import auth_service


async def require_auth(
    email: Optional[str] = Header(default=None, alias="Email"),
    password: Optional[str] = Header(default=None, alias="Password"),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> User:
    """Authenticate the caller; the returned user is available to handlers that ask for it."""
    return await auth_service.authenticate(gateway, email, password)
