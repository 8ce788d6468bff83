"""
PartCat Backend — User Service
================================

What:  Business logic behind the /user endpoints and the bootstrap account.
Why:   Keeps routes thin; converts missing records into NotFoundError and
       records into response models that never carry the password hash.
How:   Each method receives the request's PersistenceGateway and works
       through the User record.
"""

import logging

from partcat.config import settings
from partcat.database import PersistenceGateway
from partcat.exceptions import NotFoundError
from partcat.models.user import User
from partcat.schemas.common import MessageResponse
from partcat.schemas.user import UserListResponse, UserResponse

logger = logging.getLogger(__name__)


def to_response(user: User) -> UserResponse:
    return UserResponse(**user.as_dict(hidden=True))


class UserService:
    """
    Business logic layer for accounts.

    Responsibilities:
        - list_users():  every account, serialized in hidden mode
        - get_user():    one account, NotFoundError when absent
        - create_user(): validate, hash and insert with the default level
        - delete_user(): remove an account
        - ensure_admin(): create the configured bootstrap account once
    """

    async def list_users(self, gateway: PersistenceGateway) -> UserListResponse:
        users = await User.list_all(gateway)
        items = [to_response(user) for user in users]
        return UserListResponse(list=items, count=len(items))

    async def get_user(self, gateway: PersistenceGateway, user_id: int) -> UserResponse:
        """
        Raises:
            NotFoundError: No user with this id (→ 404 "User not found.")
        """
        user = await User.load(gateway, id=user_id)
        if user is None:
            raise NotFoundError(resource="User", resource_id=user_id)
        return to_response(user)

    async def create_user(
        self,
        gateway: PersistenceGateway,
        email: str,
        password: str,
    ) -> UserResponse:
        """
        Create an account with the configured default permission level.

        Raises:
            ValidationError:  Invalid email or empty password (→ 400)
            PersistenceError: Insert failed, e.g. duplicate email (→ 400)
        """
        user = await User.create(
            gateway,
            email=email,
            password=password,
            permission_level=settings.default_permission_level,
        )
        await user.save()
        return to_response(user)

    async def delete_user(self, gateway: PersistenceGateway, user_id: int) -> MessageResponse:
        user = await User.load(gateway, id=user_id)
        if user is None:
            raise NotFoundError(resource="User", resource_id=user_id)
        await user.delete()
        return MessageResponse(message="User deleted successfully.")

    async def ensure_admin(self, gateway: PersistenceGateway) -> None:
        """
        Create the bootstrap account from ADMIN_EMAIL / ADMIN_PASSWORD.

        Does nothing when either setting is empty or the email is already
        registered. An existing account's password is never overwritten.
        """
        if not settings.admin_email or not settings.admin_password:
            logger.info("No bootstrap account configured")
            return

        if await User.load(gateway, email=settings.admin_email) is not None:
            logger.info("Bootstrap account already present")
            return

        admin = await User.create(
            gateway,
            email=settings.admin_email,
            password=settings.admin_password,
            permission_level=settings.admin_permission_level,
        )
        await admin.save()
        logger.info("Bootstrap account created (user %s)", admin.id)


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
