"""
PartCat Backend — Authentication Service
==========================================

What:  Validates request credentials against a stored User record.
Why:   Every catalog endpoint is gated; the guard must run before any
       handler logic.
How:   Looks the user up by email and verifies the supplied secret against
       the stored bcrypt hash.
Who:   Called by the `require_auth` route dependency.

Failure modes (all answer 401 with the same message):
    - Email or Password header missing or empty
    - No user with that email
    - Secret does not match the stored hash

Constant effort:
    An unknown email still costs one bcrypt verification (against a dummy
    hash), so response time does not reveal whether an account exists.

Known weakness:
    Credentials travel as plain request headers. Deploy behind TLS.
"""

import logging
from typing import Optional

from starlette.concurrency import run_in_threadpool

from partcat.database import PersistenceGateway
from partcat.exceptions import UnauthorizedError
from partcat.models.user import User
from partcat.security import dummy_hash, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """Stateless credential check."""

    async def authenticate(
        self,
        gateway: PersistenceGateway,
        email: Optional[str],
        password: Optional[str],
    ) -> User:
        """
        Return the authenticated User or raise UnauthorizedError.

        Args:
            gateway: Request-scoped persistence gateway
            email: Value of the Email header
            password: Value of the Password header
        """
        if not email or not password:
            logger.warning("Authentication failed: missing credentials")
            raise UnauthorizedError()

        user = await User.load(gateway, email=email)
        if user is None:
            await run_in_threadpool(verify_password, password, dummy_hash())
            logger.warning("Authentication failed: unknown email")
            raise UnauthorizedError()

        if not await user.check_password(password):
            logger.warning("Authentication failed: wrong password for user %s", user.id)
            raise UnauthorizedError()

        return user


# ── Singleton Instance ────────────────────────────────────────────────────
auth_service = AuthService()
