"""
PartCat Backend — User Record
===============================

What:  Active record for the `users` table.
Why:   Accounts are what the authentication guard checks request
       credentials against.
How:   Stores a bcrypt hash in `password`; the plain secret only exists for
       the duration of create()/set_password().

Lookup keys: id, email.
Hidden in serialized output: password.
"""

from typing import Any, Optional

from starlette.concurrency import run_in_threadpool

from partcat.database import PersistenceGateway
from partcat.exceptions import ValidationError
from partcat.models.record import Record
from partcat.models.tables import users_table
from partcat.security import MAX_PASSWORD_BYTES, hash_password, verify_password


class User(Record):
    """An API account: email, password hash and permission level."""

    table = users_table
    resource = "User"
    fields = ("email", "password", "permission_level")
    required = ("email", "password", "permission_level")
    hidden = ("password",)
    lookup_keys = ("id", "email")

    @classmethod
    async def create(
        cls,
        gateway: PersistenceGateway,
        email: Optional[str],
        password: Optional[str],
        permission_level: Any,
    ) -> "User":
        """
        Build a validated, unsaved user.

        Raises:
            ValidationError: Email, password or permission level is invalid.
                             Storage is not touched.
        """
        user = cls(gateway)
        user.set_email(email)
        user.set_permission_level(permission_level)
        await user.set_password(password)
        return user

    def set_email(self, email: Optional[str]) -> None:
        email = (email or "").strip()
        if not email or "@" not in email:
            raise ValidationError(
                message="A valid email address is required.",
                field="email",
            )
        self.email = email

    def set_permission_level(self, level: Any) -> None:
        # bool is an int subclass but never a meaningful level
        if isinstance(level, bool) or not isinstance(level, int) or level < 0:
            raise ValidationError(
                message="Permission level must be a non-negative integer.",
                field="permission_level",
            )
        self.permission_level = level

    async def set_password(self, password: Optional[str]) -> None:
        """Hash and store a new secret. Call save() to persist it."""
        if not password:
            raise ValidationError(message="A password is required.", field="password")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                message=f"Password must be at most {MAX_PASSWORD_BYTES} bytes long.",
                field="password",
            )
        self.password = await run_in_threadpool(hash_password, password)

    async def check_password(self, password: str) -> bool:
        """Verify a secret against the stored hash."""
        if not self.password:
            return False
        return await run_in_threadpool(verify_password, password, self.password)
