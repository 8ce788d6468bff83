"""
PartCat Backend — Authentication Service Tests
================================================

What:  AuthService.authenticate() against real stored users.

What we test:
    ✅ Correct email + password returns the user
    ✅ Missing header values, unknown email and wrong password all raise
       UnauthorizedError with the same message
"""

import pytest

from partcat.exceptions import UnauthorizedError
from partcat.services.auth_service import AuthService

from conftest import TEST_EMAIL, TEST_PASSWORD


class TestAuthenticate:

    def setup_method(self):
        self.service = AuthService()

    @pytest.mark.asyncio
    async def test_valid_credentials(self, gateway, registered_user):
        """Matching credentials resolve to the stored account."""
        user = await self.service.authenticate(gateway, TEST_EMAIL, TEST_PASSWORD)

        assert user.id == registered_user.id
        assert user.email == TEST_EMAIL

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email, password",
        [
            (None, None),
            (TEST_EMAIL, None),
            (None, TEST_PASSWORD),
            ("", TEST_PASSWORD),
            (TEST_EMAIL, ""),
        ],
    )
    async def test_missing_credentials(self, gateway, registered_user, email, password):
        with pytest.raises(UnauthorizedError):
            await self.service.authenticate(gateway, email, password)

    @pytest.mark.asyncio
    async def test_unknown_email(self, gateway, registered_user):
        with pytest.raises(UnauthorizedError) as exc_info:
            await self.service.authenticate(gateway, "ghost@example.com", TEST_PASSWORD)
        assert exc_info.value.message == "Email and/or password incorrect."

    @pytest.mark.asyncio
    async def test_wrong_password(self, gateway, registered_user):
        with pytest.raises(UnauthorizedError) as exc_info:
            await self.service.authenticate(gateway, TEST_EMAIL, "wrong")
        assert exc_info.value.message == "Email and/or password incorrect."
