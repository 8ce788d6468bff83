"""
PartCat Backend — User Record Tests
=====================================

What:  Active-record behavior of User against a real SQLite file.

What we test:
    ✅ create() validates without touching storage
    ✅ save() inserts, assigns an id and clears dirty
    ✅ load() by id and email; None for misses
    ✅ Mutation marks dirty; save() updates in place
    ✅ delete() removes the row and retires the record
    ✅ Serialization never exposes the password hash
"""

import pytest

from partcat.exceptions import PersistenceError, ValidationError
from partcat.models.user import User


class TestUserCreate:
    """create() and field validation."""

    @pytest.mark.asyncio
    async def test_create_is_unsaved_and_dirty(self, gateway):
        """A freshly created user has no id and does not match storage."""
        user = await User.create(gateway, email="a@b.com", password="x", permission_level=1)

        assert user.id is None
        assert user.dirty is True
        assert await User.list_all(gateway) == []

    @pytest.mark.asyncio
    async def test_password_is_hashed(self, gateway):
        """The stored value is a bcrypt hash, not the secret."""
        user = await User.create(gateway, email="a@b.com", password="x", permission_level=1)

        assert user.password != "x"
        assert user.password.startswith("$2")
        assert await user.check_password("x") is True
        assert await user.check_password("y") is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", [None, "", "   ", "no-at-sign"])
    async def test_invalid_email_rejected(self, gateway, email):
        with pytest.raises(ValidationError) as exc_info:
            await User.create(gateway, email=email, password="x", permission_level=1)
        assert exc_info.value.field == "email"

    @pytest.mark.asyncio
    async def test_empty_password_rejected(self, gateway):
        with pytest.raises(ValidationError) as exc_info:
            await User.create(gateway, email="a@b.com", password="", permission_level=1)
        assert exc_info.value.field == "password"

    @pytest.mark.asyncio
    async def test_password_length_limit_in_bytes(self, gateway):
        """72 bytes is the most bcrypt takes; multi-byte characters count in full."""
        user = await User.create(gateway, email="a@b.com", password="p" * 72, permission_level=1)
        assert await user.check_password("p" * 72) is True

        with pytest.raises(ValidationError) as exc_info:
            await User.create(gateway, email="a@b.com", password="é" * 37, permission_level=1)
        assert exc_info.value.field == "password"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("level", [-1, "1", True, None])
    async def test_invalid_permission_level_rejected(self, gateway, level):
        with pytest.raises(ValidationError):
            await User.create(gateway, email="a@b.com", password="x", permission_level=level)


class TestUserPersistence:
    """save(), load(), delete() round trips through SQLite."""

    @pytest.mark.asyncio
    async def test_save_assigns_id_and_clears_dirty(self, gateway):
        user = await User.create(gateway, email="a@b.com", password="x", permission_level=3)
        await user.save()

        assert user.id is not None
        assert user.dirty is False
        assert await user.exists() is True

    @pytest.mark.asyncio
    async def test_load_by_id_matches_saved_values(self, gateway):
        user = await User.create(gateway, email="a@b.com", password="x", permission_level=3)
        await user.save()

        loaded = await User.load(gateway, id=user.id)

        assert loaded is not None
        assert loaded.email == "a@b.com"
        assert loaded.permission_level == 3
        assert loaded.dirty is False

    @pytest.mark.asyncio
    async def test_load_by_email(self, gateway):
        user = await User.create(gateway, email="a@b.com", password="x", permission_level=1)
        await user.save()

        loaded = await User.load(gateway, email="a@b.com")
        assert loaded.id == user.id

    @pytest.mark.asyncio
    async def test_load_missing_returns_none(self, gateway):
        assert await User.load(gateway, id=999) is None
        assert await User.load(gateway, email="ghost@example.com") is None
        assert await User.load(gateway, id=None) is None

    @pytest.mark.asyncio
    async def test_load_rejects_bad_lookup(self, gateway):
        """Exactly one key, and only the declared lookup columns."""
        with pytest.raises(TypeError):
            await User.load(gateway, password="x")
        with pytest.raises(TypeError):
            await User.load(gateway, id=1, email="a@b.com")
        with pytest.raises(TypeError):
            await User.load(gateway)

    @pytest.mark.asyncio
    async def test_mutation_marks_dirty_and_save_updates(self, gateway):
        user = await User.create(gateway, email="a@b.com", password="x", permission_level=1)
        await user.save()
        original_id = user.id

        user.set_permission_level(5)
        assert user.dirty is True
        assert await user.exists() is False

        await user.save()
        assert user.id == original_id
        assert user.dirty is False
        assert (await User.load(gateway, id=original_id)).permission_level == 5

    @pytest.mark.asyncio
    async def test_duplicate_email_fails_to_save(self, gateway):
        first = await User.create(gateway, email="a@b.com", password="x", permission_level=1)
        await first.save()
        second = await User.create(gateway, email="a@b.com", password="y", permission_level=1)

        with pytest.raises(PersistenceError):
            await second.save()
        assert second.id is None
        assert second.dirty is True

    @pytest.mark.asyncio
    async def test_save_without_required_field(self, gateway):
        """A bare record names the first missing field."""
        user = User(gateway)

        with pytest.raises(ValidationError) as exc_info:
            await user.save()
        assert exc_info.value.message == "User 'email' was not defined before saving."

    @pytest.mark.asyncio
    async def test_update_of_vanished_row_fails(self, gateway):
        user = await User.create(gateway, email="a@b.com", password="x", permission_level=1)
        await user.save()
        other = await User.load(gateway, id=user.id)
        await other.delete()

        user.set_permission_level(2)
        with pytest.raises(PersistenceError) as exc_info:
            await user.save()
        assert "doesn't exist" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_delete_removes_row_and_retires_record(self, gateway):
        user = await User.create(gateway, email="a@b.com", password="x", permission_level=1)
        await user.save()
        user_id = user.id

        await user.delete()

        assert await User.id_exists(gateway, user_id) is False
        assert await user.exists() is False
        with pytest.raises(PersistenceError):
            await user.save()
        with pytest.raises(PersistenceError):
            await user.delete()

    @pytest.mark.asyncio
    async def test_delete_unsaved_fails(self, gateway):
        user = await User.create(gateway, email="a@b.com", password="x", permission_level=1)
        with pytest.raises(PersistenceError):
            await user.delete()

    @pytest.mark.asyncio
    async def test_list_all_ordered_by_id(self, gateway):
        for email in ("c@x.com", "a@x.com", "b@x.com"):
            user = await User.create(gateway, email=email, password="x", permission_level=1)
            await user.save()

        users = await User.list_all(gateway)
        assert [u.email for u in users] == ["c@x.com", "a@x.com", "b@x.com"]
        assert all(not u.dirty for u in users)


class TestUserAccessors:
    """get() and as_dict()."""

    @pytest.mark.asyncio
    async def test_hidden_mode_drops_password(self, gateway):
        user = await User.create(gateway, email="a@b.com", password="x", permission_level=1)
        await user.save()

        assert user.as_dict(hidden=True) == {"id": user.id, "email": "a@b.com", "permission_level": 1}
        assert "password" in user.as_dict(hidden=False)

    @pytest.mark.asyncio
    async def test_get_public_and_private_names(self, gateway):
        user = await User.create(gateway, email="a@b.com", password="x", permission_level=1)

        assert user.get("email") == "a@b.com"
        assert user.get("dirty") is True
        assert user.get("_gateway") is None
        assert user.get("nonexistent") is None
