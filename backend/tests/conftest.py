"""
PartCat Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets its own SQLite file under tmp_path, so records and
       routes run against real SQL without sharing state.

Fixture Hierarchy (all function-scoped):
    db_engine ─┬─ session_factory ─┬─ gateway
               │                   ├─ registered_user ── auth_headers
               │                   └─ test_client (get_db_session overridden)
    image_file / storage_image: real files inside the storage root
    outside_file: a readable file the API must refuse
"""

import os
import tempfile

# Override settings BEFORE any partcat import reads them
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="partcat_db_"), "unused.db"
)
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="partcat_storage_")
os.environ["BCRYPT_ROUNDS"] = "4"  # Minimum cost keeps hashing fast
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ADMIN_EMAIL"] = ""
os.environ["ADMIN_PASSWORD"] = ""

import uuid
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from partcat.config import settings
from partcat.database import (
    Base,
    PersistenceGateway,
    enable_sqlite_foreign_keys,
    get_db_session,
)
from partcat.models import tables  # noqa: F401  (registers tables with Base)
from partcat.models.user import User

TEST_EMAIL = "tester@example.com"
TEST_PASSWORD = "correct horse"

# A 1x1 PNG; images only need to be non-empty files
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d49484452000000010000000108060000001f15c489"
    "0000000d4944415478da63f8cfc0f01f0005000201a3d5c0a50000000049454e44ae426082"
)


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Fresh SQLite file with every table created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def gateway(session_factory):
    """A PersistenceGateway over its own session, closed after the test."""
    async with session_factory() as session:
        yield PersistenceGateway(session)


@pytest_asyncio.fixture
async def registered_user(session_factory):
    """A saved account the auth headers below belong to."""
    async with session_factory() as session:
        user = await User.create(
            PersistenceGateway(session),
            email=TEST_EMAIL,
            password=TEST_PASSWORD,
            permission_level=settings.default_permission_level,
        )
        await user.save()
    return user


@pytest.fixture
def auth_headers(registered_user):
    return {"Email": TEST_EMAIL, "Password": TEST_PASSWORD}


# ══════════════════════════════════════════════════════════════════════════
# File Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def image_file():
    """A non-empty PNG inside the storage root, given by absolute path."""
    path = (Path(settings.storage_root) / f"{uuid.uuid4().hex}.png").resolve()
    path.write_bytes(PNG_BYTES)
    yield path
    path.unlink(missing_ok=True)


@pytest.fixture
def storage_image():
    """A PNG inside the storage root; yields its relative path."""
    relative = f"{uuid.uuid4().hex}.png"
    full_path = Path(settings.storage_root) / relative
    full_path.write_bytes(PNG_BYTES)
    yield relative
    full_path.unlink(missing_ok=True)


@pytest.fixture
def empty_file():
    path = (Path(settings.storage_root) / f"{uuid.uuid4().hex}.png").resolve()
    path.touch()
    yield path
    path.unlink(missing_ok=True)


@pytest.fixture
def outside_file(tmp_path) -> Path:
    """A readable file that is not under the storage root."""
    path = tmp_path / "secrets.env"
    path.write_text("ADMIN_PASSWORD=hunter2\n")
    return path


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    Request sessions come from the per-test engine instead of the
    configured one.
    """
    from partcat.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.pop(get_db_session, None)
