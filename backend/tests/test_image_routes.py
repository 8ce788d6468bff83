"""
PartCat Backend — Image Endpoint Tests
========================================
"""

import os
from pathlib import Path

import pytest
from sqlalchemy import insert

from partcat.config import settings
from partcat.database import PersistenceGateway
from partcat.models.tables import images_table

from conftest import PNG_BYTES


class TestImageRoutes:

    @pytest.mark.asyncio
    async def test_requires_auth(self, test_client, registered_user):
        response = await test_client.get("/image/list")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_get_and_list(self, test_client, auth_headers, storage_image):
        created = await test_client.post(
            "/image/new", json={"name": "Resistor", "path": storage_image}, headers=auth_headers
        )
        assert created.status_code == 200
        image_id = created.json()["id"]

        fetched = await test_client.get(f"/image/{image_id}", headers=auth_headers)
        assert fetched.json() == {"id": image_id, "name": "Resistor", "path": storage_image}

        listed = await test_client.get("/image/list", headers=auth_headers)
        assert listed.json()["count"] == 1

    @pytest.mark.asyncio
    async def test_create_with_missing_file(self, test_client, auth_headers):
        response = await test_client.post(
            "/image/new", json={"name": "Ghost", "path": "does-not-exist.png"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == (
            "Image path 'does-not-exist.png' does not reference a readable file."
        )

    @pytest.mark.asyncio
    async def test_serve_file(self, test_client, auth_headers, storage_image):
        created = await test_client.post(
            "/image/new", json={"name": "Resistor", "path": storage_image}, headers=auth_headers
        )

        response = await test_client.get(f"/image/{created.json()['id']}/file", headers=auth_headers)

        assert response.status_code == 200
        assert response.content == PNG_BYTES
        assert response.headers["content-type"] == "image/png"
        assert response.headers["cache-control"] == "no-store"

    @pytest.mark.asyncio
    async def test_serve_file_removed_after_registration(self, test_client, auth_headers, image_file):
        created = await test_client.post(
            "/image/new", json={"name": "Resistor", "path": str(image_file)}, headers=auth_headers
        )
        image_file.unlink()

        response = await test_client.get(f"/image/{created.json()['id']}/file", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "Image file not found."

    @pytest.mark.asyncio
    async def test_delete_detaches_components(self, test_client, auth_headers, storage_image):
        image = await test_client.post(
            "/image/new", json={"name": "Resistor", "path": storage_image}, headers=auth_headers
        )
        image_id = image.json()["id"]
        component = await test_client.post(
            "/component/new", json={"name": "10k", "image_id": image_id}, headers=auth_headers
        )

        response = await test_client.delete(f"/image/{image_id}", headers=auth_headers)
        assert response.json() == {"message": "Image deleted successfully."}

        reloaded = await test_client.get(f"/component/{component.json()['id']}", headers=auth_headers)
        assert reloaded.json()["image_id"] is None

    @pytest.mark.asyncio
    async def test_get_missing(self, test_client, auth_headers):
        response = await test_client.get("/image/5", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "Image not found."


class TestImageFileConfinement:
    """Files outside the storage root can be neither registered nor served."""

    @pytest.mark.asyncio
    async def test_create_with_absolute_path_outside_root(self, test_client, auth_headers, outside_file):
        response = await test_client.post(
            "/image/new", json={"name": "Secrets", "path": str(outside_file)}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "path"

        listed = await test_client.get("/image/list", headers=auth_headers)
        assert listed.json()["count"] == 0

    @pytest.mark.asyncio
    async def test_create_with_parent_traversal(self, test_client, auth_headers, outside_file):
        relative = os.path.relpath(outside_file.resolve(), Path(settings.storage_root).resolve())

        response = await test_client.post(
            "/image/new", json={"name": "Secrets", "path": relative}, headers=auth_headers
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_stored_row_outside_root_not_served(
        self, test_client, auth_headers, session_factory, outside_file
    ):
        """A row inserted behind the API's back is still refused when served."""
        async with session_factory() as session:
            result = await PersistenceGateway(session).execute(
                insert(images_table).values(name="Secrets", path=str(outside_file))
            )
            image_id = result.inserted_primary_key[0]

        response = await test_client.get(f"/image/{image_id}/file", headers=auth_headers)

        assert response.status_code == 400
        assert b"hunter2" not in response.content
