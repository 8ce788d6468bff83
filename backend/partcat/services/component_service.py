"""
PartCat Backend — Component Service
=====================================

What:  Business logic behind the /component endpoints.
How:   Works through the Component record; every change is validated by the
       record's setters before save() issues a single statement.
"""

import logging
from typing import Any, Dict

from partcat.database import PersistenceGateway
from partcat.exceptions import NotFoundError
from partcat.models.component import Component
from partcat.schemas.common import MessageResponse
from partcat.schemas.component import ComponentListResponse, ComponentResponse

logger = logging.getLogger(__name__)


def to_response(component: Component) -> ComponentResponse:
    return ComponentResponse(**component.as_dict())


class ComponentService:
    """Business logic layer for catalog entries."""

    async def _load(self, gateway: PersistenceGateway, component_id: int) -> Component:
        component = await Component.load(gateway, id=component_id)
        if component is None:
            raise NotFoundError(resource="Component", resource_id=component_id)
        return component

    async def list_components(self, gateway: PersistenceGateway) -> ComponentListResponse:
        components = await Component.list_all(gateway)
        items = [to_response(c) for c in components]
        return ComponentListResponse(list=items, count=len(items))

    async def get_component(self, gateway: PersistenceGateway, component_id: int) -> ComponentResponse:
        return to_response(await self._load(gateway, component_id))

    async def create_component(
        self, gateway: PersistenceGateway, data: Dict[str, Any]
    ) -> ComponentResponse:
        component = await Component.create(gateway, **data)
        await component.save()
        return to_response(component)

    async def update_component(
        self,
        gateway: PersistenceGateway,
        component_id: int,
        changes: Dict[str, Any],
    ) -> ComponentResponse:
        """
        Apply a partial update.

        Args:
            changes: Only the keys the client sent. name and quantity go
                     through their validating setters; image_id must
                     reference a stored image or be None.

        Raises:
            NotFoundError:   Unknown component id (→ 404)
            ValidationError: Invalid value (→ 400)
        """
        component = await self._load(gateway, component_id)

        if "name" in changes:
            component.set_name(changes["name"])
        if "quantity" in changes:
            component.set_quantity(changes["quantity"])
        if "image_id" in changes:
            await component.set_image_id(changes["image_id"])
        for name in ("description", "package", "manufacturer"):
            if name in changes:
                setattr(component, name, changes[name])

        if component.dirty:
            await component.save()
        return to_response(component)

    async def delete_component(self, gateway: PersistenceGateway, component_id: int) -> MessageResponse:
        component = await self._load(gateway, component_id)
        await component.delete()
        return MessageResponse(message="Component deleted successfully.")


# ── Singleton Instance ────────────────────────────────────────────────────
component_service = ComponentService()
