"""
PartCat Backend — Component Record
====================================

What:  Active record for the `components` table.
Why:   The catalog entries themselves: a part, its stock and an optional
       picture.
How:   Same load/save/delete lifecycle as every record. An image is only
       attached once it is persisted and clean (Image.exists()).
"""

from typing import Any, Optional

from partcat.database import PersistenceGateway
from partcat.exceptions import ValidationError
from partcat.models.image import Image
from partcat.models.record import Record
from partcat.models.tables import components_table


class Component(Record):
    """An electronic part in the catalog."""

    table = components_table
    resource = "Component"
    fields = ("name", "quantity", "description", "package", "manufacturer", "image_id")
    required = ("name", "quantity")

    @classmethod
    async def create(
        cls,
        gateway: PersistenceGateway,
        name: Optional[str],
        quantity: Any = 0,
        description: Optional[str] = None,
        package: Optional[str] = None,
        manufacturer: Optional[str] = None,
        image_id: Optional[int] = None,
    ) -> "Component":
        """
        Build a validated, unsaved component.

        Raises:
            ValidationError: Empty name, invalid quantity, or image_id that
                             does not reference a stored image.
        """
        component = cls(gateway)
        component.set_name(name)
        component.set_quantity(quantity)
        component.description = description
        component.package = package
        component.manufacturer = manufacturer
        await component.set_image_id(image_id)
        return component

    def set_name(self, name: Optional[str]) -> None:
        name = (name or "").strip()
        if not name:
            raise ValidationError(message="Component name is required.", field="name")
        self.name = name

    def set_quantity(self, quantity: Any) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise ValidationError(
                message="Quantity must be a non-negative integer.",
                field="quantity",
            )
        self.quantity = quantity

    async def set_image_id(self, image_id: Optional[int]) -> None:
        """Attach a stored image by id, or detach with None."""
        if image_id is not None and not await Image.id_exists(self._gateway, image_id):
            raise ValidationError(
                message=f"Image {image_id} does not exist.",
                field="image_id",
            )
        self.image_id = image_id

    async def set_image(self, image: Image) -> None:
        """Attach an Image record. It must be saved and unmodified."""
        if not await image.exists():
            raise ValidationError(
                message="Image must be saved before it can be attached.",
                field="image_id",
            )
        self.image_id = image.id
