"""
PartCat Backend — Image Service
=================================

What:  Business logic behind the /image endpoints.
How:   Works through the Image record. Files are never written or removed
       here: an image row only points at a file that already exists on the
       server.
"""

import logging
from pathlib import Path

from partcat.database import PersistenceGateway
from partcat.exceptions import NotFoundError, ValidationError
from partcat.models.image import Image, is_inside_storage
from partcat.schemas.common import MessageResponse
from partcat.schemas.image import ImageListResponse, ImageResponse

logger = logging.getLogger(__name__)


def to_response(image: Image) -> ImageResponse:
    return ImageResponse(**image.as_dict())


class ImageService:
    """Business logic layer for component images."""

    async def _load(self, gateway: PersistenceGateway, image_id: int) -> Image:
        image = await Image.load(gateway, id=image_id)
        if image is None:
            raise NotFoundError(resource="Image", resource_id=image_id)
        return image

    async def list_images(self, gateway: PersistenceGateway) -> ImageListResponse:
        images = await Image.list_all(gateway)
        items = [to_response(image) for image in images]
        return ImageListResponse(list=items, count=len(items))

    async def get_image(self, gateway: PersistenceGateway, image_id: int) -> ImageResponse:
        return to_response(await self._load(gateway, image_id))

    async def create_image(self, gateway: PersistenceGateway, name: str, path: str) -> ImageResponse:
        image = await Image.create(gateway, name=name, path=path)
        await image.save()
        return to_response(image)

    async def delete_image(self, gateway: PersistenceGateway, image_id: int) -> MessageResponse:
        image = await self._load(gateway, image_id)
        await image.delete()
        return MessageResponse(message="Image deleted successfully.")

    async def image_file(self, gateway: PersistenceGateway, image_id: int) -> Path:
        """
        Location of the file behind an image, for serving.

        Security:
            The resolved path must stay inside the storage root, absolute
            or relative.

        Raises:
            NotFoundError:   Unknown image, or its file has since disappeared
            ValidationError: Stored path resolves outside the storage root
        """
        image = await self._load(gateway, image_id)
        full_path = image.file_path()

        if not is_inside_storage(full_path):
            logger.warning("Image %s points outside the storage root", image_id)
            raise ValidationError(message="Invalid file path", field="path")

        if not full_path.is_file():
            logger.warning("Image %s points at a missing file", image_id)
            raise NotFoundError(resource="Image file", resource_id=image_id)
        return full_path


# ── Singleton Instance ────────────────────────────────────────────────────
image_service = ImageService()
