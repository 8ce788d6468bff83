"""
PartCat Backend — Image Record
================================

What:  Active record for the `images` table.
Why:   Components reference a picture; the file itself stays on disk and
       only its path is stored.
How:   A path is accepted only when it names an existing, non-empty file.
       Relative paths are resolved against settings.storage_root.
"""

from pathlib import Path
from typing import Optional

import aiofiles.os

from partcat.config import settings
from partcat.database import PersistenceGateway
from partcat.exceptions import ValidationError
from partcat.models.record import Record
from partcat.models.tables import images_table


def resolve_image_path(path: str) -> Path:
    """Absolute location of a stored image path."""
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = Path(settings.storage_root) / candidate
    return candidate.resolve()


def is_inside_storage(full_path: Path) -> bool:
    """Whether a resolved path lies under the storage root."""
    return full_path.is_relative_to(Path(settings.storage_root).resolve())


class Image(Record):
    """A named image file on disk."""

    table = images_table
    resource = "Image"
    fields = ("name", "path")
    required = ("name", "path")

    @classmethod
    async def create(
        cls,
        gateway: PersistenceGateway,
        name: Optional[str],
        path: Optional[str],
    ) -> "Image":
        """
        Build a validated, unsaved image.

        Raises:
            ValidationError: Empty name, a path outside the storage root,
                             or a path that is not a readable, non-empty
                             file. Storage is not touched.
        """
        image = cls(gateway)
        name = (name or "").strip()
        if not name:
            raise ValidationError(message="Image name is required.", field="name")
        image.name = name

        if not await image.set_path(path):
            raise ValidationError(
                message=f"Image path '{path}' does not reference a readable file.",
                field="path",
            )
        return image

    async def set_path(self, path: Optional[str]) -> bool:
        """
        Point the image at a new file. Call save() to persist it.

        Returns:
            True when accepted; False (record unchanged) when the file is
            missing or empty.

        Raises:
            ValidationError: The path resolves outside the storage root,
                             whether given absolute or with ../ segments.
        """
        if not path:
            return False
        full_path = resolve_image_path(path)
        if not is_inside_storage(full_path):
            raise ValidationError(
                message="Image path must be inside the storage directory.",
                field="path",
            )
        if not await aiofiles.os.path.isfile(full_path):
            return False
        if await aiofiles.os.path.getsize(full_path) == 0:
            return False

        self.path = path
        return True

    def file_path(self) -> Path:
        """Absolute path of the stored file."""
        return resolve_image_path(self.path)
