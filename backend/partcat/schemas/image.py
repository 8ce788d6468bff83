"""
PartCat Backend — Image Schemas
=================================

What:  API contract for the /image endpoints.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ImageResponse(BaseModel):
    """Stored image metadata. The file itself is served by GET /image/{id}/file."""
    id: int = Field(description="Image identifier")
    name: str = Field(description="Display name")
    path: str = Field(description="Stored path, absolute or relative to the storage root")


class ImageListResponse(BaseModel):
    """Returned by GET /image/list."""
    list: List[ImageResponse] = Field(description="Every stored image")
    count: int = Field(description="Number of images in the list")


class ImageCreateRequest(BaseModel):
    """Body of POST /image/new. The path must name an existing, non-empty file."""
    name: Optional[str] = Field(default=None, description="Display name")
    path: Optional[str] = Field(default=None, description="File path on the server")
