"""
PartCat Backend — Component Schemas
=====================================

What:  API contract for the /component endpoints.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ComponentResponse(BaseModel):
    """Full representation of a catalog entry."""
    id: int = Field(description="Component identifier")
    name: str = Field(description="Part name, e.g. 'NE555'")
    quantity: int = Field(description="Units in stock")
    description: Optional[str] = Field(default=None, description="Free-form notes")
    package: Optional[str] = Field(default=None, description="Physical package, e.g. 'DIP-8'")
    manufacturer: Optional[str] = Field(default=None, description="Manufacturer name")
    image_id: Optional[int] = Field(default=None, description="Attached image, if any")


class ComponentListResponse(BaseModel):
    """Returned by GET /component/list."""
    list: List[ComponentResponse] = Field(description="Every catalog entry")
    count: int = Field(description="Number of components in the list")


class ComponentCreateRequest(BaseModel):
    """Body of POST /component/new."""
    name: Optional[str] = Field(default=None, description="Part name")
    quantity: int = Field(default=0, description="Units in stock")
    description: Optional[str] = Field(default=None)
    package: Optional[str] = Field(default=None)
    manufacturer: Optional[str] = Field(default=None)
    image_id: Optional[int] = Field(default=None, description="Existing image to attach")


class ComponentUpdateRequest(BaseModel):
    """
    Body of PUT /component/{id}.

    Only the fields present in the body are changed; send "image_id": null
    to detach the image.
    """
    name: Optional[str] = Field(default=None)
    quantity: Optional[int] = Field(default=None)
    description: Optional[str] = Field(default=None)
    package: Optional[str] = Field(default=None)
    manufacturer: Optional[str] = Field(default=None)
    image_id: Optional[int] = Field(default=None)
