"""
PartCat Backend — User Schemas
================================

What:  API contract for the /user endpoints.
Why:   The response model is the last guard against leaking the password
       hash: it simply has no field for it.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    """
    What:  Public representation of an account.
    Who:   Returned by GET /user/{id} and POST /user/new, and inside lists.
    """
    id: int = Field(description="User identifier")
    email: str = Field(description="Login email")
    permission_level: int = Field(description="Permission level")


class UserListResponse(BaseModel):
    """Returned by GET /user/list."""
    list: List[UserResponse] = Field(description="Every registered user")
    count: int = Field(description="Number of users in the list")


class UserCreateRequest(BaseModel):
    """
    What:  Body of POST /user/new.

    Both fields are optional at the schema level so that a missing value is
    reported by User.create() as a 400 with the same error shape as every
    other validation failure.
    """
    email: Optional[str] = Field(default=None, description="Login email")
    password: Optional[str] = Field(default=None, description="Plain-text secret")
