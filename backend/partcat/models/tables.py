"""
PartCat Backend — Table Definitions
=====================================

What:  SQLAlchemy declarative definitions of the `users`, `images` and
       `components` tables.
Why:   Single source of truth for the schema. init_models() provisions it and
       the records build their statements from the `__table__` objects.
How:   Records use Core statements (select/insert/update/delete) against
       these tables instead of ORM identity-mapped instances, so every
       mutation is exactly one parameterized statement.
"""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from partcat.database import Base


class UserRow(Base):
    """One account allowed to call the API."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Alternate lookup key used by the authentication guard
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    # bcrypt hash, never the plain secret
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    permission_level: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<UserRow(id={self.id}, email='{self.email}')>"


class ImageRow(Base):
    """A picture of a component stored on disk."""

    __tablename__ = "images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Absolute, or relative to settings.storage_root
    path: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<ImageRow(id={self.id}, name='{self.name}')>"


class ComponentRow(Base):
    """An electronic component in the catalog."""

    __tablename__ = "components"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Physical package, e.g. "DIP-8" or "SOT-23"
    package: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    manufacturer: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    image_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("images.id", ondelete="SET NULL"), nullable=True
    )

    def __repr__(self) -> str:
        return f"<ComponentRow(id={self.id}, name='{self.name}')>"


users_table = UserRow.__table__
images_table = ImageRow.__table__
components_table = ComponentRow.__table__
