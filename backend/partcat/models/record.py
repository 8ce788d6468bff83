"""
PartCat Backend — Record Base Class
=====================================

What:  Active-record base shared by User, Image and Component.
Why:   Each record mirrors one table row and tracks whether its in-memory
       state still matches the stored row (the `dirty` flag).
How:   Subclasses declare their table, domain fields, mandatory fields and
       lookup keys. The base builds one Core statement per operation and
       runs it through the injected PersistenceGateway.

Lifecycle:
    Record(gateway)           → empty, dirty, no id
    await Sub.create(...)     → validated and populated, dirty, no id
    await Sub.load(gw, id=1)  → populated from the row, clean
    record.field = value      → dirty
    await record.save()       → INSERT when id is None, else UPDATE; clean
    await record.delete()     → DELETE by id; the record is unusable afterwards

Invariant:
    id is set and dirty is False  ⇒  the record matches its row.
"""

import logging
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type, TypeVar

from sqlalchemy import Table, delete, insert, select, update

from partcat.database import PersistenceGateway
from partcat.exceptions import PersistenceError, ValidationError

logger = logging.getLogger(__name__)

R = TypeVar("R", bound="Record")


class Record:
    """
    In-memory representation of one row plus a dirty flag.

    Class attributes set by subclasses:
        table:        SQLAlchemy Table the record mirrors
        resource:     Human-readable name used in messages ("User")
        fields:       Domain columns, excluding `id`
        required:     Fields that must be set before save()
        hidden:       Fields dropped by as_dict(hidden=True)
        lookup_keys:  Columns load() accepts (each must be unique)
    """

    table: ClassVar[Table]
    resource: ClassVar[str] = "Record"
    fields: ClassVar[Tuple[str, ...]] = ()
    required: ClassVar[Tuple[str, ...]] = ()
    hidden: ClassVar[Tuple[str, ...]] = ()
    lookup_keys: ClassVar[Tuple[str, ...]] = ("id",)

    def __init__(self, gateway: PersistenceGateway):
        self._gateway = gateway
        self._deleted = False
        self.id: Optional[int] = None
        for name in self.fields:
            setattr(self, name, None)
        self.dirty = True

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        # Any domain field assignment invalidates the persisted state
        if name in self.fields:
            super().__setattr__("dirty", True)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, dirty={self.dirty})>"

    # ── Construction from storage ─────────────────────────────────────────

    @classmethod
    def _from_row(cls: Type[R], gateway: PersistenceGateway, row: Dict[str, Any]) -> R:
        record = cls(gateway)
        record.id = row["id"]
        for name in cls.fields:
            setattr(record, name, row.get(name))
        record.dirty = False
        return record

    @classmethod
    async def load(cls: Type[R], gateway: PersistenceGateway, **lookup: Any) -> Optional[R]:
        """
        Populate a record from its row.

        Exactly one lookup key must be given, e.g. load(gw, id=3) or, for
        users, load(gw, email="a@b.com").

        Returns:
            A clean record, or None when no row matches.
        """
        if len(lookup) != 1:
            raise TypeError(f"{cls.__name__}.load() takes exactly one lookup key")
        key, value = next(iter(lookup.items()))
        if key not in cls.lookup_keys:
            raise TypeError(
                f"{cls.__name__}.load() cannot look up by '{key}'. "
                f"Allowed: {', '.join(cls.lookup_keys)}"
            )
        if value is None:
            return None

        row = await gateway.fetch_one(
            select(cls.table).where(cls.table.c[key] == value)
        )
        if row is None:
            return None
        return cls._from_row(gateway, row)

    @classmethod
    async def list_all(cls: Type[R], gateway: PersistenceGateway) -> List[R]:
        """Every row of the table as clean records, ordered by id."""
        rows = await gateway.fetch_all(select(cls.table).order_by(cls.table.c.id))
        return [cls._from_row(gateway, row) for row in rows]

    # ── Existence checks ──────────────────────────────────────────────────

    @classmethod
    async def id_exists(cls, gateway: PersistenceGateway, record_id: Optional[int]) -> bool:
        """Check storage directly for a row with this id."""
        if record_id is None:
            return False
        row = await gateway.fetch_one(
            select(cls.table.c.id).where(cls.table.c.id == record_id)
        )
        return row is not None

    async def exists(self) -> bool:
        """
        Whether this record can be referenced by other records.

        False while dirty or unsaved, since an edited record does not match
        what another row would point at.
        """
        if self.dirty or self._deleted:
            return False
        return await self.id_exists(self._gateway, self.id)

    # ── Accessors ─────────────────────────────────────────────────────────

    def get(self, name: str) -> Any:
        """Value of a public attribute; None for private or unknown names."""
        if name.startswith("_"):
            return None
        if name not in ("id", "dirty") and name not in self.fields:
            return None
        return getattr(self, name)

    def values(self) -> Dict[str, Any]:
        """Domain field values keyed by column name."""
        return {name: getattr(self, name) for name in self.fields}

    def as_dict(self, hidden: bool = True) -> Dict[str, Any]:
        """Serializable view. In hidden mode secret fields are omitted."""
        data = {"id": self.id, **self.values()}
        if hidden:
            for name in self.hidden:
                data.pop(name, None)
        return data

    # ── Persistence ───────────────────────────────────────────────────────

    def _check_usable(self) -> None:
        if self._deleted:
            raise PersistenceError(
                message=f"{self.resource} has been deleted.",
                context={"resource": self.resource},
            )

    async def save(self) -> None:
        """
        Write the record to storage.

        Inserts when id is unset and assigns the new id, otherwise updates
        the row by id. dirty is cleared only after the statement succeeds.

        Raises:
            ValidationError:  A mandatory field is unset
            PersistenceError: The statement failed or the row no longer exists
        """
        self._check_usable()
        for name in self.required:
            if getattr(self, name) is None:
                raise ValidationError(
                    message=f"{self.resource} '{name}' was not defined before saving.",
                    field=name,
                )

        if self.id is None:
            result = await self._gateway.execute(
                insert(self.table).values(**self.values())
            )
            self.id = result.inserted_primary_key[0]
            logger.info("%s %s created", self.resource, self.id)
        else:
            result = await self._gateway.execute(
                update(self.table)
                .where(self.table.c.id == self.id)
                .values(**self.values())
            )
            if result.rowcount == 0:
                raise PersistenceError(
                    message=f"Can't update a {self.resource.lower()} that doesn't exist.",
                    context={"resource": self.resource, "resource_id": self.id},
                )
            logger.info("%s %s updated", self.resource, self.id)

        self.dirty = False

    async def delete(self) -> None:
        """
        Remove the row. The record must not be saved or deleted again.

        Raises:
            PersistenceError: Never saved, already deleted, or no row matched
        """
        self._check_usable()
        if self.id is None:
            raise PersistenceError(
                message=f"Can't delete a {self.resource.lower()} that was never saved.",
                context={"resource": self.resource},
            )

        result = await self._gateway.execute(
            delete(self.table).where(self.table.c.id == self.id)
        )
        if result.rowcount == 0:
            raise PersistenceError(
                message=f"Can't delete a {self.resource.lower()} that doesn't exist.",
                context={"resource": self.resource, "resource_id": self.id},
            )

        logger.info("%s %s deleted", self.resource, self.id)
        self._deleted = True
        self.dirty = True
