"""Item store - the only code that talks to the ``items`` table.

Handlers receive an ``ItemStore`` through ``Depends(get_item_store)`` and never
touch the session directly. Every method either returns ORM rows or raises one
of the errors from ``inventory_api.errors``.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, List

from fastapi import Depends
from sqlalchemy import BigInteger, cast
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_api.database import get_db
from inventory_api.errors import ConflictError, NotFoundError, StorageError, ValidationError
from inventory_api.models.item import Item
from inventory_api.schemas.item import ItemCreate, ItemUpdate
from inventory_api.validation import MAX_INTEGER

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
LIKE_ESCAPE = "\\"


def like_pattern(term: str) -> str:
    """Wrap ``term`` for a substring LIKE, matching % and _ literally."""
    for char in (LIKE_ESCAPE, "%", "_"):
        term = term.replace(char, LIKE_ESCAPE + char)
    return f"%{term}%"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the integrity error comes from a UNIQUE constraint (PostgreSQL or SQLite)."""
    if getattr(exc.orig, "pgcode", None) == UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(exc.orig)


class ItemStore:
    """CRUD and quantity adjustment over a single SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        """Roll back and translate backend failures raised while performing ``action``."""
        try:
            yield
        except IntegrityError as exc:
            self.db.rollback()
            if is_unique_violation(exc):
                raise ConflictError() from exc
            logger.exception("Integrity error while trying to %s", action)
            raise StorageError() from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Storage failure while trying to %s", action)
            raise StorageError() from exc

    def _get_or_404(self, item_id: int) -> Item:
        item = self.db.query(Item).filter(Item.id == item_id).first()
        if item is None:
            raise NotFoundError()
        return item

    def _sku_taken(self, sku: str, exclude_id: int = None) -> bool:
        query = self.db.query(Item.id).filter(Item.sku == sku)
        if exclude_id is not None:
            query = query.filter(Item.id != exclude_id)
        return query.first() is not None

    def search(self, term: str = "") -> List[Item]:
        """
        List items newest first, optionally filtered by a search term.

        Args:
            term: Already trimmed and lower-cased search text; empty means all

        Returns:
            Items whose name, sku or description contain ``term``
        """
        with self._guard("list items"):
            query = self.db.query(Item)
            if term:
                search_term = like_pattern(term)
                query = query.filter(
                    (Item.name.ilike(search_term, escape=LIKE_ESCAPE)) |
                    (Item.sku.ilike(search_term, escape=LIKE_ESCAPE)) |
                    (Item.description.ilike(search_term, escape=LIKE_ESCAPE))
                )
            return query.order_by(Item.id.desc()).all()

    def get(self, item_id: int) -> Item:
        with self._guard("get item"):
            return self._get_or_404(item_id)

    def create(self, data: ItemCreate) -> Item:
        """Insert a new item; a duplicate sku raises ``ConflictError``."""
        with self._guard("create item"):
            if self._sku_taken(data.sku):
                raise ConflictError()
            item = Item(**data.model_dump())
            self.db.add(item)
            self.db.commit()
            self.db.refresh(item)
        logger.info("Created item %s (sku=%s, quantity=%s)", item.id, item.sku, item.quantity)
        return item

    def adjust(self, item_id: int, delta: int) -> Item:
        """
        Apply a relative quantity change.

        The change is a single conditional UPDATE, so two interleaved
        adjustments can never leave the stored quantity below zero.

        Raises:
            NotFoundError: if the item does not exist
            ValidationError: if the result would be negative or overflow the column
        """
        new_quantity = cast(Item.quantity, BigInteger) + delta
        with self._guard("adjust quantity"):
            updated = (
                self.db.query(Item)
                .filter(Item.id == item_id, new_quantity.between(0, MAX_INTEGER))
                .update({Item.quantity: Item.quantity + delta}, synchronize_session=False)
            )
            self.db.commit()
            if not updated:
                current = self._get_or_404(item_id)
                if current.quantity + delta < 0:
                    raise ValidationError("quantity cannot go below 0")
                raise ValidationError(f"quantity cannot exceed {MAX_INTEGER}")
            item = self._get_or_404(item_id)
        logger.info("Adjusted item %s by %+d to %s", item_id, delta, item.quantity)
        return item

    def update(self, item_id: int, changes: ItemUpdate) -> Item:
        """Overwrite the supplied fields; everything else keeps its prior value."""
        with self._guard("update item"):
            item = self._get_or_404(item_id)
            fields = changes.changes()
            if "sku" in fields and self._sku_taken(fields["sku"], exclude_id=item_id):
                raise ConflictError()
            for field, value in fields.items():
                setattr(item, field, value)
            self.db.commit()
            self.db.refresh(item)
        return item

    def delete(self, item_id: int) -> None:
        """Hard-delete an item. Deleting an absent id raises ``NotFoundError``."""
        with self._guard("delete item"):
            deleted = self.db.query(Item).filter(Item.id == item_id).delete(synchronize_session=False)
            self.db.commit()
        if not deleted:
            raise NotFoundError()
        logger.info("Deleted item %s", item_id)


def get_item_store(db: Session = Depends(get_db)) -> ItemStore:
    """Dependency that binds an ``ItemStore`` to the request's session."""
    return ItemStore(db)
