"""Item routes."""
import re
import time
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import PlainTextResponse

from inventory_api.errors import ValidationError
from inventory_api.schemas.item import (
    ItemAdjust,
    ItemCreate,
    ItemResponse,
    ItemUpdate,
    QuickItemCreate,
)
from inventory_api.services.item_store import ItemStore, get_item_store
from inventory_api.validation import parse_item_id, resolve_search_term

router = APIRouter(prefix="/items", tags=["Items"])

# Routes used by the bundled front end's forms
legacy_router = APIRouter(tags=["Items"])


@router.get("", response_model=List[ItemResponse])
def list_items(
    query: Optional[str] = Query(None, description="Search name, sku and description"),
    q: Optional[str] = Query(None, description="Alias of query"),
    store: ItemStore = Depends(get_item_store),
):
    """List all items newest first, optionally filtered by a search term."""
    term = resolve_search_term(query, q)
    return store.search(term)


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    item_data: ItemCreate,
    store: ItemStore = Depends(get_item_store),
):
    """Create a new item. The sku must not be in use."""
    return store.create(item_data)


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(
    item_id: int = Depends(parse_item_id),
    store: ItemStore = Depends(get_item_store),
):
    """Get a specific item."""
    return store.get(item_id)


@router.post("/{item_id}/adjust", response_model=ItemResponse)
def adjust_item(
    adjustment: ItemAdjust,
    item_id: int = Depends(parse_item_id),
    store: ItemStore = Depends(get_item_store),
):
    """Add to or take from an item's quantity; it never goes below zero."""
    return store.adjust(item_id, adjustment.delta)


@router.post("/{item_id}/edit", response_model=ItemResponse)
@legacy_router.post("/editItem/{item_id}", response_model=ItemResponse, include_in_schema=False)
def update_item(
    item_update: Optional[ItemUpdate] = None,
    item_id: int = Depends(parse_item_id),
    store: ItemStore = Depends(get_item_store),
):
    """Update some or all fields of an item."""
    return store.update(item_id, item_update or ItemUpdate())


@router.delete("", include_in_schema=False)
@router.delete("/", include_in_schema=False)
def delete_without_id():
    """A delete with no id segment is always malformed."""
    raise ValidationError("invalid id")


@router.delete("/{item_id}")
def delete_item(
    item_id: int = Depends(parse_item_id),
    store: ItemStore = Depends(get_item_store),
):
    """Delete an item permanently."""
    store.delete(item_id)
    return {"success": True}


def generate_sku(name: str, now_ms: Optional[int] = None) -> str:
    """Build a SKU from the item name plus a millisecond timestamp."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    slug = re.sub(r"\s+", "-", name).upper()
    return f"{slug}-{now_ms}"


@legacy_router.post("/addItem", response_class=PlainTextResponse)
def quick_add_item(
    item_data: QuickItemCreate,
    store: ItemStore = Depends(get_item_store),
):
    """Add an item from the front end's form, generating its SKU."""
    store.create(
        ItemCreate(
            name=item_data.name,
            sku=generate_sku(item_data.name),
            quantity=item_data.quantity,
            description=item_data.description,
            price=item_data.price,
        )
    )
    return "Item added successfully"
