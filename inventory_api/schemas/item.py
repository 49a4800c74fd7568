"""Item schemas for request/response validation.

Request models coerce loosely typed JSON (numeric strings, floats) into the
typed values the store expects. Validator messages are what clients see.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from inventory_api.validation import MAX_INTEGER, parse_integer, parse_number, round_half_up

QUANTITY_TOO_LARGE = f"quantity must be <= {MAX_INTEGER}"


def _coerce_quantity(value: Any) -> int:
    number = parse_number(value)
    if number is None or round_half_up(number) < 0:
        raise ValueError("quantity must be >= 0")
    if round_half_up(number) > MAX_INTEGER:
        raise ValueError(QUANTITY_TOO_LARGE)
    return round_half_up(number)


def _coerce_price(value: Any) -> float:
    number = parse_number(value)
    return number if number is not None and number >= 0 else 0.0


def _require_object(data: Any) -> dict:
    if not isinstance(data, dict):
        raise ValueError("request body must be a JSON object")
    return data


class ItemCreate(BaseModel):
    """Schema for creating an item."""
    name: str
    sku: str
    quantity: int
    description: str = ""
    price: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def check_required(cls, data: Any) -> Any:
        data = _require_object(data)
        if not data.get("name") or not data.get("sku") or data.get("quantity") is None:
            raise ValueError("name, sku, quantity required")
        return data

    @field_validator("name", "sku")
    @classmethod
    def strip_text(cls, value: str, info) -> str:
        value = value.strip()
        if not value:
            raise ValueError(f"{info.field_name} must not be empty")
        return value

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, value: Any) -> int:
        return _coerce_quantity(value)

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, value: Any) -> float:
        # Missing, invalid or negative prices fall back to 0
        return _coerce_price(value)

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, value: Any) -> Any:
        return "" if value is None else value


class QuickItemCreate(BaseModel):
    """Schema for the front end's add form; the SKU is generated server-side."""
    name: str
    quantity: int
    description: str = ""
    price: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def check_required(cls, data: Any) -> Any:
        data = _require_object(data)
        if not data.get("name") or data.get("quantity") in (None, ""):
            raise ValueError("Name and quantity required")
        return data

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name and quantity required")
        return value

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, value: Any) -> int:
        try:
            return _coerce_quantity(value)
        except ValueError as exc:
            if str(exc) == QUANTITY_TOO_LARGE:
                raise
            raise ValueError("Quantity must be a non-negative number") from None

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, value: Any) -> float:
        return _coerce_price(value)

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, value: Any) -> Any:
        return "" if value is None else value


class ItemUpdate(BaseModel):
    """Schema for updating an item. Omitted or null fields keep their value."""
    name: Optional[str] = None
    sku: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    quantity: Optional[int] = None

    @model_validator(mode="before")
    @classmethod
    def check_object(cls, data: Any) -> Any:
        return _require_object(data)

    @field_validator("name", "sku")
    @classmethod
    def strip_text(cls, value: Optional[str], info) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError(f"{info.field_name} must not be empty")
        return value

    @field_validator("quantity", mode="before")
    @classmethod
    def check_quantity(cls, value: Any) -> Optional[int]:
        if value is None:
            return None
        quantity = parse_integer(value)
        if quantity is None or quantity < 0:
            raise ValueError("quantity must be a non-negative integer")
        if quantity > MAX_INTEGER:
            raise ValueError(QUANTITY_TOO_LARGE)
        return quantity

    @field_validator("price", mode="before")
    @classmethod
    def check_price(cls, value: Any) -> Optional[float]:
        if value is None:
            return None
        price = parse_number(value)
        if price is None or price < 0:
            raise ValueError("price must be a number >= 0")
        return price

    def changes(self) -> dict:
        """Fields that were actually supplied with a value."""
        return self.model_dump(exclude_none=True)


class ItemAdjust(BaseModel):
    """Schema for a relative quantity change."""
    delta: int = Field(default=0, validate_default=True)

    @model_validator(mode="before")
    @classmethod
    def check_object(cls, data: Any) -> Any:
        return _require_object(data)

    @field_validator("delta", mode="before")
    @classmethod
    def check_delta(cls, value: Any) -> int:
        delta = parse_integer(value)
        if not delta:
            raise ValueError("delta must be non-zero integer")
        if abs(delta) > MAX_INTEGER:
            raise ValueError(f"delta must be between -{MAX_INTEGER} and {MAX_INTEGER}")
        return delta


class ItemResponse(BaseModel):
    """Schema for item response."""
    id: int
    name: str
    sku: str
    description: str = ""
    price: float = 0.0
    quantity: int
    created_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True
