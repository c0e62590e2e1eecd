# backend/app/schemas/product_schema.py
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

# NUMERIC(10, 2)
_PRICE_STEP = Decimal("0.01")
_PRICE_LIMIT = Decimal("100000000")


def _round_price(v: Optional[Decimal]) -> Optional[Decimal]:
    if v is None:
        return None
    # quantize raises InvalidOperation past the context precision, so bound first
    if abs(v) >= _PRICE_LIMIT:
        raise ValueError("price must be less than 100000000")
    try:
        v = v.quantize(_PRICE_STEP, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError("price is not a valid amount")
    if abs(v) >= _PRICE_LIMIT:
        raise ValueError("price must be less than 100000000")
    return v


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductCreate(_CamelModel):
    name: str
    sku: str
    brand: str
    price: Optional[Decimal] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    is_active: Optional[bool] = True

    @field_validator("name", "sku", "brand")
    @classmethod
    def _required_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("price")
    @classmethod
    def _price(cls, v):
        return _round_price(v)


class ProductUpdate(_CamelModel):
    """
    Partial update. Only the fields present in the request body are applied;
    see `changes()`. Sending null for a required field is rejected, sending
    null for an optional one clears it.
    """

    name: Optional[str] = None
    sku: Optional[str] = None
    brand: Optional[str] = None
    price: Optional[Decimal] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    is_active: Optional[bool] = None

    # defaults are not validated, so these only run for fields the client sent
    @field_validator("name", "sku", "brand")
    @classmethod
    def _required_text(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("is_active")
    @classmethod
    def _not_null(cls, v: Optional[bool]) -> bool:
        if v is None:
            raise ValueError("must not be null")
        return v

    @field_validator("price")
    @classmethod
    def _price(cls, v):
        return _round_price(v)

    def changes(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.model_fields_set}


class ProductOut(_CamelModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    sku: str
    brand: str
    price: Optional[Decimal] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
