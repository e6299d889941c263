import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_validator

from optistore.models.inventory import CategoryType
from optistore.schemas.base import CamelModel, Name


def _empty_type_to_none(value):
    # The dashboard sends "" to mean "no type"
    return None if value == "" else value


class CategoryCreate(CamelModel):
    name: Name = Field(..., description="Category name, unique per company.")
    type: Optional[CategoryType] = None

    @field_validator("type", mode="before")
    @classmethod
    def clear_empty_type(cls, value):
        return _empty_type_to_none(value)


class CategoryUpdate(CamelModel):
    """Name is required; type is only touched when the field is sent."""
    name: Name
    type: Optional[CategoryType] = None

    @field_validator("type", mode="before")
    @classmethod
    def clear_empty_type(cls, value):
        return _empty_type_to_none(value)


class CategoryResponse(CamelModel):
    id: uuid.UUID
    name: str
    type: Optional[CategoryType] = None
    item_count: Optional[int] = None


class InventoryItemCreate(CamelModel):
    name: Name = Field(..., description="Item name; sales refer to items by this name.")
    unit_price: Decimal = Field(..., ge=0)
    total_stock: int = Field(0, ge=0)
    category_id: uuid.UUID


class InventoryItemUpdate(CamelModel):
    name: Optional[Name] = None
    unit_price: Optional[Decimal] = Field(None, ge=0)
    item_code: Optional[str] = Field(None, min_length=1)
    total_stock: Optional[int] = Field(None, ge=0)
    category_id: Optional[uuid.UUID] = None


class InventoryItemResponse(CamelModel):
    id: uuid.UUID
    name: str
    item_code: str
    unit_price: Decimal
    total_stock: int
    category_id: uuid.UUID
    category: Optional[CategoryResponse] = None
    created_at: Optional[datetime] = None


class InventorySummary(CamelModel):
    total_items: int
    total_stock: int
    total_value: Decimal
    items: List[InventoryItemResponse]
