import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from optistore.schemas.base import CamelModel


class SaleCreate(CamelModel):
    """Request body for POST /sales."""
    customer_id: uuid.UUID
    right_eye_sphere: str = "0"
    right_eye_cylinder: str = "0"
    right_eye_axis: str = "0"
    left_eye_sphere: str = "0"
    left_eye_cylinder: str = "0"
    left_eye_axis: str = "0"
    near_add: str = "0"
    total: Decimal = Field(..., ge=0)
    received: Decimal = Field(Decimal("0"), ge=0)
    frame: str = Field("", description="Inventory item name of the frame, empty for none.")
    lens: str = Field("", description="Inventory item name of the lens, empty for none.")
    entry_date: Optional[date] = None
    delivery_date: Optional[date] = None
    status: str = "pending"


class SaleUpdate(CamelModel):
    """
    Partial update. Only fields present in the request are applied;
    entryDate/deliveryDate may be sent as null to clear them.
    """
    customer_id: Optional[uuid.UUID] = None
    order_no: Optional[str] = Field(None, min_length=1)
    right_eye_sphere: Optional[str] = None
    right_eye_cylinder: Optional[str] = None
    right_eye_axis: Optional[str] = None
    left_eye_sphere: Optional[str] = None
    left_eye_cylinder: Optional[str] = None
    left_eye_axis: Optional[str] = None
    near_add: Optional[str] = None
    total: Optional[Decimal] = Field(None, ge=0)
    received: Optional[Decimal] = Field(None, ge=0)
    frame: Optional[str] = None
    lens: Optional[str] = None
    entry_date: Optional[date] = None
    delivery_date: Optional[date] = None
    status: Optional[str] = None


class CustomerBrief(CamelModel):
    id: uuid.UUID
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None


class SaleResponse(CamelModel):
    id: uuid.UUID
    order_no: str
    customer_id: uuid.UUID
    customer: Optional[CustomerBrief] = None
    right_eye_sphere: str
    right_eye_cylinder: str
    right_eye_axis: str
    left_eye_sphere: str
    left_eye_cylinder: str
    left_eye_axis: str
    near_add: str
    total: Decimal
    received: Decimal
    remaining: Decimal
    frame: str
    lens: str
    entry_date: Optional[date] = None
    delivery_date: Optional[date] = None
    status: str
    created_at: Optional[datetime] = None
