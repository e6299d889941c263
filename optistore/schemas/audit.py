import uuid
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator, model_validator

from optistore.schemas.base import CamelModel


class AuditPeriod(str, Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


class AuditItemRequest(CamelModel):
    inventory_item_id: uuid.UUID
    # Filled from the item's current stock when omitted
    expected_quantity: Optional[int] = Field(None, ge=0)
    actual_quantity: int = Field(..., ge=0)
    notes: Optional[str] = None


class AuditCreate(CamelModel):
    audit_date: Optional[datetime] = None
    start_date: date
    end_date: date
    period: Optional[AuditPeriod] = Field(None, description="Legacy label, kept for older clients.")
    notes: Optional[str] = None
    include_expenses: bool = False
    items: List[AuditItemRequest] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _window_is_ordered(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class AuditUpdate(CamelModel):
    audit_date: Optional[datetime] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    period: Optional[AuditPeriod] = None
    notes: Optional[str] = None
    include_expenses: Optional[bool] = None
    items: Optional[List[AuditItemRequest]] = None


class AuditInventoryItem(CamelModel):
    id: uuid.UUID
    name: str
    item_code: str
    unit_price: Decimal
    total_stock: int


class AuditItemResponse(CamelModel):
    id: uuid.UUID
    inventory_item_id: uuid.UUID
    inventory_item: Optional[AuditInventoryItem] = None
    expected_quantity: int
    actual_quantity: int
    discrepancy: int
    unit_price: Decimal
    total_value: Decimal
    notes: Optional[str] = None


class AuditResponse(CamelModel):
    id: uuid.UUID
    audit_date: datetime
    start_date: datetime
    end_date: datetime
    period: Optional[str] = None
    notes: Optional[str] = None
    include_expenses: bool
    total_inventory_value: Decimal
    total_sales_value: Decimal
    gross_sales: Decimal
    cost_of_goods_sold: Decimal
    net_profit: Decimal
    profit_margin: Decimal
    total_expenses: Decimal
    final_net_profit: Decimal
    category_breakdown: Dict[str, Any] = {}
    items: List[AuditItemResponse] = []

    @field_validator("items", mode="before")
    @classmethod
    def related_items(cls, value):
        # ORM reverse relations are iterable but not lists
        return list(value) if value is not None else []


class AuditSummary(CamelModel):
    total_audits: int
    total_inventory_value: Decimal
    total_sales_value: Decimal
    total_gross_sales: Decimal
    total_cogs: Decimal = Field(..., alias="totalCOGS")
    total_net_profit: Decimal
    avg_profit_margin: Decimal
    total_discrepancies: Decimal


class AuditListResponse(CamelModel):
    audits: List[AuditResponse]
    summary: AuditSummary
