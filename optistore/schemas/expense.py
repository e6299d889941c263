import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from optistore.models.expense import BillStatus, SalaryStatus
from optistore.schemas.base import CamelModel


class EmployeeCreate(CamelModel):
    name: str = Field(..., min_length=1)
    position: Optional[str] = None
    salary: Decimal = Field(Decimal("0"), ge=0)
    is_active: bool = True


class EmployeeResponse(CamelModel):
    id: uuid.UUID
    name: str
    position: Optional[str] = None
    salary: Decimal
    is_active: bool


class SalaryCreate(CamelModel):
    employee_id: uuid.UUID
    amount: Decimal = Field(..., ge=0)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2000)
    payment_date: Optional[date] = None
    status: SalaryStatus = SalaryStatus.PENDING
    notes: Optional[str] = None


class SalaryResponse(CamelModel):
    id: uuid.UUID
    employee_id: uuid.UUID
    amount: Decimal
    month: int
    year: int
    payment_date: Optional[date] = None
    status: SalaryStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class BillCreate(CamelModel):
    description: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0)
    category: Optional[str] = None
    due_date: date
    payment_date: Optional[date] = None
    status: Optional[BillStatus] = None
    notes: Optional[str] = None


class BillResponse(CamelModel):
    id: uuid.UUID
    description: str
    amount: Decimal
    category: Optional[str] = None
    due_date: date
    payment_date: Optional[date] = None
    status: BillStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
