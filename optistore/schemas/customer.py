import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field

from optistore.schemas.base import CamelModel


class CustomerCreate(CamelModel):
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


class CustomerResponse(CamelModel):
    id: uuid.UUID
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None
