from typing import List
from uuid import UUID

from optistore.core.errors import NotFoundError
from optistore.models.company import Customer
from optistore.schemas.customer import CustomerCreate


async def list_customers(company_id: UUID) -> List[Customer]:
    return await Customer.filter(company_id=company_id).order_by("-created_at")


async def get_customer(company_id: UUID, customer_id: UUID) -> Customer:
    customer = await Customer.get_or_none(id=customer_id, company_id=company_id)
    if not customer:
        raise NotFoundError("Customer not found")
    return customer


async def create_customer(company_id: UUID, data: CustomerCreate) -> Customer:
    return await Customer.create(company_id=company_id, **data.model_dump())
