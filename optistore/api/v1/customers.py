from uuid import UUID

from fastapi import APIRouter, Depends, status

from optistore.api.deps import get_company_id
from optistore.schemas.customer import CustomerCreate, CustomerResponse
from optistore.schemas.response import SuccessResponse
from optistore.services import customer_service

router = APIRouter()


@router.get("/", response_model=SuccessResponse)
async def list_customers_endpoint(company_id: UUID = Depends(get_company_id)):
    customers = await customer_service.list_customers(company_id)
    return SuccessResponse(data=[CustomerResponse.model_validate(c).to_wire() for c in customers])


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_customer_endpoint(payload: CustomerCreate, company_id: UUID = Depends(get_company_id)):
    customer = await customer_service.create_customer(company_id, payload)
    return SuccessResponse(data=CustomerResponse.model_validate(customer).to_wire())


@router.get("/{customer_id}", response_model=SuccessResponse)
async def get_customer_endpoint(customer_id: UUID, company_id: UUID = Depends(get_company_id)):
    customer = await customer_service.get_customer(company_id, customer_id)
    return SuccessResponse(data=CustomerResponse.model_validate(customer).to_wire())
