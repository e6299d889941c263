from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from optistore.api.deps import get_company_id
from optistore.schemas.inventory import CategoryCreate, CategoryResponse, CategoryUpdate
from optistore.schemas.response import SuccessResponse
from optistore.services import category_service

router = APIRouter()


def _wire(categories: List) -> List[dict]:
    return [CategoryResponse.model_validate(c).to_wire() for c in categories]


@router.get("/", response_model=SuccessResponse)
async def list_categories_endpoint(company_id: UUID = Depends(get_company_id)):
    categories = await category_service.list_categories(company_id)
    return SuccessResponse(data=_wire(categories))


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_category_endpoint(payload: CategoryCreate, company_id: UUID = Depends(get_company_id)):
    category = await category_service.create_category(company_id, payload)
    return SuccessResponse(data=CategoryResponse.model_validate(category).to_wire())


@router.get("/{category_id}", response_model=SuccessResponse)
async def get_category_endpoint(category_id: UUID, company_id: UUID = Depends(get_company_id)):
    category = await category_service.get_category(company_id, category_id)
    return SuccessResponse(data=CategoryResponse.model_validate(category).to_wire())


@router.put("/{category_id}", response_model=SuccessResponse)
async def update_category_endpoint(
    category_id: UUID, payload: CategoryUpdate, company_id: UUID = Depends(get_company_id)
):
    category = await category_service.update_category(company_id, category_id, payload)
    return SuccessResponse(data=CategoryResponse.model_validate(category).to_wire())


@router.delete("/{category_id}", response_model=SuccessResponse)
async def delete_category_endpoint(category_id: UUID, company_id: UUID = Depends(get_company_id)):
    """Refused with 409 while inventory items still belong to the category."""
    await category_service.delete_category(company_id, category_id)
    return SuccessResponse()
