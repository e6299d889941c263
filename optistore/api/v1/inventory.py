import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from optistore.api.deps import get_company_id
from optistore.schemas.inventory import (
    InventoryItemCreate,
    InventoryItemResponse,
    InventoryItemUpdate,
    InventorySummary,
)
from optistore.schemas.response import SuccessResponse
from optistore.services import inventory_service

log = logging.getLogger("uvicorn")
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

router = APIRouter()


@router.get("/", response_model=SuccessResponse)
async def list_inventory_endpoint(
    category_id: Optional[UUID] = Query(None, alias="categoryId"),
    company_id: UUID = Depends(get_company_id),
):
    items = await inventory_service.list_inventory_items(company_id, category_id)
    return SuccessResponse(data=[InventoryItemResponse.model_validate(i).to_wire() for i in items])


@router.get("/summary", response_model=SuccessResponse)
async def inventory_summary_endpoint(company_id: UUID = Depends(get_company_id)):
    """Item count, units on hand and stock value (units x unit price)."""
    summary = await inventory_service.get_inventory_summary(company_id)
    return SuccessResponse(data=InventorySummary.model_validate(summary).to_wire())


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_inventory_endpoint(payload: InventoryItemCreate, company_id: UUID = Depends(get_company_id)):
    item = await inventory_service.create_inventory_item(company_id, payload)
    log.info(f"Inventory item '{item.name}' added for company {company_id}.")
    return SuccessResponse(data=InventoryItemResponse.model_validate(item).to_wire())


@router.get("/{item_id}", response_model=SuccessResponse)
async def get_inventory_endpoint(item_id: UUID, company_id: UUID = Depends(get_company_id)):
    item = await inventory_service.get_inventory_item(company_id, item_id)
    return SuccessResponse(data=InventoryItemResponse.model_validate(item).to_wire())


@router.patch("/{item_id}", response_model=SuccessResponse)
async def update_inventory_endpoint(
    item_id: UUID, payload: InventoryItemUpdate, company_id: UUID = Depends(get_company_id)
):
    item = await inventory_service.update_inventory_item(company_id, item_id, payload)
    return SuccessResponse(data=InventoryItemResponse.model_validate(item).to_wire())


@router.delete("/{item_id}", response_model=SuccessResponse)
async def delete_inventory_endpoint(item_id: UUID, company_id: UUID = Depends(get_company_id)):
    await inventory_service.delete_inventory_item(company_id, item_id)
    return SuccessResponse()
