import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status

from optistore.api.deps import get_company_id
from optistore.schemas.response import SuccessResponse
from optistore.schemas.sale import SaleCreate, SaleResponse, SaleUpdate
from optistore.services.sale_service import create_sale, delete_sale, get_sale, list_sales, update_sale

router = APIRouter()
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger("uvicorn")


@router.get("/", response_model=SuccessResponse)
async def list_sales_endpoint(company_id: UUID = Depends(get_company_id)):
    sales = await list_sales(company_id)
    return SuccessResponse(data=[SaleResponse.model_validate(s).to_wire() for s in sales])


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_sale_endpoint(payload: SaleCreate, company_id: UUID = Depends(get_company_id)):
    """
    Records a sale and takes its frame and lens out of stock.
    Returns 400 with "Failed to deduct inventory: ..." when an item is missing or out of stock.
    """
    sale = await create_sale(company_id, payload)
    log.info(f"Sale {sale.order_no} placed for company {company_id}.")
    return SuccessResponse(data=SaleResponse.model_validate(sale).to_wire())


@router.get("/{sale_id}", response_model=SuccessResponse)
async def get_sale_endpoint(sale_id: UUID, company_id: UUID = Depends(get_company_id)):
    sale = await get_sale(company_id, sale_id)
    return SuccessResponse(data=SaleResponse.model_validate(sale).to_wire())


@router.patch("/{sale_id}", response_model=SuccessResponse)
async def update_sale_endpoint(sale_id: UUID, payload: SaleUpdate, company_id: UUID = Depends(get_company_id)):
    """Partial update; changing frame or lens moves stock between the old and new items."""
    sale = await update_sale(company_id, sale_id, payload)
    return SuccessResponse(data=SaleResponse.model_validate(sale).to_wire())


@router.delete("/{sale_id}", response_model=SuccessResponse)
async def delete_sale_endpoint(sale_id: UUID, company_id: UUID = Depends(get_company_id)):
    """Deletes the sale after putting its frame and lens back into stock."""
    await delete_sale(company_id, sale_id)
    log.info(f"Sale {sale_id} deleted for company {company_id}.")
    return SuccessResponse()
