import logging
from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from optistore.api.deps import get_company_id
from optistore.schemas.audit import (
    AuditCreate,
    AuditInventoryItem,
    AuditListResponse,
    AuditPeriod,
    AuditResponse,
    AuditUpdate,
)
from optistore.schemas.response import SuccessResponse
from optistore.services import audit_service

router = APIRouter()
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger("uvicorn")


@router.get("/", response_model=SuccessResponse)
async def list_audits_endpoint(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    period: Optional[AuditPeriod] = Query(None),
    company_id: UUID = Depends(get_company_id),
):
    """
    Audits overlapping the requested range, newest first, with a summary.
    `period` (week, month, year, all) takes precedence over explicit dates.
    """
    result = await audit_service.get_audits(company_id, start_date, end_date, period)
    return SuccessResponse(data=AuditListResponse.model_validate(result).to_wire())


@router.get("/inventory-items", response_model=SuccessResponse)
async def audit_inventory_items_endpoint(company_id: UUID = Depends(get_company_id)):
    """Items to count on an audit form, grouped by category name."""
    items = await audit_service.list_inventory_items_for_audit(company_id)
    return SuccessResponse(data=[AuditInventoryItem.model_validate(i).to_wire() for i in items])


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_audit_endpoint(payload: AuditCreate, company_id: UUID = Depends(get_company_id)):
    audit = await audit_service.create_audit(company_id, payload)
    log.info(f"Audit {audit.id} recorded for company {company_id}.")
    return SuccessResponse(data=AuditResponse.model_validate(audit).to_wire())


@router.get("/{audit_id}", response_model=SuccessResponse)
async def get_audit_endpoint(audit_id: UUID, company_id: UUID = Depends(get_company_id)):
    audit = await audit_service.get_audit(company_id, audit_id)
    return SuccessResponse(data=AuditResponse.model_validate(audit).to_wire())


@router.patch("/{audit_id}", response_model=SuccessResponse)
async def update_audit_endpoint(audit_id: UUID, payload: AuditUpdate, company_id: UUID = Depends(get_company_id)):
    audit = await audit_service.update_audit(company_id, audit_id, payload)
    return SuccessResponse(data=AuditResponse.model_validate(audit).to_wire())


@router.delete("/{audit_id}", response_model=SuccessResponse)
async def delete_audit_endpoint(audit_id: UUID, company_id: UUID = Depends(get_company_id)):
    await audit_service.delete_audit(company_id, audit_id)
    return SuccessResponse()
