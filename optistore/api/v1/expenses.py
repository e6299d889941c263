from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from optistore.api.deps import get_company_id
from optistore.models.expense import BillStatus
from optistore.schemas.expense import (
    BillCreate,
    BillResponse,
    EmployeeCreate,
    EmployeeResponse,
    SalaryCreate,
    SalaryResponse,
)
from optistore.schemas.response import SuccessResponse
from optistore.services import expense_service

router = APIRouter()


@router.get("/employees", response_model=SuccessResponse)
async def list_employees_endpoint(company_id: UUID = Depends(get_company_id)):
    employees = await expense_service.list_employees(company_id)
    return SuccessResponse(data=[EmployeeResponse.model_validate(e).to_wire() for e in employees])


@router.post("/employees", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_employee_endpoint(payload: EmployeeCreate, company_id: UUID = Depends(get_company_id)):
    employee = await expense_service.create_employee(company_id, payload)
    return SuccessResponse(data=EmployeeResponse.model_validate(employee).to_wire())


@router.get("/salaries", response_model=SuccessResponse)
async def list_salaries_endpoint(
    employee_id: Optional[UUID] = Query(None, alias="employeeId"),
    company_id: UUID = Depends(get_company_id),
):
    salaries = await expense_service.list_salaries(company_id, employee_id)
    return SuccessResponse(data=[SalaryResponse.model_validate(s).to_wire() for s in salaries])


@router.post("/salaries", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_salary_endpoint(payload: SalaryCreate, company_id: UUID = Depends(get_company_id)):
    salary = await expense_service.create_salary(company_id, payload)
    return SuccessResponse(data=SalaryResponse.model_validate(salary).to_wire())


@router.get("/bills", response_model=SuccessResponse)
async def list_bills_endpoint(
    bill_status: Optional[BillStatus] = Query(None, alias="status"),
    company_id: UUID = Depends(get_company_id),
):
    bills = await expense_service.list_bills(company_id, bill_status)
    return SuccessResponse(data=[BillResponse.model_validate(b).to_wire() for b in bills])


@router.post("/bills", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_bill_endpoint(payload: BillCreate, company_id: UUID = Depends(get_company_id)):
    bill = await expense_service.create_bill(company_id, payload)
    return SuccessResponse(data=BillResponse.model_validate(bill).to_wire())
