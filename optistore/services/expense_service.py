"""Payroll and bills. Their amounts feed the expense side of audits."""
import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from optistore.core.errors import ConflictError, NotFoundError
from optistore.models.expense import Bill, BillStatus, Employee, Salary
from optistore.schemas.expense import BillCreate, EmployeeCreate, SalaryCreate

log = logging.getLogger("optistore.expenses")


async def list_employees(company_id: UUID) -> List[Employee]:
    return await Employee.filter(company_id=company_id).order_by("name")


async def create_employee(company_id: UUID, data: EmployeeCreate) -> Employee:
    return await Employee.create(company_id=company_id, **data.model_dump())


async def list_salaries(company_id: UUID, employee_id: Optional[UUID] = None) -> List[Salary]:
    query = Salary.filter(company_id=company_id)
    if employee_id:
        query = query.filter(employee_id=employee_id)
    return await query.order_by("-year", "-month")


async def create_salary(company_id: UUID, data: SalaryCreate) -> Salary:
    if not await Employee.filter(id=data.employee_id, company_id=company_id).exists():
        raise NotFoundError("Employee not found")

    duplicate = await Salary.filter(
        company_id=company_id, employee_id=data.employee_id, month=data.month, year=data.year
    ).exists()
    if duplicate:
        raise ConflictError("Salary for this month and year already exists")

    salary = await Salary.create(company_id=company_id, **data.model_dump())
    log.info(f"Salary {data.month}/{data.year} recorded for employee {data.employee_id}")
    return salary


def derive_bill_status(due_date: date, payment_date: Optional[date], requested: Optional[BillStatus],
                       today: Optional[date] = None) -> BillStatus:
    """A payment date means paid; otherwise a past due date means overdue."""
    today = today or date.today()
    if payment_date:
        return BillStatus.PAID
    if due_date < today:
        return BillStatus.OVERDUE
    return requested or BillStatus.OUTSTANDING


async def list_bills(company_id: UUID, status: Optional[BillStatus] = None) -> List[Bill]:
    query = Bill.filter(company_id=company_id)
    if status:
        query = query.filter(status=status)
    return await query.order_by("due_date")


async def create_bill(company_id: UUID, data: BillCreate) -> Bill:
    fields = data.model_dump(exclude={"status"})
    fields["status"] = derive_bill_status(data.due_date, data.payment_date, data.status)
    return await Bill.create(company_id=company_id, **fields)
