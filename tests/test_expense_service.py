from datetime import date
from decimal import Decimal

import pytest

from optistore.core.errors import ConflictError, NotFoundError
from optistore.models.expense import BillStatus, Employee
from optistore.schemas.expense import BillCreate, SalaryCreate
from optistore.services import expense_service


def test_bill_with_payment_date_is_paid():
    status = expense_service.derive_bill_status(
        date(2024, 1, 1), date(2024, 1, 5), BillStatus.OUTSTANDING, today=date(2024, 3, 1)
    )
    assert status == BillStatus.PAID


def test_unpaid_bill_past_due_is_overdue():
    status = expense_service.derive_bill_status(date(2024, 1, 1), None, None, today=date(2024, 3, 1))
    assert status == BillStatus.OVERDUE


def test_unpaid_bill_keeps_requested_status_before_due():
    assert expense_service.derive_bill_status(date(2024, 5, 1), None, None, today=date(2024, 3, 1)) \
        == BillStatus.OUTSTANDING


@pytest.mark.asyncio
async def test_create_bill_derives_status(company):
    bill = await expense_service.create_bill(
        company.id,
        BillCreate(description="Rent", amount=Decimal("1200"), due_date=date(2000, 1, 1)),
    )
    assert bill.status == BillStatus.OVERDUE


@pytest.mark.asyncio
async def test_salary_for_unknown_employee_is_rejected(company, other_company):
    stranger = await Employee.create(company=other_company, name="Someone Else")
    with pytest.raises(NotFoundError):
        await expense_service.create_salary(
            company.id, SalaryCreate(employee_id=stranger.id, amount=Decimal("900"), month=1, year=2024)
        )


@pytest.mark.asyncio
async def test_duplicate_salary_month_is_a_conflict(company):
    employee = await Employee.create(company=company, name="Sam Optician", salary=Decimal("900"))
    payload = SalaryCreate(employee_id=employee.id, amount=Decimal("900"), month=2, year=2024)

    await expense_service.create_salary(company.id, payload)
    with pytest.raises(ConflictError):
        await expense_service.create_salary(company.id, payload)

    salaries = await expense_service.list_salaries(company.id, employee.id)
    assert len(salaries) == 1
