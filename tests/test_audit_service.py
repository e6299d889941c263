import pytest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

from optistore.core.errors import InvalidRequestError, NotFoundError
from optistore.models import Audit, Bill, Employee, Salary
from optistore.schemas.audit import AuditCreate, AuditItemRequest, AuditPeriod, AuditUpdate
from optistore.schemas.sale import SaleCreate
from optistore.services.audit_service import (
    create_audit,
    day_window,
    delete_audit,
    get_audit,
    get_audits,
    period_window,
    update_audit,
)
from optistore.services.sale_service import create_sale


def _today():
    return datetime.now(timezone.utc).date()


def _audit(items, start=None, end=None, **extra):
    return AuditCreate(
        start_date=start or _today(),
        end_date=end or _today(),
        items=items,
        **extra,
    )


@pytest.mark.asyncio
async def test_expected_quantity_is_snapshotted(company, customer, frames, lenses, make_item, stock_of):
    frame = await make_item(company, frames, "RayBan-A", 5, price="100.00")
    lens = await make_item(company, lenses, "Blue-Cut", 10, price="40.00")

    audit = await create_audit(company.id, _audit([
        AuditItemRequest(inventory_item_id=frame.id, actual_quantity=4),
        AuditItemRequest(inventory_item_id=lens.id, expected_quantity=10, actual_quantity=10),
    ]))

    by_item = {i.inventory_item_id: i for i in audit.items}
    assert by_item[frame.id].expected_quantity == 5
    assert by_item[frame.id].actual_quantity == 4
    assert by_item[frame.id].discrepancy == -1
    assert by_item[lens.id].discrepancy == 0
    assert audit.total_inventory_value == Decimal("800.00")

    # Stock keeps moving after the audit; the audit does not
    await create_sale(company.id, SaleCreate(customer_id=customer.id, frame="RayBan-A", total=Decimal("150")))
    reread = await get_audit(company.id, audit.id)
    reread_items = {i.inventory_item_id: i for i in reread.items}
    assert reread_items[frame.id].expected_quantity == 5
    assert reread_items[frame.id].actual_quantity == 4
    assert await stock_of(frame) == 4


@pytest.mark.asyncio
async def test_variance_never_corrects_stock(company, frames, make_item, stock_of):
    frame = await make_item(company, frames, "RayBan-A", 5)

    await create_audit(company.id, _audit([AuditItemRequest(inventory_item_id=frame.id, actual_quantity=2)]))

    assert await stock_of(frame) == 5


@pytest.mark.asyncio
async def test_unknown_item_aborts_whole_audit(company, frames, make_item):
    frame = await make_item(company, frames, "RayBan-A", 5)

    with pytest.raises(NotFoundError):
        await create_audit(company.id, _audit([
            AuditItemRequest(inventory_item_id=frame.id, actual_quantity=5),
            AuditItemRequest(inventory_item_id=uuid4(), actual_quantity=1),
        ]))

    assert await Audit.filter(company_id=company.id).count() == 0


@pytest.mark.asyncio
async def test_item_of_other_tenant_is_not_found(company, other_company, frames, make_item):
    foreign = await make_item(company, frames, "RayBan-A", 5)

    with pytest.raises(NotFoundError):
        await create_audit(other_company.id, _audit([AuditItemRequest(inventory_item_id=foreign.id, actual_quantity=5)]))


@pytest.mark.asyncio
async def test_financial_snapshot_splits_revenue_by_cost(company, customer, frames, lenses, make_item):
    frame = await make_item(company, frames, "RayBan-A", 5, price="100.00")
    await make_item(company, lenses, "Blue-Cut", 5, price="50.00")
    await create_sale(company.id, SaleCreate(
        customer_id=customer.id, frame="RayBan-A", lens="Blue-Cut", total=Decimal("300.00")
    ))

    audit = await create_audit(company.id, _audit([AuditItemRequest(inventory_item_id=frame.id, actual_quantity=4)]))

    assert audit.gross_sales == Decimal("300.00")
    assert audit.total_sales_value == Decimal("300.00")
    assert audit.cost_of_goods_sold == Decimal("150.00")
    assert audit.net_profit == Decimal("150.00")
    assert audit.profit_margin == Decimal("50.00")
    assert audit.total_expenses == Decimal("0.00")
    assert audit.final_net_profit == Decimal("150.00")

    frame_entry = audit.category_breakdown[str(frames.id)]
    lens_entry = audit.category_breakdown[str(lenses.id)]
    assert frame_entry["categoryName"] == "Frames"
    assert frame_entry["itemsSold"] == 1
    assert frame_entry["totalRevenue"] == 200.0
    assert lens_entry["totalRevenue"] == 100.0
    assert lens_entry["items"][0]["itemName"] == "Blue-Cut"


@pytest.mark.asyncio
async def test_sales_outside_window_are_ignored(company, customer, frames, make_item):
    frame = await make_item(company, frames, "RayBan-A", 5)
    await create_sale(company.id, SaleCreate(customer_id=customer.id, frame="RayBan-A", total=Decimal("300")))
    last_year = _today() - timedelta(days=400)

    audit = await create_audit(company.id, _audit(
        [AuditItemRequest(inventory_item_id=frame.id, actual_quantity=4)],
        start=last_year,
        end=last_year + timedelta(days=30),
    ))

    assert audit.gross_sales == Decimal("0.00")
    assert audit.profit_margin == Decimal("0.00")


@pytest.mark.asyncio
async def test_expenses_reduce_final_profit_only_when_requested(company, customer, frames, make_item):
    frame = await make_item(company, frames, "RayBan-A", 5, price="100.00")
    await create_sale(company.id, SaleCreate(customer_id=customer.id, frame="RayBan-A", total=Decimal("250")))
    await Bill.create(company=company, description="Rent", amount=Decimal("20.00"), due_date=_today())
    employee = await Employee.create(company=company, name="Sam", salary=Decimal("30.00"))
    await Salary.create(company=company, employee=employee, amount=Decimal("30.00"), month=1, year=2026)
    items = [AuditItemRequest(inventory_item_id=frame.id, actual_quantity=4)]

    without = await create_audit(company.id, _audit(items))
    with_expenses = await create_audit(company.id, _audit(items, include_expenses=True))

    assert without.total_expenses == Decimal("0.00")
    assert without.final_net_profit == Decimal("150.00")
    assert with_expenses.total_expenses == Decimal("50.00")
    assert with_expenses.final_net_profit == Decimal("100.00")


@pytest.mark.asyncio
async def test_update_replaces_items_and_recomputes(company, customer, frames, make_item):
    frame = await make_item(company, frames, "RayBan-A", 5, price="100.00")
    audit = await create_audit(company.id, _audit([AuditItemRequest(inventory_item_id=frame.id, actual_quantity=5)]))
    await create_sale(company.id, SaleCreate(customer_id=customer.id, frame="RayBan-A", total=Decimal("250")))
    await Bill.create(company=company, description="Power", amount=Decimal("10.00"), due_date=_today())

    updated = await update_audit(company.id, audit.id, AuditUpdate(
        include_expenses=True,
        notes="recount",
        items=[AuditItemRequest(inventory_item_id=frame.id, actual_quantity=3)],
    ))

    assert updated.notes == "recount"
    assert len(updated.items) == 1
    assert updated.items[0].expected_quantity == 4
    assert updated.items[0].discrepancy == -1
    assert updated.total_inventory_value == Decimal("300.00")
    assert updated.gross_sales == Decimal("250.00")
    assert updated.total_expenses == Decimal("10.00")


@pytest.mark.asyncio
async def test_update_without_window_change_keeps_financials(company, customer, frames, make_item):
    frame = await make_item(company, frames, "RayBan-A", 5)
    audit = await create_audit(company.id, _audit([AuditItemRequest(inventory_item_id=frame.id, actual_quantity=5)]))
    await create_sale(company.id, SaleCreate(customer_id=customer.id, frame="RayBan-A", total=Decimal("250")))

    updated = await update_audit(company.id, audit.id, AuditUpdate(notes="signed off"))

    assert updated.gross_sales == Decimal("0.00")
    assert updated.items[0].expected_quantity == 5


@pytest.mark.asyncio
async def test_update_cannot_invert_the_window(company, frames, make_item):
    frame = await make_item(company, frames, "RayBan-A", 5)
    audit = await create_audit(company.id, _audit(
        [AuditItemRequest(inventory_item_id=frame.id, actual_quantity=5)],
        start=date(2026, 1, 1),
        end=date(2026, 1, 31),
    ))

    with pytest.raises(InvalidRequestError):
        await update_audit(company.id, audit.id, AuditUpdate(start_date=date(2026, 6, 1)))
    with pytest.raises(InvalidRequestError):
        await update_audit(company.id, audit.id, AuditUpdate(end_date=date(2025, 12, 1)))

    reread = await get_audit(company.id, audit.id)
    assert reread.start_date.date() == date(2026, 1, 1)
    assert reread.end_date.date() == date(2026, 1, 31)

    moved = await update_audit(company.id, audit.id, AuditUpdate(end_date=date(2026, 2, 28)))
    assert moved.end_date.date() == date(2026, 2, 28)


@pytest.mark.asyncio
async def test_delete_audit(company, frames, make_item):
    frame = await make_item(company, frames, "RayBan-A", 5)
    audit = await create_audit(company.id, _audit([AuditItemRequest(inventory_item_id=frame.id, actual_quantity=5)]))

    await delete_audit(company.id, audit.id)

    with pytest.raises(NotFoundError):
        await get_audit(company.id, audit.id)
    with pytest.raises(NotFoundError):
        await delete_audit(company.id, audit.id)


@pytest.mark.asyncio
async def test_get_audits_orders_filters_and_summarises(company, frames, make_item):
    frame = await make_item(company, frames, "RayBan-A", 5, price="100.00")
    items = [AuditItemRequest(inventory_item_id=frame.id, actual_quantity=3)]
    today = _today()
    old = await create_audit(company.id, _audit(
        items, start=date(2024, 1, 1), end=date(2024, 1, 31),
        audit_date=datetime(2024, 2, 1, tzinfo=timezone.utc),
    ))
    recent = await create_audit(company.id, _audit(items, start=today, end=today))

    everything = await get_audits(company.id)
    assert [a.id for a in everything["audits"]] == [recent.id, old.id]
    summary = everything["summary"]
    assert summary["total_audits"] == 2
    assert summary["total_inventory_value"] == Decimal("600.00")
    # two units short at 100 each, twice
    assert summary["total_discrepancies"] == Decimal("400.00")

    january = await get_audits(company.id, start_date=date(2024, 1, 15), end_date=date(2024, 1, 20))
    assert [a.id for a in january["audits"]] == [old.id]

    this_week = await get_audits(company.id, period=AuditPeriod.WEEK)
    assert [a.id for a in this_week["audits"]] == [recent.id]

    all_time = await get_audits(company.id, period=AuditPeriod.ALL)
    assert len(all_time["audits"]) == 2


@pytest.mark.asyncio
async def test_get_audits_is_tenant_scoped(company, other_company, frames, make_item):
    frame = await make_item(company, frames, "RayBan-A", 5)
    await create_audit(company.id, _audit([AuditItemRequest(inventory_item_id=frame.id, actual_quantity=5)]))

    result = await get_audits(other_company.id)

    assert result["audits"] == []
    assert result["summary"]["avg_profit_margin"] == Decimal("0")


def test_period_window_anchors_on_request_time():
    now = datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc)

    assert period_window(AuditPeriod.WEEK, now) == (now - timedelta(days=7), now)
    assert period_window(AuditPeriod.MONTH, now) == (datetime(2026, 10, 1, tzinfo=timezone.utc), now)
    assert period_window(AuditPeriod.YEAR, now) == (datetime(2026, 1, 1, tzinfo=timezone.utc), now)
    assert period_window(AuditPeriod.ALL, now) == (None, None)


def test_day_window_covers_whole_days():
    start, end = day_window(date(2026, 5, 1), date(2026, 5, 31))

    assert start == datetime(2026, 5, 1, 0, 0, tzinfo=timezone.utc)
    assert end.date() == date(2026, 5, 31)
    assert (end.hour, end.minute, end.second) == (23, 59, 59)
