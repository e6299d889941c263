"""
Stock audit reconciliation.

An audit records, for each counted inventory item, the quantity the system
expected and the quantity physically found. Expected quantities default to
the item's stock at the moment the audit is written and are stored, so the
variance of an old audit does not drift as later sales move stock. Audits are
advisory: a variance never corrects inventory.

Each audit also carries a financial snapshot of its window: sales revenue,
cost of the frames and lenses sold, and optionally the bills and salaries
paid in that window.
"""
import logging
from collections import defaultdict
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from tortoise.transactions import in_transaction

from optistore.core.errors import InvalidRequestError, NotFoundError
from optistore.models.audit import Audit, AuditItem
from optistore.models.expense import Bill, Salary
from optistore.models.inventory import InventoryItem
from optistore.models.sale import Sale
from optistore.schemas.audit import AuditCreate, AuditItemRequest, AuditPeriod, AuditUpdate

log = logging.getLogger("optistore.audits")

ZERO = Decimal("0")
CENT = Decimal("0.01")


def _money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT)


def _utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value.astimezone(timezone.utc)


def day_window(start: date, end: date) -> Tuple[datetime, datetime]:
    """Expands a date range to [start 00:00:00, end 23:59:59.999999] UTC."""
    return (
        datetime.combine(start, time.min, tzinfo=timezone.utc),
        datetime.combine(end, time.max, tzinfo=timezone.utc),
    )


def period_window(period: AuditPeriod, now: datetime) -> Tuple[Optional[datetime], Optional[datetime]]:
    """
    Translates a legacy period bucket into a date range ending at `now`.

    week is the trailing seven days, month and year start at the first day
    of the current calendar month/year, all is unbounded.
    """
    now = _utc(now)
    if period == AuditPeriod.WEEK:
        start = now - timedelta(days=7)
    elif period == AuditPeriod.MONTH:
        start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    elif period == AuditPeriod.YEAR:
        start = now.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
    else:
        return None, None
    return start, now


def resolve_query_range(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    period: Optional[AuditPeriod] = None,
    now: Optional[datetime] = None,
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """A period wins over explicit dates, as older clients send only the period."""
    if period:
        return period_window(period, now or datetime.now(timezone.utc))
    range_start = day_window(start_date, start_date)[0] if start_date else None
    range_end = day_window(end_date, end_date)[1] if end_date else None
    return range_start, range_end


# ----------- Financial snapshot -----------

def _new_category_entry(name: str) -> Dict[str, Any]:
    return {
        "categoryName": name,
        "itemsSold": 0,
        "totalCost": ZERO,
        "totalRevenue": ZERO,
        "totalProfit": ZERO,
        "items": {},
    }


def _book_item(breakdown: Dict, item: InventoryItem, revenue: Decimal) -> None:
    category_name = item.category.name if item.category else "Uncategorized"
    entry = breakdown.setdefault(str(item.category_id), _new_category_entry(category_name))
    cost = item.unit_price
    profit = revenue - cost

    entry["itemsSold"] += 1
    entry["totalCost"] += cost
    entry["totalRevenue"] += revenue
    entry["totalProfit"] += profit

    line = entry["items"].setdefault(item.name, {
        "itemName": item.name,
        "quantity": 0,
        "unitPrice": cost,
        "totalCost": ZERO,
        "totalRevenue": ZERO,
        "profit": ZERO,
    })
    line["quantity"] += 1
    line["totalCost"] += cost
    line["totalRevenue"] += revenue
    line["profit"] += profit


def _split_revenue(total: Decimal, frame: Optional[InventoryItem], lens: Optional[InventoryItem]) -> Tuple[Decimal, Decimal]:
    """Splits a sale's total between frame and lens in proportion to their cost."""
    if frame and lens:
        cost_sum = frame.unit_price + lens.unit_price
        if cost_sum > 0:
            frame_revenue = frame.unit_price / cost_sum * total
            return frame_revenue, total - frame_revenue
        return total / 2, total / 2
    if frame:
        return total, ZERO
    if lens:
        return ZERO, total
    return ZERO, ZERO


def _jsonable_breakdown(breakdown: Dict) -> Dict:
    """Rounds money to cents and turns item maps into lists for JSON storage."""
    def _num(value):
        return float(_money(value)) if isinstance(value, Decimal) else value

    result = {}
    for category_id, entry in breakdown.items():
        result[category_id] = {
            **{k: _num(v) for k, v in entry.items() if k != "items"},
            "items": [{k: _num(v) for k, v in line.items()} for line in entry["items"].values()],
        }
    return result


async def calculate_audit_financials(
    company_id: UUID,
    start: datetime,
    end: datetime,
    include_expenses: bool,
    conn: Any = None,
) -> Dict[str, Any]:
    sales = await Sale.filter(company_id=company_id, created_at__gte=start, created_at__lte=end).using_db(conn)
    inventory = await InventoryItem.filter(company_id=company_id).using_db(conn).prefetch_related("category")
    by_name = {item.name: item for item in inventory}

    breakdown: Dict[str, Dict] = {}
    gross_sales = ZERO
    cost_of_goods_sold = ZERO

    for sale in sales:
        gross_sales += sale.total
        frame = by_name.get(sale.frame) if sale.frame else None
        lens = by_name.get(sale.lens) if sale.lens else None
        cost_of_goods_sold += (frame.unit_price if frame else ZERO) + (lens.unit_price if lens else ZERO)

        frame_revenue, lens_revenue = _split_revenue(sale.total, frame, lens)
        if frame:
            _book_item(breakdown, frame, frame_revenue)
        if lens:
            _book_item(breakdown, lens, lens_revenue)

    net_profit = gross_sales - cost_of_goods_sold
    profit_margin = net_profit / gross_sales * 100 if gross_sales > 0 else ZERO

    total_expenses = ZERO
    if include_expenses:
        bills = await Bill.filter(company_id=company_id, created_at__gte=start, created_at__lte=end).using_db(conn)
        salaries = await Salary.filter(company_id=company_id, created_at__gte=start, created_at__lte=end).using_db(conn)
        total_expenses = sum((b.amount for b in bills), ZERO) + sum((s.amount for s in salaries), ZERO)

    return {
        "total_sales_value": _money(gross_sales),
        "gross_sales": _money(gross_sales),
        "cost_of_goods_sold": _money(cost_of_goods_sold),
        "net_profit": _money(net_profit),
        "profit_margin": _money(profit_margin),
        "total_expenses": _money(total_expenses),
        "final_net_profit": _money(net_profit - total_expenses),
        "category_breakdown": _jsonable_breakdown(breakdown),
    }


# ----------- Item snapshot -----------

async def _snapshot_items(
    company_id: UUID, requested: List[AuditItemRequest], conn: Any
) -> Tuple[List[Dict[str, Any]], Decimal]:
    rows = []
    total_inventory_value = ZERO

    for req in requested:
        item = await InventoryItem.filter(id=req.inventory_item_id, company_id=company_id).using_db(conn).first()
        if not item:
            raise NotFoundError(f"Inventory item with ID {req.inventory_item_id} not found")

        expected = req.expected_quantity if req.expected_quantity is not None else item.total_stock
        total_value = req.actual_quantity * item.unit_price
        total_inventory_value += total_value
        rows.append({
            "inventory_item_id": item.id,
            "expected_quantity": expected,
            "actual_quantity": req.actual_quantity,
            "discrepancy": req.actual_quantity - expected,
            "unit_price": item.unit_price,
            "total_value": total_value,
            "notes": req.notes,
        })

    return rows, total_inventory_value


async def _write_items(audit: Audit, rows: List[Dict[str, Any]], conn: Any) -> None:
    await AuditItem.bulk_create([AuditItem(audit=audit, **row) for row in rows], using_db=conn)


# ----------- Operations -----------

async def _load(company_id: UUID, audit_id: UUID) -> Audit:
    audit = await Audit.get_or_none(id=audit_id, company_id=company_id).prefetch_related(
        "items", "items__inventory_item"
    )
    if not audit:
        raise NotFoundError("Audit not found")
    return audit


async def get_audit(company_id: UUID, audit_id: UUID) -> Audit:
    return await _load(company_id, audit_id)


async def create_audit(company_id: UUID, data: AuditCreate) -> Audit:
    start, end = day_window(data.start_date, data.end_date)
    audit_date = _utc(data.audit_date) if data.audit_date else datetime.now(timezone.utc)

    async with in_transaction() as conn:
        rows, total_inventory_value = await _snapshot_items(company_id, data.items, conn)
        financials = await calculate_audit_financials(company_id, start, end, data.include_expenses, conn)

        audit = await Audit.create(
            company_id=company_id,
            audit_date=audit_date,
            start_date=start,
            end_date=end,
            period=data.period.value if data.period else None,
            notes=data.notes,
            include_expenses=data.include_expenses,
            total_inventory_value=_money(total_inventory_value),
            using_db=conn,
            **financials,
        )
        await _write_items(audit, rows, conn)

    log.info(f"Audit {audit.id} created for company {company_id} with {len(rows)} items")
    return await _load(company_id, audit.id)


async def update_audit(company_id: UUID, audit_id: UUID, data: AuditUpdate) -> Audit:
    """
    Updates audit metadata. Sending `items` replaces the item list with a
    fresh snapshot; changing the window or the expenses flag recomputes the
    financial snapshot.
    """
    sent = data.model_fields_set

    async with in_transaction() as conn:
        audit = await Audit.filter(id=audit_id, company_id=company_id).using_db(conn).select_for_update().first()
        if not audit:
            raise NotFoundError("Audit not found")

        if "audit_date" in sent and data.audit_date:
            audit.audit_date = _utc(data.audit_date)
        if "notes" in sent:
            audit.notes = data.notes
        if "period" in sent:
            audit.period = data.period.value if data.period else None
        if "include_expenses" in sent and data.include_expenses is not None:
            audit.include_expenses = data.include_expenses
        if "start_date" in sent and data.start_date:
            audit.start_date = day_window(data.start_date, data.start_date)[0]
        if "end_date" in sent and data.end_date:
            audit.end_date = day_window(data.end_date, data.end_date)[1]
        if audit.end_date < audit.start_date:
            raise InvalidRequestError("endDate must not be before startDate")

        if data.items is not None:
            rows, total_inventory_value = await _snapshot_items(company_id, data.items, conn)
            await AuditItem.filter(audit_id=audit.id).using_db(conn).delete()
            await _write_items(audit, rows, conn)
            audit.total_inventory_value = _money(total_inventory_value)

        if sent & {"start_date", "end_date", "include_expenses"}:
            financials = await calculate_audit_financials(
                company_id, audit.start_date, audit.end_date, audit.include_expenses, conn
            )
            for field, value in financials.items():
                setattr(audit, field, value)

        await audit.save(using_db=conn)

    return await _load(company_id, audit_id)


async def delete_audit(company_id: UUID, audit_id: UUID) -> None:
    async with in_transaction() as conn:
        audit = await Audit.filter(id=audit_id, company_id=company_id).using_db(conn).first()
        if not audit:
            raise NotFoundError("Audit not found")
        await AuditItem.filter(audit_id=audit.id).using_db(conn).delete()
        await audit.delete(using_db=conn)


async def get_audits(
    company_id: UUID,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    period: Optional[AuditPeriod] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Lists audits newest first with a summary over them.

    Audits are kept when their window overlaps the requested range. The
    summary's sales value counts sales created inside the range.
    """
    range_start, range_end = resolve_query_range(start_date, end_date, period, now)

    query = Audit.filter(company_id=company_id)
    sales_query = Sale.filter(company_id=company_id)
    if range_start:
        query = query.filter(end_date__gte=range_start)
        sales_query = sales_query.filter(created_at__gte=range_start)
    if range_end:
        query = query.filter(start_date__lte=range_end)
        sales_query = sales_query.filter(created_at__lte=range_end)

    audits = await query.prefetch_related("items", "items__inventory_item").order_by("-audit_date", "-created_at")
    sales = await sales_query.only("total")

    count = len(audits)
    summary = {
        "total_audits": count,
        "total_inventory_value": sum((a.total_inventory_value for a in audits), ZERO),
        "total_sales_value": sum((s.total for s in sales), ZERO),
        "total_gross_sales": sum((a.gross_sales for a in audits), ZERO),
        "total_cogs": sum((a.cost_of_goods_sold for a in audits), ZERO),
        "total_net_profit": sum((a.net_profit for a in audits), ZERO),
        "avg_profit_margin": _money(sum((a.profit_margin for a in audits), ZERO) / count) if count else ZERO,
        "total_discrepancies": sum(
            (abs(item.discrepancy) * item.unit_price for a in audits for item in a.items), ZERO
        ),
    }
    return {"audits": audits, "summary": summary}


async def list_inventory_items_for_audit(company_id: UUID) -> List[InventoryItem]:
    return await InventoryItem.filter(company_id=company_id).prefetch_related("category").order_by(
        "category__name", "name"
    )
