import logging
import random
import time
from decimal import Decimal
from typing import List
from uuid import UUID

from tortoise.transactions import in_transaction

from optistore.core.errors import (
    ConflictError,
    InsufficientStockError,
    InventoryDeductionError,
    NotFoundError,
)
from optistore.models.company import Customer
from optistore.models.sale import Sale
from optistore.schemas.sale import SaleCreate, SaleUpdate
from optistore.services import ledger

log = logging.getLogger("optistore.sales")

_BASE36 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_order_no() -> str:
    timestamp = to_base36(int(time.time() * 1000))
    return f"ORD-{timestamp}-{random.randint(0, 9999):04d}"


async def _deduct_for_sale(company_id: UUID, frame: str, lens: str, conn) -> None:
    """Deducts one frame and one lens; ledger failures become InventoryDeductionError."""
    try:
        await ledger.deduct(company_id, frame, conn=conn, label="frame")
        await ledger.deduct(company_id, lens, conn=conn, label="lens")
    except (NotFoundError, InsufficientStockError) as e:
        raise InventoryDeductionError(e.message) from e


async def list_sales(company_id: UUID) -> List[Sale]:
    return await Sale.filter(company_id=company_id).prefetch_related("customer").order_by("-created_at")


async def get_sale(company_id: UUID, sale_id: UUID) -> Sale:
    sale = await Sale.get_or_none(id=sale_id, company_id=company_id).prefetch_related("customer")
    if not sale:
        raise NotFoundError("Sale not found")
    return sale


async def create_sale(company_id: UUID, data: SaleCreate) -> Sale:
    """
    Creates a sale and takes its frame and lens out of stock.

    The deductions and the insert share one transaction: if either item is
    missing or out of stock nothing is written.
    """
    remaining = data.total - data.received

    async with in_transaction() as conn:
        customer = await Customer.filter(id=data.customer_id, company_id=company_id).using_db(conn).first()
        if not customer:
            raise NotFoundError("Customer not found")

        await _deduct_for_sale(company_id, data.frame, data.lens, conn)

        sale = await Sale.create(
            company_id=company_id,
            customer=customer,
            order_no=generate_order_no(),
            right_eye_sphere=data.right_eye_sphere,
            right_eye_cylinder=data.right_eye_cylinder,
            right_eye_axis=data.right_eye_axis,
            left_eye_sphere=data.left_eye_sphere,
            left_eye_cylinder=data.left_eye_cylinder,
            left_eye_axis=data.left_eye_axis,
            near_add=data.near_add,
            total=data.total,
            received=data.received,
            remaining=remaining,
            frame=ledger.normalize_item_name(data.frame),
            lens=ledger.normalize_item_name(data.lens),
            entry_date=data.entry_date,
            delivery_date=data.delivery_date,
            status=data.status,
            using_db=conn,
        )

    log.info(f"Sale {sale.order_no} created for company {company_id}")
    await sale.fetch_related("customer")
    return sale


async def update_sale(company_id: UUID, sale_id: UUID, data: SaleUpdate) -> Sale:
    """
    Applies a partial update to a sale.

    When the frame or lens name changes, the old item is restored and the new
    one deducted in the same transaction as the row update, so a failed
    deduction leaves both the stock and the sale as they were.
    """
    changes = data.model_dump(exclude_unset=True)

    async with in_transaction() as conn:
        sale = await Sale.filter(id=sale_id, company_id=company_id).using_db(conn).select_for_update().first()
        if not sale:
            raise NotFoundError("Sale not found")

        if changes.get("order_no"):
            taken = await Sale.filter(order_no=changes["order_no"]).exclude(id=sale.id).using_db(conn).exists()
            if taken:
                raise ConflictError("Order number already in use")

        if "customer_id" in changes:
            if changes["customer_id"] is None:
                changes.pop("customer_id")
            elif not await Customer.filter(id=changes["customer_id"], company_id=company_id).using_db(conn).exists():
                raise NotFoundError("Customer not found")

        # Stock moves only for the side whose item actually changes
        relinks = []
        for side in ("frame", "lens"):
            if side not in changes:
                continue
            new_name = ledger.normalize_item_name(changes[side])
            changes[side] = new_name
            old_name = ledger.normalize_item_name(getattr(sale, side))
            if new_name != old_name:
                relinks.append((side, old_name, new_name))

        for side, old_name, _ in relinks:
            await ledger.restore(company_id, old_name, conn=conn)
        try:
            for side, _, new_name in relinks:
                await ledger.deduct(company_id, new_name, conn=conn, label=side)
        except (NotFoundError, InsufficientStockError) as e:
            log.warning(f"Sale {sale.order_no}: relink rejected, rolling back ({e.message})")
            raise InventoryDeductionError(e.message) from e

        # Non-nullable columns ignore an explicit null
        for field, value in changes.items():
            if value is None and field not in ("entry_date", "delivery_date"):
                continue
            setattr(sale, field, value)

        total = changes.get("total")
        received = changes.get("received")
        if total is not None or received is not None:
            sale.remaining = (total if total is not None else sale.total) - (
                received if received is not None else sale.received
            )

        await sale.save(using_db=conn)

    log.info(f"Sale {sale.order_no} updated for company {company_id}")
    await sale.fetch_related("customer")
    return sale


async def delete_sale(company_id: UUID, sale_id: UUID) -> None:
    """Puts the sale's frame and lens back into stock, then deletes the sale."""
    async with in_transaction() as conn:
        sale = await Sale.filter(id=sale_id, company_id=company_id).using_db(conn).select_for_update().first()
        if not sale:
            raise NotFoundError("Sale not found")

        await ledger.restore(company_id, sale.frame, conn=conn)
        await ledger.restore(company_id, sale.lens, conn=conn)
        await sale.delete(using_db=conn)

    log.info(f"Sale {sale.order_no} deleted for company {company_id}; inventory restored")
