"""
Inventory ledger: stock deduction and restoration by item name.

Both operations take the open transaction connection of the caller. The
matched inventory row is locked (SELECT ... FOR UPDATE where the backend
supports it) so a concurrent sale against the same item waits for this
transaction to commit or roll back instead of reading an intermediate count.
"""
import logging
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from optistore.core.errors import InsufficientStockError, NotFoundError
from optistore.models.inventory import InventoryItem

log = logging.getLogger("optistore.ledger")


def normalize_item_name(name: Optional[str]) -> str:
    return (name or "").strip()


async def _locked_item(company_id: UUID, name: str, conn: Any) -> Optional[InventoryItem]:
    return await (
        InventoryItem.filter(company_id=company_id, name=name)
        .using_db(conn)
        .select_for_update()
        .first()
    )


async def deduct(
    company_id: UUID,
    item_name: Optional[str],
    quantity: int = 1,
    conn: Any = None,
    label: str = "item",
) -> Decimal:
    """
    Takes `quantity` units of the named item out of stock.

    Returns the item's unit price (its value before the deduction), or 0 when
    the name is blank and nothing was deducted. Raises NotFoundError when no
    item carries that name and InsufficientStockError when the stock on hand
    is lower than `quantity`; stock is never driven below zero.
    """
    name = normalize_item_name(item_name)
    if not name:
        return Decimal("0")

    item = await _locked_item(company_id, name, conn)
    if item is None:
        raise NotFoundError(f"{label.capitalize()} not found in inventory: {name}")

    if item.total_stock < quantity:
        raise InsufficientStockError(
            f"Insufficient stock for {label}: {name}. Requested: {quantity}, Available: {item.total_stock}"
        )

    unit_price = item.unit_price
    item.total_stock -= quantity
    await item.save(update_fields=["total_stock", "updated_at"], using_db=conn)
    log.info(f"Deducted {quantity} x '{name}' for company {company_id}; stock now {item.total_stock}")
    return unit_price


async def restore(
    company_id: UUID,
    item_name: Optional[str],
    quantity: int = 1,
    conn: Any = None,
) -> bool:
    """
    Puts `quantity` units of the named item back into stock.

    An unknown or blank name is a silent no-op. Returns whether a row was
    updated.
    """
    name = normalize_item_name(item_name)
    if not name:
        return False

    item = await _locked_item(company_id, name, conn)
    if item is None:
        log.info(f"Restore skipped: no inventory item named '{name}' for company {company_id}")
        return False

    item.total_stock += quantity
    await item.save(update_fields=["total_stock", "updated_at"], using_db=conn)
    log.info(f"Restored {quantity} x '{name}' for company {company_id}; stock now {item.total_stock}")
    return True
