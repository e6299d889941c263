import logging
import random
import time
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from tortoise.transactions import in_transaction

from optistore.core.errors import ConflictError, NotFoundError
from optistore.models.audit import AuditItem
from optistore.models.inventory import Category, InventoryItem
from optistore.schemas.inventory import InventoryItemCreate, InventoryItemUpdate
from optistore.services.sale_service import to_base36

log = logging.getLogger("optistore.inventory")


def generate_item_code(category_name: str) -> str:
    prefix = category_name[:3].upper().ljust(3, "X")
    timestamp = to_base36(int(time.time() * 1000))[-6:]
    return f"{prefix}-{timestamp}-{random.randint(0, 999):03d}"


async def _get_category(company_id: UUID, category_id: UUID, conn=None) -> Category:
    category = await Category.filter(id=category_id, company_id=company_id).using_db(conn).first()
    if not category:
        raise NotFoundError("Category not found")
    return category


async def list_inventory_items(company_id: UUID, category_id: Optional[UUID] = None) -> List[InventoryItem]:
    query = InventoryItem.filter(company_id=company_id)
    if category_id:
        query = query.filter(category_id=category_id)
    return await query.prefetch_related("category").order_by("-created_at")


async def get_inventory_item(company_id: UUID, item_id: UUID) -> InventoryItem:
    item = await InventoryItem.get_or_none(id=item_id, company_id=company_id).prefetch_related("category")
    if not item:
        raise NotFoundError("Inventory item not found")
    return item


async def create_inventory_item(company_id: UUID, data: InventoryItemCreate) -> InventoryItem:
    name = data.name.strip()

    async with in_transaction() as conn:
        category = await _get_category(company_id, data.category_id, conn)

        if await InventoryItem.filter(company_id=company_id, name=name).using_db(conn).exists():
            raise ConflictError("Inventory item with this name already exists")

        item = await InventoryItem.create(
            company_id=company_id,
            category=category,
            name=name,
            item_code=generate_item_code(category.name),
            unit_price=data.unit_price,
            total_stock=data.total_stock,
            using_db=conn,
        )

    log.info(f"Inventory item '{name}' ({item.item_code}) created for company {company_id}")
    await item.fetch_related("category")
    return item


async def update_inventory_item(company_id: UUID, item_id: UUID, data: InventoryItemUpdate) -> InventoryItem:
    # Explicit nulls are treated as "not sent": every column here is required
    changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

    async with in_transaction() as conn:
        item = await InventoryItem.filter(id=item_id, company_id=company_id).using_db(conn).select_for_update().first()
        if not item:
            raise NotFoundError("Inventory item not found")

        if "category_id" in changes:
            await _get_category(company_id, changes["category_id"], conn)

        if "name" in changes:
            changes["name"] = changes["name"].strip()
            clash = await (
                InventoryItem.filter(company_id=company_id, name=changes["name"])
                .exclude(id=item_id)
                .using_db(conn)
                .exists()
            )
            if clash:
                raise ConflictError("Inventory item with this name already exists")

        for field, value in changes.items():
            setattr(item, field, value)
        await item.save(using_db=conn)

    await item.fetch_related("category")
    return item


async def delete_inventory_item(company_id: UUID, item_id: UUID) -> None:
    async with in_transaction() as conn:
        item = await InventoryItem.filter(id=item_id, company_id=company_id).using_db(conn).first()
        if not item:
            raise NotFoundError("Inventory item not found")
        # Past audits keep their rows
        if await AuditItem.filter(inventory_item_id=item.id).using_db(conn).exists():
            raise ConflictError("Cannot delete inventory item recorded in stock audits")
        await item.delete(using_db=conn)
    log.info(f"Inventory item {item_id} deleted for company {company_id}")


async def get_inventory_summary(company_id: UUID) -> Dict:
    items = await InventoryItem.filter(company_id=company_id).prefetch_related("category").order_by("name")
    return {
        "total_items": len(items),
        "total_stock": sum(item.total_stock for item in items),
        "total_value": sum((item.total_stock * item.unit_price for item in items), Decimal("0")),
        "items": items,
    }
