# scripts/seed_data.py
import asyncio
from decimal import Decimal
from optistore.core.db import init_db, close_db
from optistore.models.company import Company, Customer
from optistore.models.inventory import Category, CategoryType, InventoryItem
from optistore.services.inventory_service import generate_item_code


async def seed():
    # Create one company
    company, _ = await Company.get_or_create(name="Demo Optics")
    print("Company:", company.id)

    frames, _ = await Category.get_or_create(company=company, name="Frames", defaults={"type": CategoryType.FRAME})
    lenses, _ = await Category.get_or_create(company=company, name="Lenses", defaults={"type": CategoryType.LENS})

    stock = [
        (frames, "RayBan-A", Decimal("100.00"), 5),
        (frames, "Oakley-Classic", Decimal("140.00"), 3),
        (lenses, "Blue-Cut 1.56", Decimal("40.00"), 20),
        (lenses, "Progressive 1.67", Decimal("120.00"), 8),
    ]
    for category, name, price, qty in stock:
        item, created = await InventoryItem.get_or_create(
            company=company,
            name=name,
            defaults={
                "category": category,
                "item_code": generate_item_code(category.name),
                "unit_price": price,
                "total_stock": qty,
            },
        )
        # If existing, reset quantities (idempotent)
        if not created:
            item.total_stock = qty
            await item.save()

    customer, _ = await Customer.get_or_create(company=company, name="Walk-in Customer")
    print("Customer:", customer.id)
    print("Inventory seeded.")


async def main():
    await init_db()
    await seed()
    await close_db()

if __name__ == "__main__":
    asyncio.run(main())
