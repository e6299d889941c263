from enum import Enum
from tortoise import fields, models
import uuid


class CategoryType(str, Enum):
    FRAME = "Frame"
    LENS = "Lens"


class Category(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    company = fields.ForeignKeyField("models.Company", related_name="categories")
    name = fields.CharField(max_length=255)
    type = fields.CharEnumField(CategoryType, max_length=16, null=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "categories"
        unique_together = (("company", "name"),)


class InventoryItem(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    company = fields.ForeignKeyField("models.Company", related_name="inventory_items")
    category = fields.ForeignKeyField("models.Category", related_name="items")
    # Sales reference items by this name, so it is unique within a company
    name = fields.CharField(max_length=255)
    item_code = fields.CharField(max_length=32)
    unit_price = fields.DecimalField(max_digits=12, decimal_places=2, default=0)
    total_stock = fields.IntField(default=0)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "inventory_items"
        unique_together = (("company", "name"),)
        indexes = [
            ("company_id", "category_id"),
        ]
