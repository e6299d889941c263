from tortoise import fields, models
import uuid


class Audit(models.Model):
    """
    A stock reconciliation over a date window.

    The financial figures and every item's expected quantity are snapshots
    taken when the audit is written; reading an audit never recomputes them.
    """
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    company = fields.ForeignKeyField("models.Company", related_name="audits")
    audit_date = fields.DatetimeField()
    start_date = fields.DatetimeField()
    end_date = fields.DatetimeField()
    period = fields.CharField(max_length=16, null=True)
    notes = fields.TextField(null=True)
    include_expenses = fields.BooleanField(default=False)

    total_inventory_value = fields.DecimalField(max_digits=14, decimal_places=2, default=0)
    total_sales_value = fields.DecimalField(max_digits=14, decimal_places=2, default=0)
    gross_sales = fields.DecimalField(max_digits=14, decimal_places=2, default=0)
    cost_of_goods_sold = fields.DecimalField(max_digits=14, decimal_places=2, default=0)
    net_profit = fields.DecimalField(max_digits=14, decimal_places=2, default=0)
    profit_margin = fields.DecimalField(max_digits=12, decimal_places=2, default=0)
    total_expenses = fields.DecimalField(max_digits=14, decimal_places=2, default=0)
    final_net_profit = fields.DecimalField(max_digits=14, decimal_places=2, default=0)
    category_breakdown = fields.JSONField(default=dict)

    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "audits"
        indexes = [
            ("company_id", "audit_date"),
        ]


class AuditItem(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    audit = fields.ForeignKeyField("models.Audit", related_name="items", on_delete=fields.CASCADE)
    inventory_item = fields.ForeignKeyField(
        "models.InventoryItem", related_name="audit_items", on_delete=fields.RESTRICT
    )
    expected_quantity = fields.IntField()
    actual_quantity = fields.IntField()
    discrepancy = fields.IntField()  # actual - expected
    unit_price = fields.DecimalField(max_digits=12, decimal_places=2)
    total_value = fields.DecimalField(max_digits=14, decimal_places=2)
    notes = fields.TextField(null=True)

    class Meta:
        table = "audit_items"
        indexes = [
            ("audit_id",),
        ]
