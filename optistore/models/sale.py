from tortoise import fields, models
import uuid


class Sale(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    company = fields.ForeignKeyField("models.Company", related_name="sales")
    customer = fields.ForeignKeyField("models.Customer", related_name="sales")
    order_no = fields.CharField(max_length=32, unique=True)

    # Prescription, kept as entered
    right_eye_sphere = fields.CharField(max_length=16, default="0")
    right_eye_cylinder = fields.CharField(max_length=16, default="0")
    right_eye_axis = fields.CharField(max_length=16, default="0")
    left_eye_sphere = fields.CharField(max_length=16, default="0")
    left_eye_cylinder = fields.CharField(max_length=16, default="0")
    left_eye_axis = fields.CharField(max_length=16, default="0")
    near_add = fields.CharField(max_length=16, default="0")

    total = fields.DecimalField(max_digits=12, decimal_places=2)
    received = fields.DecimalField(max_digits=12, decimal_places=2, default=0)
    remaining = fields.DecimalField(max_digits=12, decimal_places=2, default=0)

    # Free-text inventory item names, resolved by exact match within the company
    frame = fields.CharField(max_length=255, default="")
    lens = fields.CharField(max_length=255, default="")

    entry_date = fields.DateField(null=True)
    delivery_date = fields.DateField(null=True)
    status = fields.CharField(max_length=32, default="pending")
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "sales"
        indexes = [
            ("company_id",),
            ("company_id", "created_at"),
        ]
