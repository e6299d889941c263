from tortoise import fields, models
import uuid


class Company(models.Model):
    """A tenant. Every business row below is partitioned by company."""
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    name = fields.CharField(max_length=255)
    is_active = fields.BooleanField(default=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "companies"


class Customer(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    company = fields.ForeignKeyField("models.Company", related_name="customers")
    name = fields.CharField(max_length=255)
    phone = fields.CharField(max_length=32, null=True)
    email = fields.CharField(max_length=255, null=True)
    address = fields.TextField(null=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "customers"
        indexes = [
            ("company_id",),
        ]
