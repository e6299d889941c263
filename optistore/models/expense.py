from enum import Enum
from tortoise import fields, models
import uuid


class SalaryStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class BillStatus(str, Enum):
    OUTSTANDING = "outstanding"
    PAID = "paid"
    OVERDUE = "overdue"


class Employee(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    company = fields.ForeignKeyField("models.Company", related_name="employees")
    name = fields.CharField(max_length=255)
    position = fields.CharField(max_length=255, null=True)
    salary = fields.DecimalField(max_digits=12, decimal_places=2, default=0)
    is_active = fields.BooleanField(default=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "employees"


class Salary(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    company = fields.ForeignKeyField("models.Company", related_name="salaries")
    employee = fields.ForeignKeyField("models.Employee", related_name="salaries")
    amount = fields.DecimalField(max_digits=12, decimal_places=2)
    month = fields.IntField()
    year = fields.IntField()
    payment_date = fields.DateField(null=True)
    status = fields.CharEnumField(SalaryStatus, max_length=16, default=SalaryStatus.PENDING)
    notes = fields.TextField(null=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "salaries"
        unique_together = (("employee", "month", "year"),)
        indexes = [
            ("company_id", "created_at"),
        ]


class Bill(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    company = fields.ForeignKeyField("models.Company", related_name="bills")
    description = fields.CharField(max_length=255)
    amount = fields.DecimalField(max_digits=12, decimal_places=2)
    category = fields.CharField(max_length=64, null=True)
    due_date = fields.DateField()
    payment_date = fields.DateField(null=True)
    status = fields.CharEnumField(BillStatus, max_length=16, default=BillStatus.OUTSTANDING)
    notes = fields.TextField(null=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "bills"
        indexes = [
            ("company_id", "created_at"),
        ]
