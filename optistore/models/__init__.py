# optistore/models/__init__.py
from .company import Company, Customer
from .inventory import Category, CategoryType, InventoryItem
from .sale import Sale
from .audit import Audit, AuditItem
from .expense import Employee, Salary, SalaryStatus, Bill, BillStatus

# Export all models
__all__ = [
    "Company",
    "Customer",
    "Category",
    "CategoryType",
    "InventoryItem",
    "Sale",
    "Audit",
    "AuditItem",
    "Employee",
    "Salary",
    "SalaryStatus",
    "Bill",
    "BillStatus",
]
