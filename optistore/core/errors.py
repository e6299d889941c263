"""
Domain errors raised by the service layer.

Each error carries the HTTP status it maps to, so routers can let them
propagate and the registered exception handler renders the response.
"""


class DomainError(Exception):
    status_code = 400
    code = "domain_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """Entity absent or not owned by the calling tenant."""
    status_code = 404
    code = "not_found"


class ConflictError(DomainError):
    """Duplicate name or an entity still referenced elsewhere."""
    status_code = 409
    code = "conflict"


class InsufficientStockError(DomainError):
    status_code = 400
    code = "insufficient_stock"


class InventoryDeductionError(DomainError):
    """A sale could not take its frame/lens out of stock."""
    status_code = 400
    code = "inventory_deduction_failed"

    def __init__(self, reason: str):
        super().__init__(f"Failed to deduct inventory: {reason}")
        self.reason = reason


class InvalidRequestError(DomainError):
    """Input that passes schema checks but is inconsistent with stored state."""
    status_code = 422
    code = "validation_error"
