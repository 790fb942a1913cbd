from fastapi import status

from inventory_api.core.constants import INTERNAL_ERROR, PRODUCT_NOT_FOUND


class InventoryError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = INTERNAL_ERROR

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(InventoryError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation error"


class InvalidQuantityError(InventoryError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Quantity must be a positive number"


class InsufficientStockError(InventoryError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, available: int, requested: int):
        self.available = available
        self.requested = requested
        super().__init__(
            "Insufficient stock. Available: {}, Requested: {}".format(available, requested)
        )


class ProductNotFoundError(InventoryError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = PRODUCT_NOT_FOUND


class StoreError(InventoryError):
    """Persistence failure; the message is for logs, never for callers."""


__all__ = [
    "InsufficientStockError",
    "InvalidQuantityError",
    "InventoryError",
    "ProductNotFoundError",
    "StoreError",
    "ValidationError",
]
