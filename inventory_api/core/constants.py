NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
# Largest value a 32-bit INTEGER column holds.
MAX_COUNT = 2 ** 31 - 1

FIELD_LABELS = {
    "name": "Product name",
    "description": "Product description",
    "stock_quantity": "Stock quantity",
    "low_stock_threshold": "Low stock threshold",
    "quantity": "Quantity",
}

PRODUCT_NOT_FOUND = "Product not found"
ROUTE_NOT_FOUND = "Route not found"
INTERNAL_ERROR = "Internal server error"
