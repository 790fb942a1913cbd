from inventory_api.services.product_service import (
    add_stock,
    create_product,
    delete_product,
    get_product,
    list_low_stock,
    list_products,
    remove_stock,
    update_product,
)

__all__ = [
    "add_stock",
    "create_product",
    "delete_product",
    "get_product",
    "list_low_stock",
    "list_products",
    "remove_stock",
    "update_product",
]
