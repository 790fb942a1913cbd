from inventory_api.routers.health import router as health_router
from inventory_api.routers.products import router as products_router

__all__ = ["health_router", "products_router"]
