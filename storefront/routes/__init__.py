# API Routes

from .regions import router as regions_router
from .products import router as products_router
from .cart import router as cart_router
from .payments import router as payments_router
from .orders import router as orders_router
from .admin import router as admin_router

__all__ = [
    "regions_router",
    "products_router",
    "cart_router",
    "payments_router",
    "orders_router",
    "admin_router",
]
