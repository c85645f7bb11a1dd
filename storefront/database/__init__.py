# Database modules

from .engine import Database, Transaction
from .regions import RegionDatabase
from .products import ProductDatabase
from .carts import CartDatabase
from .orders import OrderDatabase
from .seed import DEMO_PRODUCTS, WILAYAS, wilaya_regions

__all__ = [
    "Database",
    "Transaction",
    "RegionDatabase",
    "ProductDatabase",
    "CartDatabase",
    "OrderDatabase",
    "DEMO_PRODUCTS",
    "WILAYAS",
    "wilaya_regions",
]
