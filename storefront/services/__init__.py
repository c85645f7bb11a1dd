# Domain services

from .region_catalog import RegionCatalog
from .inventory import InventoryGate, StockCheck
from .shipping import ShippingResolver, apply_free_shipping
from .payment_gate import PaymentGate, CASH_ON_DELIVERY
from .cart_store import (
    CartService,
    CartStore,
    ClientStorage,
    CustomerCartStore,
    GuestCartStore,
    InMemoryClientStorage,
)
from .order_assembler import OrderAssembler, OrderPolicy, estimate_delivery

__all__ = [
    "RegionCatalog",
    "InventoryGate",
    "StockCheck",
    "ShippingResolver",
    "apply_free_shipping",
    "PaymentGate",
    "CASH_ON_DELIVERY",
    "CartService",
    "CartStore",
    "ClientStorage",
    "CustomerCartStore",
    "GuestCartStore",
    "InMemoryClientStorage",
    "OrderAssembler",
    "OrderPolicy",
    "estimate_delivery",
]
