"""Wires the persistence service, repositories and domain services together"""

import logging
from dataclasses import dataclass
from typing import Optional

from .core.config import Settings
from .database import (
    CartDatabase,
    DEMO_PRODUCTS,
    Database,
    OrderDatabase,
    ProductDatabase,
    RegionDatabase,
    wilaya_regions,
)
from .services import (
    CartService,
    ClientStorage,
    CustomerCartStore,
    GuestCartStore,
    InMemoryClientStorage,
    InventoryGate,
    OrderAssembler,
    OrderPolicy,
    PaymentGate,
    RegionCatalog,
    ShippingResolver,
)

logger = logging.getLogger(__name__)


@dataclass
class Services:
    settings: Settings
    db: Database
    products: ProductDatabase
    orders: OrderDatabase
    regions: RegionCatalog
    inventory: InventoryGate
    shipping: ShippingResolver
    payments: PaymentGate
    carts: CartService
    assembler: OrderAssembler


def build_services(
    settings: Settings,
    db: Optional[Database] = None,
    client_storage: Optional[ClientStorage] = None,
) -> Services:
    """Build one isolated set of services over ``db`` (a fresh store by default)"""
    db = db or Database()

    region_db = RegionDatabase(db)
    product_db = ProductDatabase(db)
    order_db = OrderDatabase(db)
    cart_db = CartDatabase(db)

    seeded = region_db.seed(wilaya_regions())
    logger.info(f"Seeded {seeded} wilayas")
    if settings.seed_demo_catalog:
        count = product_db.seed(DEMO_PRODUCTS)
        logger.info(f"Seeded {count} demo products")

    regions = RegionCatalog(region_db)
    inventory = InventoryGate(product_db)
    shipping = ShippingResolver(regions, settings.default_shipping_cost)
    payments = PaymentGate()
    carts = CartService(
        guest=GuestCartStore(
            client_storage or InMemoryClientStorage(),
            max_line_quantity=settings.max_line_quantity,
            currency=settings.currency,
        ),
        customer=CustomerCartStore(
            cart_db,
            max_line_quantity=settings.max_line_quantity,
            currency=settings.currency,
        ),
        inventory=inventory,
    )
    assembler = OrderAssembler(
        db=db,
        products=product_db,
        orders=order_db,
        inventory=inventory,
        shipping=shipping,
        payments=payments,
        carts=carts,
        policy=OrderPolicy(
            currency=settings.currency,
            free_shipping_threshold=settings.free_shipping_threshold,
            order_number_prefix=settings.order_number_prefix,
        ),
    )

    return Services(
        settings=settings,
        db=db,
        products=product_db,
        orders=order_db,
        regions=regions,
        inventory=inventory,
        shipping=shipping,
        payments=payments,
        carts=carts,
        assembler=assembler,
    )
