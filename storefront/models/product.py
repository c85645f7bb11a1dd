"""Product models for the heating catalog"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ProductCategory(str, Enum):
    BOILER = "boiler"
    RADIATOR = "radiator"
    ACCESSORY = "accessory"


class Product(BaseModel):
    """Product in the catalog"""
    id: str
    name: str
    sku: str
    category: ProductCategory
    price: Decimal = Field(ge=0)
    sale_price: Optional[Decimal] = Field(default=None, ge=0)
    currency: str = "DZD"
    stock_quantity: int = Field(ge=0, default=0)
    is_active: bool = True
    image_ref: Optional[str] = None

    @property
    def unit_price(self) -> Decimal:
        """Price a customer pays right now"""
        return self.sale_price if self.sale_price is not None else self.price


class Availability(BaseModel):
    """Result of an inventory check"""
    product_id: str
    requested_quantity: int
    available: bool
    current_stock: int


class MovementKind(str, Enum):
    SALE = "SALE"
    RETURN = "RETURN"


class InventoryMovement(BaseModel):
    """One stock change, written in the same transaction as the change"""
    product_id: str
    kind: MovementKind
    quantity: int
    old_quantity: int
    new_quantity: int
    reference: str
    reason: str
