"""Cart models"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class OwnerKind(str, Enum):
    GUEST = "guest"
    CUSTOMER = "customer"


class CartOwner(BaseModel):
    """Who a cart belongs to: an anonymous session or a customer account"""
    kind: OwnerKind
    id: str = Field(min_length=1)

    model_config = {"frozen": True}

    @classmethod
    def guest(cls, session_id: str) -> "CartOwner":
        return cls(kind=OwnerKind.GUEST, id=session_id)

    @classmethod
    def customer(cls, customer_id: str) -> "CartOwner":
        return cls(kind=OwnerKind.CUSTOMER, id=customer_id)

    @property
    def key(self) -> str:
        return f"{self.kind.value}:{self.id}"


class CartItem(BaseModel):
    """Item in a shopping cart"""
    product_id: str
    quantity: int = Field(ge=1)
    unit_price: Decimal = Field(ge=0)
    name: str = ""
    image_ref: Optional[str] = None

    @property
    def total_price(self) -> Decimal:
        return self.unit_price * self.quantity


class Cart(BaseModel):
    """Shopping cart. The total is derived from the lines on every read."""
    owner: CartOwner
    items: list[CartItem] = []
    currency: str = "DZD"

    @property
    def total(self) -> Decimal:
        return sum((item.total_price for item in self.items), Decimal("0"))

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)


class CartLineIn(BaseModel):
    """Cart line sent by a client (guest snapshot or sync payload)"""
    product_id: str
    quantity: int
    unit_price: Optional[Decimal] = None
    name: Optional[str] = None
    image_ref: Optional[str] = None


class AddToCartRequest(BaseModel):
    """Request to add item to cart"""
    product_id: str
    quantity: int = Field(default=1, gt=0)


class UpdateCartItemRequest(BaseModel):
    """Request to update cart item quantity. Zero or less removes the line."""
    quantity: int


class ReplaceCartRequest(BaseModel):
    """Request to replace the whole customer cart"""
    items: list[CartLineIn] = []


class MergeCartRequest(BaseModel):
    """Guest cart snapshot to fold into the customer cart on login"""
    items: list[CartLineIn] = []
    # Client-generated per login; a retried request carries the same id
    merge_id: Optional[str] = None


class ValidateCartRequest(BaseModel):
    """Prospective cart to check against current stock"""
    items: list[CartLineIn]


class CartItemOut(BaseModel):
    product_id: str
    name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    image_ref: Optional[str] = None


class CartResponse(BaseModel):
    """Cart API response"""
    items: list[CartItemOut]
    total: Decimal
    item_count: int
    currency: str = "DZD"
    message: Optional[str] = None

    @classmethod
    def from_cart(cls, cart: Cart, message: Optional[str] = None) -> "CartResponse":
        return cls(
            items=[
                CartItemOut(
                    product_id=item.product_id,
                    name=item.name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    total_price=item.total_price,
                    image_ref=item.image_ref,
                )
                for item in cart.items
            ],
            total=cart.total,
            item_count=cart.item_count,
            currency=cart.currency,
            message=message,
        )


class CartValidationIssue(BaseModel):
    product_id: str
    message: str
    available_stock: int


class CartValidationResult(BaseModel):
    """Outcome of checking a cart against live stock"""
    valid: bool
    errors: list[CartValidationIssue] = []
