"""Checkout and order models"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    SCHEDULED = "SCHEDULED"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


TERMINAL_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})

ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset(
        {OrderStatus.SCHEDULED, OrderStatus.CONFIRMED, OrderStatus.CANCELLED}
    ),
    OrderStatus.SCHEDULED: frozenset(
        {OrderStatus.CONFIRMED, OrderStatus.IN_PROGRESS, OrderStatus.CANCELLED}
    ),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.IN_PROGRESS, OrderStatus.CANCELLED}),
    OrderStatus.IN_PROGRESS: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


class ShippingAddress(BaseModel):
    """Shipping address for order"""
    street: str = ""
    city: str = ""
    region_code: str = ""
    postal_code: Optional[str] = None
    country: str = "DZ"


class CustomerInfo(BaseModel):
    """Contact details, required for guest checkout"""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""


class OrderLineIn(BaseModel):
    """Line of a checkout request. The unit price is advisory only."""
    product_id: str
    quantity: int
    unit_price: Optional[Decimal] = None


class OrderInput(BaseModel):
    """Everything the order assembler needs to place one order"""
    items: list[OrderLineIn]
    shipping_address: ShippingAddress
    payment_method: str = "CASH_ON_DELIVERY"
    customer_id: Optional[str] = None
    customer_info: Optional[CustomerInfo] = None
    declared_subtotal: Optional[Decimal] = None
    declared_total: Optional[Decimal] = None
    notes: Optional[str] = None

    @property
    def is_guest(self) -> bool:
        return self.customer_id is None


class CheckoutRequest(BaseModel):
    """Request body for the authenticated checkout endpoint"""
    items: list[OrderLineIn]
    shipping_address: ShippingAddress
    payment_method: str = "CASH_ON_DELIVERY"
    subtotal: Optional[Decimal] = None
    total_amount: Optional[Decimal] = None
    notes: Optional[str] = None


class GuestCheckoutRequest(CheckoutRequest):
    """Request body for guest checkout"""
    customer_info: CustomerInfo


class OrderItem(BaseModel):
    """Item in an order, priced at order time"""
    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class Order(BaseModel):
    """Placed order"""
    id: str
    order_number: str
    customer_id: Optional[str] = None
    customer_info: Optional[CustomerInfo] = None
    status: OrderStatus = OrderStatus.PENDING
    items: list[OrderItem]
    shipping_address: ShippingAddress
    subtotal: Decimal
    shipping_amount: Decimal
    total_amount: Decimal
    currency: str = "DZD"
    payment_method: str
    payment_reference: Optional[str] = None
    notes: Optional[str] = None
    estimated_delivery: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class OrderReceipt(BaseModel):
    """Returned to the caller once an order is committed"""
    order_id: str
    order_number: str
    status: OrderStatus
    subtotal: Decimal
    shipping_amount: Decimal
    total_amount: Decimal
    currency: str
    payment_method: str
    payment_reference: Optional[str] = None
    estimated_delivery: Optional[datetime] = None
    cart_cleared: bool = False


class CheckoutResponse(BaseModel):
    """Response from checkout"""
    success: bool = True
    order: OrderReceipt
    message: Optional[str] = None


class CancelOrderRequest(BaseModel):
    reason: Optional[str] = None


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatus
    notes: Optional[str] = None


class OrderListResponse(BaseModel):
    orders: list[Order]
    count: int
    limit: int = Field(default=50)
    offset: int = Field(default=0)
