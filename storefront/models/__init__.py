# Storefront Models

from .region import Region, RegionListResponse, ShippingQuote, ShippingCostResponse
from .product import (
    Product,
    ProductCategory,
    Availability,
    InventoryMovement,
    MovementKind,
)
from .cart import (
    Cart,
    CartItem,
    CartOwner,
    OwnerKind,
    CartLineIn,
    AddToCartRequest,
    UpdateCartItemRequest,
    ReplaceCartRequest,
    MergeCartRequest,
    ValidateCartRequest,
    CartResponse,
    CartValidationIssue,
    CartValidationResult,
)
from .checkout import (
    Order,
    OrderItem,
    OrderStatus,
    OrderInput,
    OrderLineIn,
    OrderReceipt,
    CheckoutRequest,
    GuestCheckoutRequest,
    CheckoutResponse,
    CancelOrderRequest,
    UpdateOrderStatusRequest,
    OrderListResponse,
    ShippingAddress,
    CustomerInfo,
)
from .payment import (
    PaymentMethodInfo,
    PaymentAuthorization,
    PaymentMethodsResponse,
    TransactionStatusResponse,
)

__all__ = [
    "Region",
    "RegionListResponse",
    "ShippingQuote",
    "ShippingCostResponse",
    "Product",
    "ProductCategory",
    "Availability",
    "InventoryMovement",
    "MovementKind",
    "Cart",
    "CartItem",
    "CartOwner",
    "OwnerKind",
    "CartLineIn",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "ReplaceCartRequest",
    "MergeCartRequest",
    "ValidateCartRequest",
    "CartResponse",
    "CartValidationIssue",
    "CartValidationResult",
    "Order",
    "OrderItem",
    "OrderStatus",
    "OrderInput",
    "OrderLineIn",
    "OrderReceipt",
    "CheckoutRequest",
    "GuestCheckoutRequest",
    "CheckoutResponse",
    "CancelOrderRequest",
    "UpdateOrderStatusRequest",
    "OrderListResponse",
    "ShippingAddress",
    "CustomerInfo",
    "PaymentMethodInfo",
    "PaymentAuthorization",
    "PaymentMethodsResponse",
    "TransactionStatusResponse",
]
