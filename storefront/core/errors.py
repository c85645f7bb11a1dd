"""Error taxonomy for the storefront core.

Every error carries a stable machine-readable ``kind``, a human-readable
message and the HTTP status the web layer maps it to.
"""

from typing import Any, Optional


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    kind = "STOREFRONT_ERROR"
    status_code = 500

    def __init__(self, message: str, details: Optional[list[dict[str, Any]]] = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


# ---- client errors ---------------------------------------------------------


class ValidationError(StorefrontError):
    """Raised when input is malformed. ``details`` holds one entry per field."""

    kind = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, errors: list[dict[str, Any]], message: str = "Validation failed"):
        self.errors = errors
        super().__init__(message, details=errors)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])


class AuthenticationRequired(StorefrontError):
    kind = "AUTHENTICATION_REQUIRED"
    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class Forbidden(StorefrontError):
    kind = "FORBIDDEN"
    status_code = 403


# ---- business-rule rejections ----------------------------------------------


class PaymentMethodDisabled(StorefrontError):
    """Raised when the payment method is not in the allow-list."""

    kind = "PAYMENT_METHOD_DISABLED"
    status_code = 403

    def __init__(self, method: str, available: list[str]):
        self.method = method
        self.available = available
        super().__init__(
            f"Payment method disabled: {method}",
            details=[{"field": "payment_method", "available_methods": available}],
        )


class ProductUnavailable(StorefrontError):
    """Raised when an ordered product does not exist or is no longer sold."""

    kind = "PRODUCT_UNAVAILABLE"
    status_code = 409

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(
            f"Product {product_id} not found or inactive",
            details=[{"product_id": product_id}],
        )


class InsufficientStock(StorefrontError):
    kind = "INSUFFICIENT_STOCK"
    status_code = 409

    def __init__(self, product_id: str, product_name: str, available: int, requested: int):
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {product_name}. "
            f"Available: {available}, Requested: {requested}",
            details=[
                {
                    "product_id": product_id,
                    "available_stock": available,
                    "requested": requested,
                }
            ],
        )


class OrderNotCancellable(StorefrontError):
    kind = "ORDER_NOT_CANCELLABLE"
    status_code = 409

    def __init__(self, order_id: str, status: str):
        self.order_id = order_id
        super().__init__(f"Order {order_id} cannot be cancelled from status {status}")


class InvalidStatusTransition(StorefrontError):
    kind = "INVALID_STATUS_TRANSITION"
    status_code = 409

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move order from {current} to {target}")


# ---- not found -------------------------------------------------------------


class ProductNotFound(StorefrontError):
    kind = "PRODUCT_NOT_FOUND"
    status_code = 404

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class OrderNotFound(StorefrontError):
    kind = "ORDER_NOT_FOUND"
    status_code = 404

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order not found: {order_id}")


class RegionNotFound(StorefrontError):
    kind = "REGION_NOT_FOUND"
    status_code = 404

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Wilaya not found: {code}")


class CartItemNotFound(StorefrontError):
    kind = "CART_ITEM_NOT_FOUND"
    status_code = 404

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Cart item not found: {product_id}")


class PaymentNotFound(StorefrontError):
    kind = "PAYMENT_NOT_FOUND"
    status_code = 404

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction not found: {transaction_id}")


# ---- infrastructure --------------------------------------------------------


class PersistenceError(StorefrontError):
    """Raised when the persistence service is unavailable. Retryable."""

    kind = "PERSISTENCE_ERROR"
    status_code = 503
