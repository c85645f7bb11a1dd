"""Structural validation of checkout input"""

import re
from decimal import Decimal
from typing import Any

from ..core.errors import ValidationError
from ..models.checkout import OrderInput, OrderLineIn

UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# +213555123456 or 0555123456
ALGERIAN_PHONE_PATTERNS = (
    re.compile(r"^\+213\d{9}$"),
    re.compile(r"^0\d{9}$"),
)


def is_valid_algerian_phone(phone: str) -> bool:
    compact = re.sub(r"[\s.-]", "", phone or "")
    return any(p.fullmatch(compact) for p in ALGERIAN_PHONE_PATTERNS)


def shipping_region_code(order_input: OrderInput) -> str:
    """
    Wilaya code used for shipping.

    Falls back to the first two digits of the postal code, which is the
    wilaya number in Algerian postal codes.
    """
    address = order_input.shipping_address
    code = (address.region_code or "").strip()
    if code:
        return code
    return (address.postal_code or "").strip()[:2]


def validate_order_input(order_input: OrderInput) -> list[OrderLineIn]:
    """
    Check the shape of an order and return its lines with duplicate
    products combined, in first-seen order.

    Raises:
        ValidationError: one entry per offending field
    """
    errors: list[dict[str, Any]] = []

    def fail(field: str, message: str) -> None:
        errors.append({"field": field, "message": message})

    if not order_input.items:
        fail("items", "At least one item is required")

    for i, line in enumerate(order_input.items):
        if not UUID_PATTERN.fullmatch(line.product_id or ""):
            fail(f"items[{i}].product_id", "Product id must be a UUID")
        if isinstance(line.quantity, bool) or not isinstance(line.quantity, int) or line.quantity < 1:
            fail(f"items[{i}].quantity", "Quantity must be an integer of at least 1")
        if line.unit_price is not None and line.unit_price < 0:
            fail(f"items[{i}].unit_price", "Unit price must not be negative")

    address = order_input.shipping_address
    if not address.street.strip():
        fail("shipping_address.street", "Street is required")
    if not address.city.strip():
        fail("shipping_address.city", "City is required")
    if not (address.region_code or "").strip() and not (address.postal_code or "").strip():
        fail("shipping_address.region_code", "Wilaya or postal code is required")
    if not address.country.strip():
        fail("shipping_address.country", "Country is required")

    if order_input.is_guest:
        info = order_input.customer_info
        if info is None:
            fail("customer_info", "Contact details are required for guest orders")
        else:
            if not info.first_name.strip():
                fail("customer_info.first_name", "First name is required")
            if not info.last_name.strip():
                fail("customer_info.last_name", "Last name is required")
            if not EMAIL_PATTERN.fullmatch(info.email.strip()):
                fail("customer_info.email", "A valid email is required")
            if not is_valid_algerian_phone(info.phone):
                fail("customer_info.phone", "Phone must be +213XXXXXXXXX or 0XXXXXXXXX")
    elif order_input.customer_info is not None and order_input.customer_info.phone:
        if not is_valid_algerian_phone(order_input.customer_info.phone):
            fail("customer_info.phone", "Phone must be +213XXXXXXXXX or 0XXXXXXXXX")

    for name in ("declared_subtotal", "declared_total"):
        value = getattr(order_input, name)
        if value is not None and value < Decimal("0"):
            fail(name, "Declared amounts must not be negative")

    if errors:
        raise ValidationError(errors)

    combined: dict[str, OrderLineIn] = {}
    for line in order_input.items:
        seen = combined.get(line.product_id)
        if seen is None:
            combined[line.product_id] = line.model_copy()
        else:
            seen.quantity += line.quantity
    return list(combined.values())
