"""Tests for structural checkout validation."""

from decimal import Decimal

import pytest

from storefront.core.errors import ValidationError
from storefront.models.checkout import CustomerInfo, OrderLineIn, ShippingAddress
from storefront.services.validation import (
    is_valid_algerian_phone,
    shipping_region_code,
    validate_order_input,
)

from .conftest import BOILER_ID, RADIATOR_ID


def fields_of(exc_info):
    return {e["field"] for e in exc_info.value.errors}


class TestPhoneNumbers:
    @pytest.mark.parametrize("phone", ["+213555123456", "0555123456", "0555 12 34 56", "0555-12-34-56"])
    def test_accepts_algerian_formats(self, phone):
        assert is_valid_algerian_phone(phone)

    @pytest.mark.parametrize("phone", ["", "555123456", "+33612345678", "05551234567", "+2135551234"])
    def test_rejects_other_formats(self, phone):
        assert not is_valid_algerian_phone(phone)


class TestValidateOrderInput:
    def test_empty_cart_rejected(self, order_input):
        with pytest.raises(ValidationError) as exc_info:
            validate_order_input(order_input())
        assert "items" in fields_of(exc_info)

    def test_collects_one_error_per_field(self, order_input):
        bad = order_input(
            items=[
                OrderLineIn(product_id="not-a-uuid", quantity=0),
                OrderLineIn(product_id=BOILER_ID, quantity=1, unit_price=Decimal("-1")),
            ],
            shipping_address=ShippingAddress(street=" ", city="", region_code=""),
        )
        with pytest.raises(ValidationError) as exc_info:
            validate_order_input(bad)

        assert fields_of(exc_info) == {
            "items[0].product_id",
            "items[0].quantity",
            "items[1].unit_price",
            "shipping_address.street",
            "shipping_address.city",
            "shipping_address.region_code",
        }

    def test_guest_needs_contact_details(self, order_input):
        with pytest.raises(ValidationError) as exc_info:
            validate_order_input(order_input((BOILER_ID, 1), customer_id=None))
        assert fields_of(exc_info) == {"customer_info"}

    def test_guest_contact_fields_checked(self, order_input):
        info = CustomerInfo(first_name="", last_name="Benali", email="nope", phone="12345")
        with pytest.raises(ValidationError) as exc_info:
            validate_order_input(order_input((BOILER_ID, 1), customer_id=None, customer_info=info))
        assert fields_of(exc_info) == {
            "customer_info.first_name",
            "customer_info.email",
            "customer_info.phone",
        }

    def test_duplicate_lines_combined_in_first_seen_order(self, order_input):
        lines = validate_order_input(
            order_input((RADIATOR_ID, 1), (BOILER_ID, 2), (RADIATOR_ID, 3))
        )
        assert [(line.product_id, line.quantity) for line in lines] == [
            (RADIATOR_ID, 4),
            (BOILER_ID, 2),
        ]

    def test_postal_code_stands_in_for_region(self, order_input):
        address = ShippingAddress(street="1 rue", city="Oran", postal_code="31000")
        order = order_input((BOILER_ID, 1), shipping_address=address)
        validate_order_input(order)
        assert shipping_region_code(order) == "31"
