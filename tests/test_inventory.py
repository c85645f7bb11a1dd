"""Tests for the inventory gate."""

import pytest

from storefront.core.errors import ProductNotFound, ValidationError
from storefront.models.cart import CartLineIn

from .conftest import BOILER_ID, RADIATOR_ID, RETIRED_ID, UNKNOWN_ID

pytestmark = pytest.mark.anyio


class TestCheckAvailability:
    async def test_exact_stock_is_available(self, services):
        availability = await services.inventory.check_availability(BOILER_ID, 4)
        assert availability.available is True
        assert availability.current_stock == 4

    async def test_one_more_than_stock_is_not_available(self, services):
        availability = await services.inventory.check_availability(BOILER_ID, 5)
        assert availability.available is False
        assert availability.current_stock == 4

    async def test_unknown_product(self, services):
        with pytest.raises(ProductNotFound):
            await services.inventory.check_availability(UNKNOWN_ID, 1)

    async def test_inactive_product(self, services):
        with pytest.raises(ProductNotFound):
            await services.inventory.check_availability(RETIRED_ID, 1)

    async def test_zero_quantity_rejected(self, services):
        with pytest.raises(ValidationError):
            await services.inventory.check_availability(BOILER_ID, 0)

    async def test_check_does_not_touch_stock(self, services):
        await services.inventory.check_availability(BOILER_ID, 2)
        product = await services.products.get_product(BOILER_ID)
        assert product.stock_quantity == 4


class TestValidateItems:
    async def test_valid_cart(self, services):
        result = await services.inventory.validate_items(
            [CartLineIn(product_id=BOILER_ID, quantity=2), CartLineIn(product_id=RADIATOR_ID, quantity=1)]
        )
        assert result.valid is True
        assert result.errors == []

    async def test_reports_every_problem(self, services):
        result = await services.inventory.validate_items(
            [
                CartLineIn(product_id=UNKNOWN_ID, quantity=1),
                CartLineIn(product_id=RETIRED_ID, quantity=1),
                CartLineIn(product_id=BOILER_ID, quantity=9),
            ]
        )
        assert result.valid is False
        messages = {e.product_id: e.message for e in result.errors}
        assert messages[UNKNOWN_ID] == "Product not found"
        assert messages[RETIRED_ID] == "Product is no longer available"
        assert messages[BOILER_ID] == "Insufficient stock. Available: 4"

    async def test_repeated_product_summed_against_stock(self, services):
        result = await services.inventory.validate_items(
            [CartLineIn(product_id=BOILER_ID, quantity=3), CartLineIn(product_id=BOILER_ID, quantity=3)]
        )
        assert result.valid is False
        assert len(result.errors) == 1
        assert result.errors[0].product_id == BOILER_ID
        assert result.errors[0].message == "Insufficient stock. Available: 4"
        assert result.errors[0].available_stock == 4

    async def test_repeated_product_within_stock(self, services):
        result = await services.inventory.validate_items(
            [CartLineIn(product_id=BOILER_ID, quantity=2), CartLineIn(product_id=BOILER_ID, quantity=2)]
        )
        assert result.valid is True
