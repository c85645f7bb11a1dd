"""Pytest fixtures for storefront tests."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.bootstrap import build_services
from storefront.core.config import Settings
from storefront.main import create_app
from storefront.models.checkout import CustomerInfo, OrderInput, OrderLineIn, ShippingAddress
from storefront.models.product import Product, ProductCategory

BOILER_ID = "11111111-1111-4111-8111-111111111111"
RADIATOR_ID = "22222222-2222-4222-8222-222222222222"
THERMOSTAT_ID = "33333333-3333-4333-8333-333333333333"
VALVE_ID = "44444444-4444-4444-8444-444444444444"
RETIRED_ID = "55555555-5555-4555-8555-555555555555"
UNKNOWN_ID = "99999999-9999-4999-8999-999999999999"

CUSTOMER_ID = "cust-001"


def make_products() -> list[Product]:
    return [
        Product(
            id=BOILER_ID,
            name="Chaudière murale 24 kW",
            sku="BOIL-24",
            category=ProductCategory.BOILER,
            price=Decimal("1200"),
            stock_quantity=4,
        ),
        Product(
            id=RADIATOR_ID,
            name="Radiateur aluminium",
            sku="RAD-10",
            category=ProductCategory.RADIATOR,
            price=Decimal("1000"),
            stock_quantity=50,
        ),
        Product(
            id=THERMOSTAT_ID,
            name="Thermostat programmable",
            sku="THERMO",
            category=ProductCategory.ACCESSORY,
            price=Decimal("800"),
            sale_price=Decimal("650"),
            stock_quantity=10,
        ),
        Product(
            id=VALVE_ID,
            name="Vanne thermostatique",
            sku="VALVE",
            category=ProductCategory.ACCESSORY,
            price=Decimal("25000"),
            stock_quantity=3,
        ),
        Product(
            id=RETIRED_ID,
            name="Chaudière fioul",
            sku="BOIL-OIL",
            category=ProductCategory.BOILER,
            price=Decimal("90000"),
            stock_quantity=5,
            is_active=False,
        ),
    ]


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, seed_demo_catalog=False)


@pytest.fixture
def services(settings):
    """Fresh services over an empty store seeded with the test catalog."""
    services = build_services(settings)
    services.products.seed(make_products())
    return services


@pytest.fixture
def client(settings, services):
    """Test client whose app runs on the ``services`` fixture."""
    app = create_app(settings)
    app.state.services = services
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def customer_headers():
    return {"X-Customer-Id": CUSTOMER_ID}


@pytest.fixture
def admin_headers():
    return {"X-Customer-Id": "admin-001", "X-Customer-Role": "admin"}


@pytest.fixture
def address():
    return ShippingAddress(street="12 rue Didouche Mourad", city="Alger", region_code="16")


@pytest.fixture
def guest_info():
    return CustomerInfo(
        first_name="Amina",
        last_name="Benali",
        email="amina@example.dz",
        phone="0555123456",
    )


@pytest.fixture
def order_input(address):
    """Build a customer order for ``(product_id, quantity)`` pairs."""

    def build(*lines, **overrides) -> OrderInput:
        fields = {
            "items": [OrderLineIn(product_id=pid, quantity=qty) for pid, qty in lines],
            "shipping_address": address,
            "customer_id": CUSTOMER_ID,
        }
        fields.update(overrides)
        return OrderInput(**fields)

    return build
