"""Inventory gate: answers whether a quantity can be sold right now"""

from dataclasses import dataclass
from typing import Sequence

from ..core.errors import ProductNotFound, ValidationError
from ..database.products import ProductDatabase
from ..models.cart import CartLineIn, CartValidationIssue, CartValidationResult
from ..models.product import Availability, Product


@dataclass(frozen=True)
class StockCheck:
    product: Product
    availability: Availability


class InventoryGate:
    """Reads live stock counts. Never mutates them."""

    def __init__(self, products: ProductDatabase):
        self.products = products

    async def get_product(self, product_id: str) -> Product:
        """
        Get a sellable product.

        Raises:
            ProductNotFound: unknown or inactive product
        """
        product = await self.products.get_product(product_id)
        if product is None or not product.is_active:
            raise ProductNotFound(product_id)
        return product

    async def inspect(self, product_id: str, requested_quantity: int) -> StockCheck:
        """Availability together with the product row it was computed from"""
        if requested_quantity < 1:
            raise ValidationError.single("quantity", "Quantity must be at least 1")
        product = await self.get_product(product_id)
        return StockCheck(
            product=product,
            availability=Availability(
                product_id=product_id,
                requested_quantity=requested_quantity,
                available=requested_quantity <= product.stock_quantity,
                current_stock=product.stock_quantity,
            ),
        )

    async def check_availability(self, product_id: str, requested_quantity: int) -> Availability:
        """
        Check whether ``requested_quantity`` units are in stock.

        Insufficient stock is reported as ``available=False``, not raised.

        Raises:
            ProductNotFound: unknown or inactive product
        """
        check = await self.inspect(product_id, requested_quantity)
        return check.availability

    async def validate_items(self, items: Sequence[CartLineIn]) -> CartValidationResult:
        """
        Check every product of a prospective cart and report all problems.

        Lines for the same product are summed first, as order placement does.
        Unlike order placement this does not stop at the first failure, so the
        checkout page can flag each line.
        """
        errors: list[CartValidationIssue] = []
        requested: dict[str, int] = {}

        for item in items:
            if item.quantity < 1:
                errors.append(
                    CartValidationIssue(
                        product_id=item.product_id,
                        message="Quantity must be at least 1",
                        available_stock=0,
                    )
                )
                continue
            requested[item.product_id] = requested.get(item.product_id, 0) + item.quantity

        for product_id, quantity in requested.items():
            product = await self.products.get_product(product_id)
            if product is None:
                errors.append(
                    CartValidationIssue(
                        product_id=product_id,
                        message="Product not found",
                        available_stock=0,
                    )
                )
            elif not product.is_active:
                errors.append(
                    CartValidationIssue(
                        product_id=product_id,
                        message="Product is no longer available",
                        available_stock=0,
                    )
                )
            elif quantity > product.stock_quantity:
                errors.append(
                    CartValidationIssue(
                        product_id=product_id,
                        message=f"Insufficient stock. Available: {product.stock_quantity}",
                        available_stock=product.stock_quantity,
                    )
                )

        return CartValidationResult(valid=not errors, errors=errors)
