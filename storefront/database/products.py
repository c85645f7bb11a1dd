"""Product and stock storage"""

import logging
from typing import Iterable, Optional

from ..models.product import InventoryMovement, MovementKind, Product
from .engine import Database, Transaction

logger = logging.getLogger(__name__)


class ProductDatabase:
    """Product table plus the inventory movement log"""

    def __init__(self, db: Database):
        self.db = db

    def seed(self, products: Iterable[Product]) -> int:
        count = 0
        for product in products:
            self.db.products[product.id] = product.model_copy()
            count += 1
        return count

    async def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID"""
        await self.db.io()
        product = self.db.products.get(product_id)
        return product.model_copy() if product else None

    def peek(self, product_id: str) -> Optional[Product]:
        """Current row without an await point, for use inside a transaction"""
        return self.db.products.get(product_id)

    def decrement_stock(
        self,
        tx: Transaction,
        product_id: str,
        quantity: int,
        reference: str,
        reason: str,
    ) -> bool:
        """
        Conditional decrement: ``stock -= quantity where stock >= quantity``.

        Must run inside a transaction. Returns False, leaving the row alone,
        when the product is missing or the stock is too low.
        """
        product = self.db.products.get(product_id)
        if product is None or not product.is_active or product.stock_quantity < quantity:
            return False

        new_quantity = product.stock_quantity - quantity
        self._write_stock(tx, product, new_quantity)
        self._log(
            tx,
            InventoryMovement(
                product_id=product_id,
                kind=MovementKind.SALE,
                quantity=-quantity,
                old_quantity=product.stock_quantity,
                new_quantity=new_quantity,
                reference=reference,
                reason=reason,
            ),
        )
        return True

    def increment_stock(
        self,
        tx: Transaction,
        product_id: str,
        quantity: int,
        reference: str,
        reason: str,
    ) -> bool:
        """Put units back, e.g. when an order is cancelled"""
        product = self.db.products.get(product_id)
        if product is None:
            logger.warning(f"Cannot restock missing product {product_id}")
            return False

        new_quantity = product.stock_quantity + quantity
        self._write_stock(tx, product, new_quantity)
        self._log(
            tx,
            InventoryMovement(
                product_id=product_id,
                kind=MovementKind.RETURN,
                quantity=quantity,
                old_quantity=product.stock_quantity,
                new_quantity=new_quantity,
                reference=reference,
                reason=reason,
            ),
        )
        return True

    async def movements(self, product_id: Optional[str] = None) -> list[InventoryMovement]:
        """Inventory log, oldest first"""
        await self.db.io()
        return [
            m for m in self.db.inventory_log
            if product_id is None or m.product_id == product_id
        ]

    def _write_stock(self, tx: Transaction, product: Product, new_quantity: int) -> None:
        self.db.products[product.id] = product.model_copy(
            update={"stock_quantity": new_quantity}
        )

        def undo() -> None:
            self.db.products[product.id] = product

        tx.on_rollback(undo)

    def _log(self, tx: Transaction, movement: InventoryMovement) -> None:
        log = self.db.inventory_log
        log.append(movement)

        def undo() -> None:
            for index in range(len(log) - 1, -1, -1):
                if log[index] is movement:
                    del log[index]
                    break

        tx.on_rollback(undo)
