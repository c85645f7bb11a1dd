"""Order storage"""

from typing import Optional

from ..models.checkout import Order, OrderStatus
from .engine import Database, Transaction


class OrderDatabase:
    """Orders are never deleted; cancellation is a status."""

    def __init__(self, db: Database):
        self.db = db

    def insert(self, tx: Transaction, order: Order) -> Order:
        """Create an order inside a transaction"""
        if order.id in self.db.orders or order.order_number in self.db.order_numbers:
            raise ValueError(f"Duplicate order {order.order_number}")

        stored = order.model_copy(deep=True)
        self.db.orders[order.id] = stored
        self.db.order_numbers.add(order.order_number)

        def undo() -> None:
            self.db.orders.pop(order.id, None)
            self.db.order_numbers.discard(order.order_number)

        tx.on_rollback(undo)
        return stored.model_copy(deep=True)

    def update(self, tx: Transaction, order: Order) -> Order:
        """Overwrite an existing order inside a transaction"""
        previous = self.db.orders[order.id]
        self.db.orders[order.id] = order.model_copy(deep=True)

        def undo() -> None:
            self.db.orders[order.id] = previous

        tx.on_rollback(undo)
        return order

    def find_in_transaction(self, order_id: str) -> Optional[Order]:
        order = self.db.orders.get(order_id)
        return order.model_copy(deep=True) if order else None

    async def get_order(self, order_id: str) -> Optional[Order]:
        """Get an order by ID"""
        await self.db.io()
        order = self.db.orders.get(order_id)
        return order.model_copy(deep=True) if order else None

    def number_taken(self, order_number: str) -> bool:
        return order_number in self.db.order_numbers

    async def list_orders(
        self,
        customer_id: Optional[str] = None,
        status: Optional[OrderStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Order]:
        """List orders, newest first"""
        await self.db.io()
        orders = list(self.db.orders.values())
        if customer_id is not None:
            orders = [o for o in orders if o.customer_id == customer_id]
        if status is not None:
            orders = [o for o in orders if o.status == status]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return [o.model_copy(deep=True) for o in orders[offset : offset + limit]]
