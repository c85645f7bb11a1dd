"""In-memory persistence service for the storefront.

Stands in for the relational store: tables are dicts, every call is an
await point, and ``transaction()`` gives all-or-nothing commits. Writers are
serialized on a single lock, so a conditional update inside a transaction
cannot interleave with another transaction's update of the same row.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from ..core.errors import PersistenceError
from ..models.cart import CartItem
from ..models.checkout import Order
from ..models.product import InventoryMovement, Product
from ..models.region import Region

logger = logging.getLogger(__name__)


class Transaction:
    """Undo journal for one unit of work"""

    def __init__(self) -> None:
        self._undo: list[Callable[[], None]] = []

    def on_rollback(self, action: Callable[[], None]) -> None:
        self._undo.append(action)

    def rollback(self) -> None:
        for action in reversed(self._undo):
            action()
        self._undo.clear()


class Database:
    """In-memory tables shared by the repositories"""

    def __init__(self) -> None:
        self.regions: dict[str, Region] = {}
        self.products: dict[str, Product] = {}
        self.carts: dict[str, list[CartItem]] = {}
        self.cart_merges: dict[str, str] = {}
        self.merge_requests: set[tuple[str, str]] = set()
        self.orders: dict[str, Order] = {}
        self.order_numbers: set[str] = set()
        self.inventory_log: list[InventoryMovement] = []
        self.available = True
        self._lock = asyncio.Lock()

    def ensure_available(self) -> None:
        if not self.available:
            raise PersistenceError("Persistence service unavailable")

    async def io(self) -> None:
        """Suspension point standing in for a round-trip to the store"""
        self.ensure_available()
        await asyncio.sleep(0)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Transaction]:
        """
        Run a block as one atomic unit.

        Every change registers its inverse on the transaction; if the block
        raises, the inverses run in reverse order before the error propagates.
        """
        await self.io()
        async with self._lock:
            tx = Transaction()
            try:
                yield tx
            except BaseException:
                tx.rollback()
                logger.warning("Transaction rolled back")
                raise
            # The store can drop between the last write and the commit.
            if not self.available:
                tx.rollback()
                raise PersistenceError("Persistence service unavailable during commit")
