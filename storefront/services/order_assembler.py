"""
Order assembler

Turns a checkout submission into a committed order:

    validate -> check stock per item -> price from the catalog
    -> shipping -> total -> payment gate -> atomic commit -> clear cart

Client-declared prices and totals are never persisted; they are only
compared with the server figures to log drift.
"""

import logging
import random
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

from ..core.errors import (
    InsufficientStock,
    InvalidStatusTransition,
    OrderNotCancellable,
    OrderNotFound,
    PersistenceError,
    ProductNotFound,
    ProductUnavailable,
)
from ..database.engine import Database, Transaction
from ..database.orders import OrderDatabase
from ..database.products import ProductDatabase
from ..models.cart import CartOwner
from ..models.checkout import (
    TERMINAL_STATUSES,
    Order,
    OrderInput,
    OrderItem,
    OrderLineIn,
    OrderReceipt,
    OrderStatus,
    can_transition,
)
from ..models.product import Product
from .cart_store import CartService
from .inventory import InventoryGate
from .payment_gate import PaymentGate
from .shipping import ShippingResolver, apply_free_shipping
from .validation import shipping_region_code, validate_order_input

logger = logging.getLogger(__name__)

MAJOR_CITIES = frozenset({"Alger", "Oran", "Constantine", "Annaba", "Blida"})


def estimate_delivery(region_name: Optional[str], now: Optional[datetime] = None) -> datetime:
    """Two days to the major cities, five elsewhere"""
    now = now or datetime.now(timezone.utc)
    days = 2 if region_name in MAJOR_CITIES else 5
    return now + timedelta(days=days)


@dataclass(frozen=True)
class OrderPolicy:
    currency: str = "DZD"
    free_shipping_threshold: Optional[Decimal] = Decimal("50000")
    order_number_prefix: str = "MJ"


class OrderAssembler:
    """Places, reads, cancels and advances orders"""

    def __init__(
        self,
        db: Database,
        products: ProductDatabase,
        orders: OrderDatabase,
        inventory: InventoryGate,
        shipping: ShippingResolver,
        payments: PaymentGate,
        carts: Optional[CartService] = None,
        policy: Optional[OrderPolicy] = None,
    ):
        self.db = db
        self.products = products
        self.orders = orders
        self.inventory = inventory
        self.shipping = shipping
        self.payments = payments
        self.carts = carts
        self.policy = policy or OrderPolicy()

    async def create_order(
        self, order_input: OrderInput, cart_owner: Optional[CartOwner] = None
    ) -> OrderReceipt:
        """
        Validate and place an order.

        Raises:
            ValidationError: malformed input
            ProductUnavailable: unknown or inactive product
            InsufficientStock: not enough units, checked again at commit
            PaymentMethodDisabled: method outside the allow-list
            PersistenceError: store unavailable; nothing was committed
        """
        lines = validate_order_input(order_input)

        # Stock, in input order; the first failure rejects the whole order.
        priced: list[tuple[Product, int]] = []
        for line in lines:
            try:
                check = await self.inventory.inspect(line.product_id, line.quantity)
            except ProductNotFound:
                logger.info(f"Order rejected: product {line.product_id} unavailable")
                raise ProductUnavailable(line.product_id)
            if not check.availability.available:
                logger.info(
                    f"Order rejected: insufficient stock for {line.product_id} "
                    f"({check.availability.current_stock} < {line.quantity})"
                )
                raise InsufficientStock(
                    line.product_id,
                    check.product.name,
                    check.availability.current_stock,
                    line.quantity,
                )
            priced.append((check.product, line.quantity))

        items = [
            OrderItem(
                product_id=product.id,
                product_name=product.name,
                quantity=quantity,
                unit_price=product.unit_price,
                total_price=product.unit_price * quantity,
            )
            for product, quantity in priced
        ]
        subtotal = sum((item.total_price for item in items), Decimal("0"))

        quote = await self.shipping.resolve(shipping_region_code(order_input))
        shipping_amount = apply_free_shipping(
            quote.shipping_cost, subtotal, self.policy.free_shipping_threshold
        )
        total_amount = subtotal + shipping_amount
        self._log_drift(order_input, lines, items, subtotal, total_amount)

        authorization = self.payments.validate(
            order_input.payment_method, order_input.customer_info
        )

        now = datetime.now(timezone.utc)
        order_id = str(uuid.uuid4())
        try:
            async with self.db.transaction() as tx:
                order_number = self._next_order_number()
                for item in items:
                    self._take_stock(tx, item, order_id, order_number)
                order = self.orders.insert(
                    tx,
                    Order(
                        id=order_id,
                        order_number=order_number,
                        customer_id=order_input.customer_id,
                        customer_info=order_input.customer_info,
                        status=OrderStatus.PENDING,
                        items=items,
                        shipping_address=order_input.shipping_address,
                        subtotal=subtotal,
                        shipping_amount=shipping_amount,
                        total_amount=total_amount,
                        currency=self.policy.currency,
                        payment_method=authorization.method,
                        payment_reference=authorization.transaction_id,
                        notes=self._notes(order_input),
                        estimated_delivery=estimate_delivery(quote.region_name, now),
                        created_at=now,
                        updated_at=now,
                    ),
                )
        except PersistenceError:
            logger.error(
                f"Order persistence failed: customer={order_input.customer_id or 'guest'} "
                f"products={[i.product_id for i in items]}"
            )
            raise

        logger.info(
            f"Order {order.order_number} created: {order.total_amount} {order.currency} - "
            f"{'guest' if order_input.is_guest else 'customer ' + str(order_input.customer_id)}"
        )

        cart_cleared = await self._clear_cart(cart_owner, order.order_number)
        return OrderReceipt(
            order_id=order.id,
            order_number=order.order_number,
            status=order.status,
            subtotal=order.subtotal,
            shipping_amount=order.shipping_amount,
            total_amount=order.total_amount,
            currency=order.currency,
            payment_method=order.payment_method,
            payment_reference=order.payment_reference,
            estimated_delivery=order.estimated_delivery,
            cart_cleared=cart_cleared,
        )

    async def get_order(self, order_id: str, customer_id: Optional[str] = None) -> Order:
        """An order, restricted to its owner when ``customer_id`` is given"""
        order = await self.orders.get_order(order_id)
        if order is None or (customer_id is not None and order.customer_id != customer_id):
            raise OrderNotFound(order_id)
        return order

    async def list_orders(
        self,
        customer_id: Optional[str] = None,
        status: Optional[OrderStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Order]:
        return await self.orders.list_orders(
            customer_id=customer_id, status=status, limit=limit, offset=offset
        )

    async def cancel_order(
        self, order_id: str, customer_id: str, reason: Optional[str] = None
    ) -> Order:
        """
        Self-service cancellation of a customer's own order.

        Allowed from any non-terminal status; the units go back to stock in
        the same transaction.
        """
        async with self.db.transaction() as tx:
            order = self.orders.find_in_transaction(order_id)
            if order is None or order.customer_id != customer_id:
                raise OrderNotFound(order_id)
            if order.status in TERMINAL_STATUSES:
                raise OrderNotCancellable(order_id, order.status.value)
            cancelled = self._cancel(tx, order, reason)

        logger.info(f"Order {cancelled.order_number} cancelled by customer {customer_id}")
        return cancelled

    async def update_status(
        self, order_id: str, status: OrderStatus, notes: Optional[str] = None
    ) -> Order:
        """Back-office status change along the order state machine"""
        async with self.db.transaction() as tx:
            order = self.orders.find_in_transaction(order_id)
            if order is None:
                raise OrderNotFound(order_id)
            if not can_transition(order.status, status):
                raise InvalidStatusTransition(order.status.value, status.value)

            if status == OrderStatus.CANCELLED:
                updated = self._cancel(tx, order, notes)
            else:
                updated = order.model_copy(
                    update={
                        "status": status,
                        "notes": _append_note(order.notes, notes),
                        "updated_at": datetime.now(timezone.utc),
                    }
                )
                self.orders.update(tx, updated)

        logger.info(f"Order {updated.order_number} moved to {status.value}")
        return updated

    # ---- helpers -----------------------------------------------------------

    def _take_stock(self, tx: Transaction, item: OrderItem, order_id: str, order_number: str) -> None:
        taken = self.products.decrement_stock(
            tx,
            item.product_id,
            item.quantity,
            reference=order_id,
            reason=f"Order {order_number}",
        )
        if taken:
            return

        # Lost a race with another checkout since the availability check.
        current = self.products.peek(item.product_id)
        if current is None or not current.is_active:
            raise ProductUnavailable(item.product_id)
        raise InsufficientStock(
            item.product_id, item.product_name, current.stock_quantity, item.quantity
        )

    def _cancel(self, tx: Transaction, order: Order, reason: Optional[str]) -> Order:
        for item in order.items:
            self.products.increment_stock(
                tx,
                item.product_id,
                item.quantity,
                reference=order.id,
                reason=f"Order {order.order_number} cancelled",
            )
        cancelled = order.model_copy(
            update={
                "status": OrderStatus.CANCELLED,
                "notes": _append_note(order.notes, f"Cancelled: {reason}" if reason else None),
                "updated_at": datetime.now(timezone.utc),
            }
        )
        return self.orders.update(tx, cancelled)

    def _next_order_number(self) -> str:
        """Prefix + last 8 digits of the millisecond clock + 3 random digits"""
        while True:
            stamp = str(int(time.time() * 1000))[-8:]
            number = f"{self.policy.order_number_prefix}{stamp}{random.randint(0, 999):03d}"
            if not self.orders.number_taken(number):
                return number

    async def _clear_cart(self, owner: Optional[CartOwner], order_number: str) -> bool:
        if owner is None or self.carts is None:
            return False
        try:
            await self.carts.clear(owner)
        except PersistenceError:
            # The order is committed; a stale cart must not turn it into a failure.
            logger.exception(f"Order {order_number} placed but cart {owner.key} was not cleared")
            return False
        return True

    def _notes(self, order_input: OrderInput) -> Optional[str]:
        if order_input.is_guest:
            return _append_note("Guest order - Payment on delivery", order_input.notes)
        return order_input.notes

    def _log_drift(
        self,
        order_input: OrderInput,
        lines: list[OrderLineIn],
        items: list[OrderItem],
        subtotal: Decimal,
        total_amount: Decimal,
    ) -> None:
        for line, item in zip(lines, items):
            if line.unit_price is not None and line.unit_price != item.unit_price:
                logger.warning(
                    f"Price drift for {item.product_id}: client {line.unit_price}, "
                    f"server {item.unit_price}"
                )
        if order_input.declared_subtotal is not None and order_input.declared_subtotal != subtotal:
            logger.warning(
                f"Subtotal drift: client {order_input.declared_subtotal}, server {subtotal}"
            )
        if order_input.declared_total is not None and order_input.declared_total != total_amount:
            logger.warning(
                f"Total drift: client {order_input.declared_total}, server {total_amount}"
            )


def _append_note(existing: Optional[str], note: Optional[str]) -> Optional[str]:
    if not note:
        return existing
    if not existing:
        return note
    return f"{existing}\n{note}"
