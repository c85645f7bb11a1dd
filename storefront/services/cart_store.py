"""
Cart stores

Two implementations of one cart interface: guest carts live in client-side
storage (the browser's local storage), customer carts live in the cart table.
``CartService`` picks the store from the owner kind and implements the
guest -> customer merge that connects the two.
"""

import asyncio
import hashlib
import json
import logging
from collections import Counter
from contextlib import AsyncExitStack, asynccontextmanager
from decimal import Decimal
from typing import AsyncIterator, Optional, Protocol, Sequence, Union

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..core.errors import CartItemNotFound, ProductNotFound, ValidationError
from ..database.carts import CartDatabase
from ..models.cart import Cart, CartItem, CartLineIn, CartOwner, OwnerKind
from .inventory import InventoryGate

logger = logging.getLogger(__name__)

GUEST_CART_KEY = "guest_cart"

_cart_items = TypeAdapter(list[CartItem])


class ClientStorage(Protocol):
    """Key/value string storage on the client (window.localStorage)"""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class InMemoryClientStorage:
    """Dict-backed client storage"""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.values[key] = value

    def remove_item(self, key: str) -> None:
        self.values.pop(key, None)


class CartStore:
    """
    Shared cart semantics over a load/save pair.

    Every mutation is a read-modify-write under the owner's lock, computed on
    a copy of the lines and written back in one save, so a failed mutation
    leaves the stored cart as it was.
    """

    owner_kind: OwnerKind

    def __init__(self, max_line_quantity: int = 99, currency: str = "DZD"):
        self.max_line_quantity = max_line_quantity
        self.currency = currency
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: Counter[str] = Counter()

    async def load_items(self, owner: CartOwner) -> list[CartItem]:
        raise NotImplementedError

    async def save_items(self, owner: CartOwner, items: list[CartItem]) -> None:
        raise NotImplementedError

    @asynccontextmanager
    async def lock(self, owner: CartOwner) -> AsyncIterator[None]:
        """
        Hold the owner's lock.

        Locks exist only while someone holds or waits on them, so the table
        stays as small as the number of carts in use.
        """
        self._check_owner(owner)
        key = owner.key
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        lock = self._locks[key]
        self._lock_users[key] += 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[key] -= 1
            if not self._lock_users[key]:
                del self._lock_users[key]
                del self._locks[key]

    async def get_cart(self, owner: CartOwner) -> Cart:
        self._check_owner(owner)
        return Cart(owner=owner, items=await self.load_items(owner), currency=self.currency)

    async def get_items(self, owner: CartOwner) -> list[CartItem]:
        self._check_owner(owner)
        return await self.load_items(owner)

    async def get_total(self, owner: CartOwner) -> Decimal:
        """Sum of quantity x unit price, computed on every read"""
        cart = await self.get_cart(owner)
        return cart.total

    async def add_item(
        self,
        owner: CartOwner,
        product_id: str,
        quantity: int,
        unit_price: Decimal,
        name: str = "",
        image_ref: Optional[str] = None,
    ) -> Cart:
        """Add a line, or increase the existing line for the same product"""
        if quantity < 1:
            raise ValidationError.single("quantity", "Quantity must be at least 1")
        if unit_price < 0:
            raise ValidationError.single("unit_price", "Unit price must not be negative")

        async with self.lock(owner):
            items = await self.load_items(owner)
            existing = _find(items, product_id)
            if existing:
                existing.quantity = self._clamp(existing.quantity + quantity)
            else:
                items.append(
                    CartItem(
                        product_id=product_id,
                        quantity=self._clamp(quantity),
                        unit_price=unit_price,
                        name=name,
                        image_ref=image_ref,
                    )
                )
            await self.save_items(owner, items)
            return self.build_cart(owner, items)

    async def update_quantity(self, owner: CartOwner, product_id: str, quantity: int) -> Cart:
        """
        Set a line's quantity. Zero or less removes the line.

        Stock is not consulted here; over-stock quantities surface at checkout.
        """
        if quantity <= 0:
            return await self.remove_item(owner, product_id)

        async with self.lock(owner):
            items = await self.load_items(owner)
            existing = _find(items, product_id)
            if existing is None:
                raise CartItemNotFound(product_id)
            existing.quantity = self._clamp(quantity)
            await self.save_items(owner, items)
            return self.build_cart(owner, items)

    async def remove_item(self, owner: CartOwner, product_id: str) -> Cart:
        """Drop a line. Removing an absent line is a no-op."""
        async with self.lock(owner):
            items = await self.load_items(owner)
            remaining = [i for i in items if i.product_id != product_id]
            if len(remaining) != len(items):
                await self.save_items(owner, remaining)
            return self.build_cart(owner, remaining)

    async def clear(self, owner: CartOwner) -> Cart:
        async with self.lock(owner):
            await self.save_items(owner, [])
            return self.build_cart(owner, [])

    async def replace(self, owner: CartOwner, items: Sequence[CartItem]) -> Cart:
        """Make the cart exactly ``items``; duplicate products are combined"""
        combined: list[CartItem] = []
        for item in items:
            existing = _find(combined, item.product_id)
            if existing:
                existing.quantity = self._clamp(existing.quantity + item.quantity)
            else:
                combined.append(item.model_copy(update={"quantity": self._clamp(item.quantity)}))

        async with self.lock(owner):
            await self.save_items(owner, combined)
            return self.build_cart(owner, combined)

    def _clamp(self, quantity: int) -> int:
        return min(quantity, self.max_line_quantity)

    def build_cart(self, owner: CartOwner, items: list[CartItem]) -> Cart:
        return Cart(owner=owner, items=[i.model_copy() for i in items], currency=self.currency)

    def _check_owner(self, owner: CartOwner) -> None:
        if owner.kind != self.owner_kind:
            raise ValueError(f"{type(self).__name__} cannot hold a {owner.kind.value} cart")


class GuestCartStore(CartStore):
    """Guest cart serialized as JSON in client storage"""

    owner_kind = OwnerKind.GUEST

    def __init__(self, storage: ClientStorage, max_line_quantity: int = 99, currency: str = "DZD"):
        super().__init__(max_line_quantity=max_line_quantity, currency=currency)
        self.storage = storage

    @staticmethod
    def storage_key(owner: CartOwner) -> str:
        return f"{GUEST_CART_KEY}:{owner.id}"

    async def load_items(self, owner: CartOwner) -> list[CartItem]:
        saved = self.storage.get_item(self.storage_key(owner))
        if not saved:
            return []
        try:
            return _cart_items.validate_json(saved)
        except PydanticValidationError:
            # Unreadable client data is discarded, same as a fresh session.
            logger.warning(f"Discarding corrupted guest cart for session {owner.id}")
            self.storage.remove_item(self.storage_key(owner))
            return []

    async def save_items(self, owner: CartOwner, items: list[CartItem]) -> None:
        if items:
            self.storage.set_item(
                self.storage_key(owner), _cart_items.dump_json(items).decode("utf-8")
            )
        else:
            self.storage.remove_item(self.storage_key(owner))


class CustomerCartStore(CartStore):
    """Customer cart persisted in the cart table"""

    owner_kind = OwnerKind.CUSTOMER

    def __init__(self, carts: CartDatabase, max_line_quantity: int = 99, currency: str = "DZD"):
        super().__init__(max_line_quantity=max_line_quantity, currency=currency)
        self.carts = carts

    async def load_items(self, owner: CartOwner) -> list[CartItem]:
        return await self.carts.load(owner.key)

    async def save_items(self, owner: CartOwner, items: list[CartItem]) -> None:
        await self.carts.save(owner.key, items)


class CartService:
    """Routes cart operations to the right store and owns the merge"""

    def __init__(
        self,
        guest: GuestCartStore,
        customer: CustomerCartStore,
        inventory: InventoryGate,
    ):
        self.guest = guest
        self.customer = customer
        self.inventory = inventory

    def store_for(self, owner: CartOwner) -> CartStore:
        if owner.kind == OwnerKind.GUEST:
            return self.guest
        return self.customer

    async def get_cart(self, owner: CartOwner) -> Cart:
        return await self.store_for(owner).get_cart(owner)

    async def get_items(self, owner: CartOwner) -> list[CartItem]:
        return await self.store_for(owner).get_items(owner)

    async def get_total(self, owner: CartOwner) -> Decimal:
        return await self.store_for(owner).get_total(owner)

    async def add_item(
        self,
        owner: CartOwner,
        product_id: str,
        quantity: int,
        unit_price: Decimal,
        name: str = "",
        image_ref: Optional[str] = None,
    ) -> Cart:
        return await self.store_for(owner).add_item(
            owner, product_id, quantity, unit_price, name=name, image_ref=image_ref
        )

    async def add_product(self, owner: CartOwner, product_id: str, quantity: int) -> Cart:
        """Add a catalog product, snapshotting its current price"""
        product = await self.inventory.get_product(product_id)
        return await self.add_item(
            owner,
            product.id,
            quantity,
            product.unit_price,
            name=product.name,
            image_ref=product.image_ref,
        )

    async def update_quantity(self, owner: CartOwner, product_id: str, quantity: int) -> Cart:
        return await self.store_for(owner).update_quantity(owner, product_id, quantity)

    async def remove_item(self, owner: CartOwner, product_id: str) -> Cart:
        return await self.store_for(owner).remove_item(owner, product_id)

    async def clear(self, owner: CartOwner) -> Cart:
        return await self.store_for(owner).clear(owner)

    async def replace(self, owner: CartOwner, lines: Sequence[CartLineIn]) -> Cart:
        """
        Replace a cart from client lines (the "sync" call).

        Lines are priced from the catalog; any unknown or inactive product
        rejects the whole call and the cart is left unchanged.
        """
        _validate_lines(lines)
        items: list[CartItem] = []
        for line in lines:
            product = await self.inventory.get_product(line.product_id)
            items.append(
                CartItem(
                    product_id=product.id,
                    quantity=line.quantity,
                    unit_price=product.unit_price,
                    name=product.name,
                    image_ref=product.image_ref,
                )
            )
        return await self.store_for(owner).replace(owner, items)

    async def merge(
        self,
        guest_items: Optional[Sequence[Union[CartLineIn, CartItem]]],
        customer: CartOwner,
        guest_owner: Optional[CartOwner] = None,
        merge_id: Optional[str] = None,
    ) -> Cart:
        """
        Fold a guest cart into a customer cart on login.

        Matching products have their quantities summed, capped at current
        stock; other lines are inserted at the current catalog price. When
        ``guest_owner`` is given its stored cart is the snapshot and is
        cleared in the same step.

        Retries do not double-count. A ``merge_id`` is applied at most once
        per customer. Without one, repeating the last merged snapshot is a
        no-op until the customer cart is written by anything else.
        """
        if customer.kind != OwnerKind.CUSTOMER:
            raise ValueError("Guest carts can only be merged into a customer cart")
        if guest_owner is not None and guest_owner.kind != OwnerKind.GUEST:
            raise ValueError("guest_owner must be a guest cart owner")

        carts = self.customer.carts
        async with AsyncExitStack() as stack:
            await stack.enter_async_context(self.customer.lock(customer))
            if guest_owner is not None:
                await stack.enter_async_context(self.guest.lock(guest_owner))
                if guest_items is None:
                    guest_items = await self.guest.load_items(guest_owner)

            snapshot = _combine(guest_items or [])
            current = await self.customer.load_items(customer)
            if not snapshot:
                return self.customer.build_cart(customer, current)

            fingerprint = _fingerprint(snapshot)
            if merge_id:
                replay = await carts.merge_request_seen(customer.key, merge_id)
            else:
                replay = await carts.last_merge(customer.key) == fingerprint

            if replay:
                logger.info(f"Guest cart already merged for customer {customer.id}")
            else:
                merged = await self._merge_lines(current, snapshot)
                await carts.save_with_merge(customer.key, merged, fingerprint, merge_id)
                current = merged
                logger.info(
                    f"Merged {len(snapshot)} guest line(s) into cart of customer {customer.id}"
                )

            if guest_owner is not None:
                await self.guest.save_items(guest_owner, [])

            return self.customer.build_cart(customer, current)

    async def _merge_lines(
        self, current: list[CartItem], snapshot: dict[str, int]
    ) -> list[CartItem]:
        merged = [item.model_copy() for item in current]
        limit = self.customer.max_line_quantity

        for product_id, guest_quantity in snapshot.items():
            try:
                product = await self.inventory.get_product(product_id)
            except ProductNotFound:
                logger.warning(f"Skipping unavailable product {product_id} during cart merge")
                continue

            existing = _find(merged, product_id)
            held = existing.quantity if existing else 0
            quantity = min(held + guest_quantity, product.stock_quantity, limit)
            # Merging only adds; it never shrinks what the customer already had.
            quantity = max(quantity, held)
            if quantity < 1:
                continue

            if existing:
                existing.quantity = quantity
            else:
                merged.append(
                    CartItem(
                        product_id=product.id,
                        quantity=quantity,
                        unit_price=product.unit_price,
                        name=product.name,
                        image_ref=product.image_ref,
                    )
                )
        return merged


def _find(items: list[CartItem], product_id: str) -> Optional[CartItem]:
    return next((item for item in items if item.product_id == product_id), None)


def _validate_lines(lines: Sequence[CartLineIn]) -> None:
    errors = [
        {"field": f"items[{i}].quantity", "message": "Quantity must be at least 1"}
        for i, line in enumerate(lines)
        if line.quantity < 1
    ]
    errors.extend(
        {"field": f"items[{i}].product_id", "message": "Product id is required"}
        for i, line in enumerate(lines)
        if not line.product_id.strip()
    )
    if errors:
        raise ValidationError(errors)


def _combine(items: Sequence[Union[CartLineIn, CartItem]]) -> dict[str, int]:
    """Quantities per product, in first-seen order; non-positive lines dropped"""
    combined: dict[str, int] = {}
    for item in items:
        if item.quantity < 1 or not item.product_id:
            continue
        combined[item.product_id] = combined.get(item.product_id, 0) + item.quantity
    return combined


def _fingerprint(snapshot: dict[str, int]) -> str:
    blob = json.dumps(sorted(snapshot.items()), separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(blob).hexdigest()
