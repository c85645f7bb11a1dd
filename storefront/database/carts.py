"""Server-side cart storage for customer carts"""

from typing import Optional

from ..models.cart import CartItem
from .engine import Database


class CartDatabase:
    """Cart rows keyed by owner key"""

    def __init__(self, db: Database):
        self.db = db

    async def load(self, owner_key: str) -> list[CartItem]:
        """Lines of a cart, copied so callers can work on them freely"""
        await self.db.io()
        return [item.model_copy() for item in self.db.carts.get(owner_key, [])]

    async def save(self, owner_key: str, items: list[CartItem]) -> None:
        """
        Replace every line of a cart in one write.

        Any write other than a merge ends the replay window of the last merge.
        """
        await self.db.io()
        if items:
            self.db.carts[owner_key] = [item.model_copy() for item in items]
        else:
            self.db.carts.pop(owner_key, None)
        self.db.cart_merges.pop(owner_key, None)

    async def last_merge(self, owner_key: str) -> Optional[str]:
        """Fingerprint of the last merged guest snapshot, until the cart is next written"""
        await self.db.io()
        return self.db.cart_merges.get(owner_key)

    async def merge_request_seen(self, owner_key: str, merge_id: str) -> bool:
        await self.db.io()
        return (owner_key, merge_id) in self.db.merge_requests

    async def save_with_merge(
        self,
        owner_key: str,
        items: list[CartItem],
        fingerprint: str,
        merge_id: Optional[str] = None,
    ) -> None:
        """Write merged lines together with what identifies the merge"""
        await self.db.io()
        if items:
            self.db.carts[owner_key] = [item.model_copy() for item in items]
        else:
            self.db.carts.pop(owner_key, None)
        self.db.cart_merges[owner_key] = fingerprint
        if merge_id:
            self.db.merge_requests.add((owner_key, merge_id))
