"""Shipping cost resolution by wilaya"""

import logging
from decimal import Decimal
from typing import Optional

from ..core.errors import RegionNotFound
from ..models.region import ShippingCostResponse, ShippingQuote
from .region_catalog import RegionCatalog

logger = logging.getLogger(__name__)


def apply_free_shipping(
    shipping_cost: Decimal, subtotal: Decimal, threshold: Optional[Decimal]
) -> Decimal:
    """Shipping is free once the subtotal reaches the threshold"""
    if threshold is not None and subtotal >= threshold:
        return Decimal("0")
    return shipping_cost


class ShippingResolver:
    """
    Pure wilaya -> cost lookup.

    Always returns a cost: unknown, malformed or inactive codes get the
    fallback so checkout never dead-ends on bad region data. Free shipping is
    not applied here.
    """

    def __init__(self, catalog: RegionCatalog, default_cost: Decimal):
        self.catalog = catalog
        self.default_cost = default_cost

    async def resolve(self, region_code: Optional[str]) -> ShippingQuote:
        code = (region_code or "").strip()
        try:
            region = await self.catalog.get_by_code(code)
        except RegionNotFound:
            logger.warning(f"Unknown wilaya '{code}', using fallback shipping cost")
            return self._fallback(code)

        if not region.active:
            logger.warning(f"Inactive wilaya '{code}', using fallback shipping cost")
            return self._fallback(code)

        return ShippingQuote(
            region_code=region.code,
            region_name=region.name,
            shipping_cost=region.shipping_cost,
        )

    async def quote(
        self,
        region_code: Optional[str],
        subtotal: Optional[Decimal] = None,
        free_shipping_threshold: Optional[Decimal] = None,
    ) -> ShippingCostResponse:
        """Resolved cost plus what checkout would charge for ``subtotal``"""
        resolved = await self.resolve(region_code)
        effective = None
        if subtotal is not None:
            effective = apply_free_shipping(
                resolved.shipping_cost, subtotal, free_shipping_threshold
            )
        return ShippingCostResponse(
            region_code=resolved.region_code,
            shipping_cost=resolved.shipping_cost,
            is_fallback=resolved.is_fallback,
            free_shipping_threshold=free_shipping_threshold,
            subtotal=subtotal,
            effective_shipping_cost=effective,
        )

    def _fallback(self, code: str) -> ShippingQuote:
        return ShippingQuote(
            region_code=code,
            shipping_cost=self.default_cost,
            is_fallback=True,
        )
