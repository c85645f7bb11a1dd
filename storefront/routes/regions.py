"""Region (wilaya) API routes"""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..bootstrap import Services
from ..models.region import RegionListResponse, ShippingCostResponse
from .dependencies import get_services

router = APIRouter(prefix="/api/regions", tags=["Regions"])


@router.get("", response_model=RegionListResponse)
async def list_regions(services: Services = Depends(get_services)):
    """List active wilayas ordered by code"""
    regions = await services.regions.list_active()
    return RegionListResponse(data=regions, count=len(regions))


@router.get("/{code}")
async def get_region(code: str, services: Services = Depends(get_services)):
    """Get a wilaya by its two-digit code"""
    region = await services.regions.get_by_code(code)
    return {"success": True, "data": region}


@router.get("/{code}/shipping-cost", response_model=ShippingCostResponse)
async def get_shipping_cost(
    code: str,
    subtotal: Optional[Decimal] = Query(None, ge=0),
    services: Services = Depends(get_services),
):
    """
    Shipping cost for a wilaya.

    Unknown codes get the fallback cost. With ``subtotal`` the response also
    carries the cost checkout would charge after the free-shipping rule.
    """
    return await services.shipping.quote(
        code,
        subtotal=subtotal,
        free_shipping_threshold=services.settings.free_shipping_threshold,
    )
