"""Product API routes"""

from fastapi import APIRouter, Depends, Query

from ..bootstrap import Services
from ..models.product import Availability
from .dependencies import get_services

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("/{product_id}/availability", response_model=Availability)
async def check_availability(
    product_id: str,
    quantity: int = Query(1, ge=1),
    services: Services = Depends(get_services),
):
    """Check whether a quantity of a product can be sold right now"""
    return await services.inventory.check_availability(product_id, quantity)
