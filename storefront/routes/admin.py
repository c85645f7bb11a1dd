"""Back-office API routes"""

from fastapi import APIRouter, Depends

from ..bootstrap import Services
from ..models.checkout import Order, UpdateOrderStatusRequest
from ..security.identity import Identity, require_admin
from .dependencies import get_services

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.patch("/orders/{order_id}/status", response_model=Order)
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    identity: Identity = Depends(require_admin),
    services: Services = Depends(get_services),
):
    """Move an order along its lifecycle"""
    return await services.assembler.update_status(order_id, request.status, notes=request.notes)
