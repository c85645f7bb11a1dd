"""Order and checkout API routes"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query

from ..bootstrap import Services
from ..models.cart import CartOwner
from ..models.checkout import (
    CancelOrderRequest,
    CheckoutRequest,
    CheckoutResponse,
    GuestCheckoutRequest,
    Order,
    OrderInput,
    OrderListResponse,
    OrderStatus,
)
from ..security.identity import Identity, require_customer
from .dependencies import get_services

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.post("", response_model=CheckoutResponse, status_code=201)
async def create_order(
    request: CheckoutRequest,
    identity: Identity = Depends(require_customer),
    services: Services = Depends(get_services),
):
    """
    Place an order for the signed-in customer.

    Prices and totals are recomputed from the catalog; the customer's cart is
    cleared once the order is committed.
    """
    order_input = OrderInput(
        items=request.items,
        shipping_address=request.shipping_address,
        payment_method=request.payment_method,
        customer_id=identity.customer_id,
        declared_subtotal=request.subtotal,
        declared_total=request.total_amount,
        notes=request.notes,
    )
    receipt = await services.assembler.create_order(
        order_input, cart_owner=CartOwner.customer(identity.customer_id)
    )
    return CheckoutResponse(order=receipt, message="Order created")


@router.post("/guest", response_model=CheckoutResponse, status_code=201)
async def create_guest_order(
    request: GuestCheckoutRequest,
    services: Services = Depends(get_services),
):
    """Place an order without an account; payment on delivery only"""
    order_input = OrderInput(
        items=request.items,
        shipping_address=request.shipping_address,
        payment_method=request.payment_method,
        customer_info=request.customer_info,
        declared_subtotal=request.subtotal,
        declared_total=request.total_amount,
        notes=request.notes,
    )
    receipt = await services.assembler.create_order(order_input)
    return CheckoutResponse(order=receipt, message="Guest order created")


@router.get("", response_model=OrderListResponse)
async def list_orders(
    status: Optional[OrderStatus] = None,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    identity: Identity = Depends(require_customer),
    services: Services = Depends(get_services),
):
    """List the customer's orders, newest first"""
    orders = await services.assembler.list_orders(
        customer_id=identity.customer_id, status=status, limit=limit, offset=offset
    )
    return OrderListResponse(orders=orders, count=len(orders), limit=limit, offset=offset)


@router.get("/{order_id}", response_model=Order)
async def get_order(
    order_id: str,
    identity: Identity = Depends(require_customer),
    services: Services = Depends(get_services),
):
    """Get one of the customer's orders"""
    return await services.assembler.get_order(order_id, customer_id=identity.customer_id)


@router.post("/{order_id}/cancel", response_model=Order)
async def cancel_order(
    order_id: str,
    request: Optional[CancelOrderRequest] = Body(None),
    identity: Identity = Depends(require_customer),
    services: Services = Depends(get_services),
):
    """Cancel an order that has not been completed; its stock is restored"""
    reason = request.reason if request else None
    return await services.assembler.cancel_order(
        order_id, customer_id=identity.customer_id, reason=reason
    )
