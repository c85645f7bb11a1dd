"""Shared route dependencies"""

from fastapi import Depends, Request

from ..bootstrap import Services
from ..models.cart import CartOwner
from ..security.identity import Identity, require_customer


def get_services(request: Request) -> Services:
    """Services built for this app instance in ``create_app``"""
    return request.app.state.services


def customer_cart_owner(identity: Identity = Depends(require_customer)) -> CartOwner:
    return CartOwner.customer(identity.customer_id)
