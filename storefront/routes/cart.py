"""Cart API routes"""

from fastapi import APIRouter, Depends

from ..bootstrap import Services
from ..models.cart import (
    AddToCartRequest,
    CartOwner,
    CartResponse,
    CartValidationResult,
    MergeCartRequest,
    ReplaceCartRequest,
    UpdateCartItemRequest,
    ValidateCartRequest,
)
from .dependencies import customer_cart_owner, get_services

router = APIRouter(prefix="/api/cart", tags=["Cart"])


@router.get("", response_model=CartResponse)
async def get_cart(
    owner: CartOwner = Depends(customer_cart_owner),
    services: Services = Depends(get_services),
):
    """Get the customer's cart"""
    cart = await services.carts.get_cart(owner)
    return CartResponse.from_cart(cart)


@router.put("", response_model=CartResponse)
async def replace_cart(
    request: ReplaceCartRequest,
    owner: CartOwner = Depends(customer_cart_owner),
    services: Services = Depends(get_services),
):
    """Replace the whole cart with the given lines"""
    cart = await services.carts.replace(owner, request.items)
    return CartResponse.from_cart(cart, message="Cart synced")


@router.delete("", response_model=CartResponse)
async def clear_cart(
    owner: CartOwner = Depends(customer_cart_owner),
    services: Services = Depends(get_services),
):
    """Clear all items from cart"""
    cart = await services.carts.clear(owner)
    return CartResponse.from_cart(cart, message="Cart cleared")


@router.post("/items", response_model=CartResponse)
async def add_to_cart(
    request: AddToCartRequest,
    owner: CartOwner = Depends(customer_cart_owner),
    services: Services = Depends(get_services),
):
    """Add a product to the cart at its current catalog price"""
    cart = await services.carts.add_product(owner, request.product_id, request.quantity)
    return CartResponse.from_cart(cart, message=f"Added {request.quantity} item(s) to cart")


@router.patch("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    owner: CartOwner = Depends(customer_cart_owner),
    services: Services = Depends(get_services),
):
    """Update item quantity; zero removes the line"""
    cart = await services.carts.update_quantity(owner, product_id, request.quantity)
    return CartResponse.from_cart(cart, message="Cart updated")


@router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(
    product_id: str,
    owner: CartOwner = Depends(customer_cart_owner),
    services: Services = Depends(get_services),
):
    """Remove an item from the cart"""
    cart = await services.carts.remove_item(owner, product_id)
    return CartResponse.from_cart(cart, message="Item removed")


@router.post("/merge", response_model=CartResponse)
async def merge_cart(
    request: MergeCartRequest,
    owner: CartOwner = Depends(customer_cart_owner),
    services: Services = Depends(get_services),
):
    """Fold the guest cart kept by the browser into the customer's cart"""
    cart = await services.carts.merge(request.items, owner, merge_id=request.merge_id)
    return CartResponse.from_cart(cart, message="Cart merged")


@router.post("/validate", response_model=CartValidationResult)
async def validate_cart(
    request: ValidateCartRequest,
    services: Services = Depends(get_services),
):
    """Check a prospective cart against current stock, reporting every problem"""
    return await services.inventory.validate_items(request.items)
