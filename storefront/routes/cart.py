"""Cart API routes"""

from fastapi import APIRouter, HTTPException, Depends

from ..models.cart import (
    CartLineItem,
    AddToCartRequest,
    UpdateCartItemRequest,
    CartResponse,
)
from ..database.carts import CartStore
from ..database.products import ProductDatabase
from ..core.session import StorefrontSession, get_session
from .products import get_product_db

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def cart_response(cart: CartStore, message: str | None = None) -> CartResponse:
    return CartResponse(
        items=cart.items,
        total_items=cart.get_total_items(),
        total_price=cart.get_total_price(),
        message=message,
    )


@router.get("", response_model=CartResponse)
async def get_cart(session: StorefrontSession = Depends(get_session)):
    """Get the session's cart"""
    return cart_response(session.cart)


@router.post("/items", response_model=CartResponse)
async def add_to_cart(
    request: AddToCartRequest,
    session: StorefrontSession = Depends(get_session),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Add a catalog product to the cart"""
    product = product_db.get_product(request.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    session.cart.add_item(CartLineItem.from_product(product, request.quantity))
    return cart_response(
        session.cart,
        message=f"Added {request.quantity}x {product.name} to cart",
    )


@router.patch("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    session: StorefrontSession = Depends(get_session),
):
    """Set a line item's quantity; zero or less removes it"""
    session.cart.update_quantity(product_id, request.quantity)
    return cart_response(session.cart, message="Cart updated")


@router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(
    product_id: str,
    session: StorefrontSession = Depends(get_session),
):
    """Remove a line item from the cart"""
    session.cart.remove_item(product_id)
    return cart_response(session.cart, message="Item removed")


@router.post("/clear", response_model=CartResponse)
async def clear_cart(session: StorefrontSession = Depends(get_session)):
    """Remove all items from the cart"""
    session.cart.clear()
    return cart_response(session.cart, message="Cart cleared")
