"""Order API routes"""

from fastapi import APIRouter, HTTPException, Depends, Query

from ..models.checkout import Order
from ..core.session import StorefrontSession, get_session

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.get("", response_model=list[Order])
async def list_orders(
    limit: int = Query(50, ge=1, le=500),
    session: StorefrontSession = Depends(get_session),
):
    """List the session's orders, newest first"""
    return session.orders.list_orders(limit=limit)


@router.get("/{order_id}", response_model=Order)
async def get_order(
    order_id: str,
    session: StorefrontSession = Depends(get_session),
):
    """Get order details"""
    order = session.orders.get_order_by_id(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
