from typing import Optional

from fastapi import APIRouter, Request

from skillmark.domain.models import OrderCreate, OrderPlaced

router = APIRouter(prefix="/orders", tags=["orders"])

@router.post("", response_model=OrderPlaced)
async def place_order(request: Request, payload: Optional[OrderCreate] = None):
    """
    Save a new certificate order.
    The OrderService is taken from app.state (Dependency Injection).
    """
    # An empty body is handled like a body with every field missing
    payload = payload or OrderCreate()
    order_service = request.app.state.order_service
    order = await order_service.create_order(payload)
    return OrderPlaced(order_id=order.order_id, status=order.status)


@router.get("/{order_id}")
async def track_order(request: Request, order_id: str):
    """Return the stored record for one order ID, keys in CSV column order."""
    order_service = request.app.state.order_service
    order = await order_service.get_order(order_id)
    return order.to_record()
