"""
Orders router.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from backoffice.core.deps import get_order_service
from backoffice.models.order import OrderStatus
from backoffice.schemas.common import Envelope
from backoffice.schemas.order import OrderCreate, OrderResponse, OrderStatusUpdate
from backoffice.services.orders import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=Envelope[List[OrderResponse]])
def list_orders(
    status_filter: Optional[OrderStatus] = Query(None, alias="status"),
    service: OrderService = Depends(get_order_service),
):
    """List orders, newest first."""
    orders = service.list_orders(status=status_filter)
    return Envelope(data=[OrderResponse.from_order(o, service.tz_name) for o in orders])


@router.get("/{order_id}", response_model=Envelope[OrderResponse])
def get_order(order_id: int, service: OrderService = Depends(get_order_service)):
    return Envelope(data=OrderResponse.from_order(service.get(order_id), service.tz_name))


@router.post("", response_model=Envelope[OrderResponse], status_code=status.HTTP_201_CREATED)
def create_order(data: OrderCreate, service: OrderService = Depends(get_order_service)):
    """
    Place an order.

    Prices and the total are taken from the menu; stock is decremented in
    the same transaction. Returns 409 when a dish runs out.
    """
    order = service.create(data)
    return Envelope(data=OrderResponse.from_order(order, service.tz_name))


@router.patch("/{order_id}/status", response_model=Envelope[OrderResponse])
def update_order_status(
    order_id: int,
    data: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service),
):
    order = service.set_status(order_id, data.status)
    return Envelope(data=OrderResponse.from_order(order, service.tz_name))
