"""
Order Pydantic schemas.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from backoffice.core.formatting import order_datetime, order_time, parse_amount
from backoffice.models.order import Order, OrderStatus


class OrderLineCreate(BaseModel):
    """A requested line: which menu item and how many. Price comes from the menu."""
    menu_item_id: int = Field(..., validation_alias=AliasChoices("menu_item_id", "id"))
    quantity: int = Field(..., ge=1)


class OrderLine(BaseModel):
    """A line item as stored on the order."""
    id: int
    name: str = ""
    price: Decimal
    quantity: int = 1

    @field_validator("price", mode="before")
    @classmethod
    def parse_price(cls, v):
        return parse_amount(v)


class OrderCreate(BaseModel):
    customer_name: str = Field(..., min_length=1, max_length=255)
    customer_phone: Optional[str] = Field(None, max_length=50)
    customer_email: Optional[str] = Field(None, max_length=255)
    delivery_address: Optional[str] = Field(None, max_length=255)
    items: List[OrderLineCreate] = Field(..., min_length=1)
    # Client-side total, only checked against the recomputed one
    total: Optional[Decimal] = None
    status: OrderStatus = OrderStatus.PENDING
    notes: Optional[str] = None

    @field_validator("total", mode="before")
    @classmethod
    def parse_total(cls, v):
        return None if v is None else parse_amount(v)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderResponse(BaseModel):
    id: int
    customer_name: str
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None
    delivery_address: Optional[str] = None
    items: List[OrderLine] = []
    total: Decimal
    status: str
    notes: Optional[str] = None
    time: Optional[str] = None
    order_datetime: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_order(cls, order: Order, tz_name: str) -> "OrderResponse":
        """Build the response, normalizing the stored time against created_at."""
        items = []
        for raw in order.items or []:
            if not isinstance(raw, dict) or "id" not in raw:
                continue
            items.append(OrderLine(
                id=raw["id"],
                name=raw.get("name") or "",
                price=raw.get("price"),
                quantity=raw.get("quantity") or 1,
            ))

        return cls(
            id=order.id,
            customer_name=order.customer_name,
            customer_phone=order.customer_phone,
            customer_email=order.customer_email,
            delivery_address=order.delivery_address,
            items=items,
            total=order.total if order.total is not None else Decimal("0.00"),
            status=order.status,
            notes=order.notes,
            time=order_time(order.created_at, order.time, tz_name),
            order_datetime=order_datetime(order.created_at, order.time, tz_name),
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
