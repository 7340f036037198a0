"""
Order model.

Line items are embedded as JSON text in the ``items`` column; there is no
separate order_items table.
"""
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, Index, func

from backoffice.db.base import Base
from backoffice.db.types import JSONList, LocaleDecimal

DEFAULT_ADDRESS = "Dirección no especificada"


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Statuses an order can still move on from
ACTIVE_ORDER_STATUSES = (OrderStatus.PENDING, OrderStatus.PREPARING, OrderStatus.READY)


class Order(Base):
    """A customer purchase made of menu line items."""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_name = Column("nombre", String(255), nullable=False)
    customer_phone = Column("telefono", String(50))
    customer_email = Column("email", String(255))
    delivery_address = Column("direccion", String(255), default=DEFAULT_ADDRESS)
    items = Column(JSONList, nullable=False, default=list)  # [{id, name, price, quantity}]
    total = Column(LocaleDecimal, nullable=False)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value)
    notes = Column(Text)
    time = Column(String(8))  # "HH:MM", restaurant-local
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_orders_created_at", "created_at"),
    )
