"""
Order placement and lifecycle.

Creating an order is a single transaction: the referenced menu rows are
locked, stock is checked and decremented, and the total is computed from
the menu prices. Nothing the client sends about prices is trusted.
"""
import logging
from collections import OrderedDict
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

import pytz
from sqlalchemy import select
from sqlalchemy.orm import Session

from backoffice.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from backoffice.core.formatting import CENTS, to_local
from backoffice.models.menu import MenuItem
from backoffice.models.order import DEFAULT_ADDRESS, Order, OrderStatus
from backoffice.schemas.order import OrderCreate

logger = logging.getLogger(__name__)


class OrderService:

    def __init__(self, db: Session, tz_name: str):
        self.db = db
        self.tz_name = tz_name

    def list_orders(self, status: Optional[OrderStatus] = None) -> List[Order]:
        """All orders, newest first."""
        query = select(Order)
        if status is not None:
            query = query.where(Order.status == status.value)
        query = query.order_by(Order.created_at.desc(), Order.id.desc())
        return list(self.db.execute(query).scalars().all())

    def get(self, order_id: int) -> Order:
        order = self.db.get(Order, order_id)
        if order is None:
            raise NotFoundError("Order not found")
        return order

    def create(self, data: OrderCreate) -> Order:
        # Merge repeated lines for the same dish so stock is checked once
        quantities = OrderedDict()
        for line in data.items:
            quantities[line.menu_item_id] = quantities.get(line.menu_item_id, 0) + line.quantity

        try:
            menu_rows = self.db.execute(
                select(MenuItem)
                .where(MenuItem.id.in_(list(quantities)))
                .with_for_update()
            ).scalars().all()
            menu_by_id = {item.id: item for item in menu_rows}

            missing = [item_id for item_id in quantities if item_id not in menu_by_id]
            if missing:
                raise InvalidInputError(f"Unknown menu item(s): {', '.join(map(str, missing))}")

            lines = []
            total = Decimal("0.00")
            for item_id, quantity in quantities.items():
                menu_item = menu_by_id[item_id]
                if menu_item.stock < quantity:
                    raise ConflictError(
                        f"Insufficient stock for '{menu_item.name}': "
                        f"{menu_item.stock} available, {quantity} requested"
                    )
                menu_item.stock -= quantity

                price = Decimal(menu_item.price).quantize(CENTS)
                total += price * quantity
                lines.append({
                    "id": menu_item.id,
                    "name": menu_item.name,
                    "price": str(price),
                    "quantity": quantity,
                })

            if data.total is not None and Decimal(data.total).quantize(CENTS) != total:
                logger.warning(
                    "Client total %s differs from computed total %s; using computed",
                    data.total, total,
                )

            # created_at and time come from the same instant
            now_utc = datetime.now(pytz.UTC)
            order = Order(
                customer_name=data.customer_name,
                customer_phone=data.customer_phone,
                customer_email=data.customer_email,
                delivery_address=data.delivery_address or DEFAULT_ADDRESS,
                items=lines,
                total=total,
                status=data.status.value,
                notes=data.notes,
                time=to_local(now_utc, self.tz_name).strftime("%H:%M"),
                created_at=now_utc.replace(tzinfo=None),
            )
            self.db.add(order)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(order)
        logger.info("Created order %s for %s, total %s", order.id, order.customer_name, order.total)
        return order

    def set_status(self, order_id: int, status: OrderStatus) -> Order:
        order = self.get(order_id)
        previous = order.status
        order.status = status.value
        self.db.commit()
        self.db.refresh(order)
        logger.info("Order %s status %s -> %s", order_id, previous, status.value)
        return order
