"""
Order cart used while building a new order.
"""
from decimal import Decimal
from typing import List, Optional

from backoffice.core.formatting import parse_amount


class OrderCart:
    """Running list of menu lines with a client-side total."""

    def __init__(self):
        self.lines: List[dict] = []

    def add(self, menu_item: dict, quantity: int = 1) -> dict:
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")
        line = {
            "id": menu_item["id"],
            "name": menu_item.get("name", ""),
            "price": parse_amount(menu_item.get("price")),
            "quantity": int(quantity),
        }
        self.lines.append(line)
        return line

    def remove(self, index: int) -> dict:
        return self.lines.pop(index)

    def clear(self) -> None:
        self.lines = []

    def is_empty(self) -> bool:
        return not self.lines

    def total(self) -> Decimal:
        return sum((line["price"] * line["quantity"] for line in self.lines), Decimal("0.00"))

    def to_payload(
        self,
        customer_name: str,
        customer_phone: Optional[str] = None,
        customer_email: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> dict:
        """Request body for ``POST /orders``."""
        if self.is_empty():
            raise ValueError("Add at least one item to the order")
        return {
            "customer_name": customer_name,
            "customer_phone": customer_phone,
            "customer_email": customer_email,
            "notes": notes,
            "items": [
                {
                    "id": line["id"],
                    "name": line["name"],
                    "price": str(line["price"]),
                    "quantity": line["quantity"],
                }
                for line in self.lines
            ],
            "total": str(self.total()),
            "status": "pending",
        }
