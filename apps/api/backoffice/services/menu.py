"""
Menu item persistence.
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from backoffice.core.exceptions import InvalidInputError, NotFoundError
from backoffice.models.menu import MenuItem
from backoffice.schemas.menu import MenuItemCreate, MenuItemUpdate

logger = logging.getLogger(__name__)

MENU_ORDERINGS = {
    "id": (MenuItem.id.asc(),),
    "category": (MenuItem.category.asc(), MenuItem.name.asc()),
}


class MenuService:
    """CRUD and stock operations on the ``menu`` table."""

    def __init__(self, db: Session):
        self.db = db

    def list_items(
        self,
        order_by: str = "id",
        category: Optional[str] = None,
        available_only: bool = False,
    ) -> List[MenuItem]:
        if order_by not in MENU_ORDERINGS:
            raise InvalidInputError(
                f"Unknown ordering '{order_by}'. Expected one of: {', '.join(MENU_ORDERINGS)}"
            )

        query = select(MenuItem)
        if category:
            query = query.where(MenuItem.category == category)
        if available_only:
            query = query.where(MenuItem.stock > 0)
        query = query.order_by(*MENU_ORDERINGS[order_by])

        return list(self.db.execute(query).scalars().all())

    def get(self, item_id: int) -> MenuItem:
        item = self.db.get(MenuItem, item_id)
        if item is None:
            raise NotFoundError("Menu item not found")
        return item

    def create(self, data: MenuItemCreate) -> MenuItem:
        item = MenuItem(**data.model_dump())
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        logger.info("Created menu item %s (%s)", item.id, item.name)
        return item

    def replace(self, item_id: int, data: MenuItemCreate) -> MenuItem:
        item = self.get(item_id)
        for field, value in data.model_dump().items():
            setattr(item, field, value)
        self.db.commit()
        self.db.refresh(item)
        return item

    def update(self, item_id: int, data: MenuItemUpdate) -> MenuItem:
        item = self.get(item_id)
        update_dict = data.model_dump(exclude_unset=True)

        # Explicit nulls only make sense for optional text fields
        for field in ("name", "price", "stock"):
            if field in update_dict and update_dict[field] is None:
                raise InvalidInputError(f"'{field}' cannot be null")

        for field, value in update_dict.items():
            setattr(item, field, value)
        self.db.commit()
        self.db.refresh(item)
        return item

    def set_stock(self, item_id: int, stock: int) -> MenuItem:
        if stock < 0:
            raise InvalidInputError("Stock cannot be negative")
        item = self.get(item_id)
        item.stock = stock
        self.db.commit()
        self.db.refresh(item)
        logger.info("Stock for menu item %s set to %s", item_id, stock)
        return item

    def delete(self, item_id: int) -> None:
        item = self.get(item_id)
        self.db.delete(item)
        self.db.commit()
        logger.info("Deleted menu item %s", item_id)
