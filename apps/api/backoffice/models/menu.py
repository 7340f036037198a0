"""
Menu item model.

The ``menu`` table predates this service and uses Spanish column names.
Attribute names are English; the column names below are the only place
the two vocabularies meet.
"""
from sqlalchemy import CheckConstraint, Column, Integer, String, Text, Numeric, DateTime, func

from backoffice.db.base import Base
from backoffice.db.types import YesNo


class MenuItem(Base):
    """A dish sold by the restaurant."""
    __tablename__ = "menu"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column("nombre", String(255), nullable=False)
    description = Column("ingredientes", Text)
    price = Column("precio", Numeric(10, 2), nullable=False)
    category = Column("categoria", String(100))
    stock = Column(Integer, nullable=False, default=0)

    # Dietary flags, stored as "si"/"no"
    vegetarian = Column("vegetariano", YesNo, nullable=False, default=False)
    gluten = Column("gluten", YesNo, nullable=False, default=False)
    seafood = Column("marisco", YesNo, nullable=False, default=False)
    dairy = Column("lactosa", YesNo, nullable=False, default=False)
    vegan = Column("vegano", YesNo, nullable=False, default=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_menu_stock_non_negative"),
        CheckConstraint("precio >= 0", name="ck_menu_price_non_negative"),
    )

    @property
    def available(self) -> bool:
        return (self.stock or 0) > 0
