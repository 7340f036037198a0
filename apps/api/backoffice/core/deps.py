"""
FastAPI dependencies wiring services to the request's database session.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from backoffice.core.config import Settings, get_settings
from backoffice.db.session import get_db
from backoffice.services.menu import MenuService
from backoffice.services.orders import OrderService
from backoffice.services.reservations import ReservationService
from backoffice.services.stats import StatsService


def get_menu_service(db: Session = Depends(get_db)) -> MenuService:
    return MenuService(db)


def get_order_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> OrderService:
    return OrderService(db, settings.RESTAURANT_TIMEZONE)


def get_reservation_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ReservationService:
    return ReservationService(db, settings.RESERVATION_DAILY_CAPACITY)


def get_stats_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> StatsService:
    return StatsService(db, settings.RESTAURANT_TIMEZONE)
