"""
Reservation persistence and daily capacity.
"""
import logging
import threading
from contextlib import contextmanager
from datetime import date
from typing import List, Optional

from sqlalchemy import func, select, text
from sqlalchemy.orm import Session

from backoffice.core.exceptions import ConflictError, NotFoundError
from backoffice.models.reservation import Reservation, ReservationStatus
from backoffice.schemas.reservation import ReservationCreate

logger = logging.getLogger(__name__)

# Serializes capacity checks within this process; PostgreSQL adds a
# transaction-scoped advisory lock per date across processes.
_capacity_lock = threading.Lock()


class ReservationService:

    def __init__(self, db: Session, daily_capacity: int):
        self.db = db
        self.daily_capacity = daily_capacity

    def list_reservations(
        self,
        on_date: Optional[date] = None,
        status: Optional[ReservationStatus] = None,
    ) -> List[Reservation]:
        """Reservations, latest date and time first."""
        query = select(Reservation)
        if on_date is not None:
            query = query.where(Reservation.date == on_date)
        if status is not None:
            query = query.where(Reservation.status == status.value)
        query = query.order_by(Reservation.date.desc(), Reservation.time.desc())
        return list(self.db.execute(query).scalars().all())

    def get(self, reservation_id: int) -> Reservation:
        reservation = self.db.get(Reservation, reservation_id)
        if reservation is None:
            raise NotFoundError("Reservation not found")
        return reservation

    def confirmed_count(self, on_date: date, exclude_id: Optional[int] = None) -> int:
        query = select(func.count(Reservation.id)).where(
            Reservation.date == on_date,
            Reservation.status == ReservationStatus.CONFIRMED.value,
        )
        if exclude_id is not None:
            query = query.where(Reservation.id != exclude_id)
        return self.db.execute(query).scalar_one()

    def check_availability(self, on_date: date) -> dict:
        """
        Compare the confirmed reservations for a day against the daily cap.

        Returns a dict with date, confirmed count, capacity and whether one
        more confirmed reservation fits.
        """
        confirmed = self.confirmed_count(on_date)
        return {
            "date": on_date,
            "confirmed": confirmed,
            "capacity": self.daily_capacity,
            "available": confirmed < self.daily_capacity,
        }

    @contextmanager
    def _day_locked(self, on_date: date):
        """
        Hold the capacity lock for ``on_date`` until the block ends.

        Count, write and commit must all happen inside the block so no other
        booking for the same day reads the count in between.
        """
        with _capacity_lock:
            if self.db.get_bind().dialect.name == "postgresql":
                # Released by the commit or rollback that ends the block
                self.db.execute(
                    text("SELECT pg_advisory_xact_lock(:key)"),
                    {"key": on_date.toordinal()},
                )
            yield

    def _ensure_capacity(self, on_date: date, status: ReservationStatus, exclude_id: Optional[int] = None):
        if status != ReservationStatus.CONFIRMED:
            return
        if self.confirmed_count(on_date, exclude_id=exclude_id) >= self.daily_capacity:
            raise ConflictError(
                f"No availability on {on_date.isoformat()}: "
                f"{self.daily_capacity} confirmed reservations already"
            )

    def create(self, data: ReservationCreate) -> Reservation:
        try:
            with self._day_locked(data.date):
                self._ensure_capacity(data.date, data.status)

                reservation = Reservation(**data.model_dump(mode="python"))
                reservation.status = data.status.value
                self.db.add(reservation)
                self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(reservation)
        logger.info(
            "Created reservation %s for %s on %s %s (%s guests)",
            reservation.id, reservation.customer_name, reservation.date,
            reservation.time, reservation.guests,
        )
        return reservation

    def replace(self, reservation_id: int, data: ReservationCreate) -> Reservation:
        reservation = self.get(reservation_id)
        try:
            with self._day_locked(data.date):
                self._ensure_capacity(data.date, data.status, exclude_id=reservation_id)

                for field, value in data.model_dump(mode="python").items():
                    setattr(reservation, field, value)
                reservation.status = data.status.value
                self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(reservation)
        return reservation

    def set_status(self, reservation_id: int, status: ReservationStatus) -> Reservation:
        reservation = self.get(reservation_id)
        previous = reservation.status
        try:
            with self._day_locked(reservation.date):
                if previous != status.value:
                    self._ensure_capacity(reservation.date, status, exclude_id=reservation_id)
                reservation.status = status.value
                self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(reservation)
        logger.info("Reservation %s status %s -> %s", reservation_id, previous, status.value)
        return reservation

    def delete(self, reservation_id: int) -> None:
        reservation = self.get(reservation_id)
        self.db.delete(reservation)
        self.db.commit()
        logger.info("Deleted reservation %s", reservation_id)
