"""
Reservation model.
"""
import enum

from sqlalchemy import Column, Integer, String, Text, Date, Time, DateTime, Index, func

from backoffice.db.base import Base


class ReservationStatus(str, enum.Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Reservation(Base):
    """A booked table slot."""
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    customer_email = Column(String(255))
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=False)
    guests = Column("people", Integer, nullable=False)
    table_number = Column(Integer)
    status = Column(String(20), nullable=False, default=ReservationStatus.CONFIRMED.value)
    google_event_id = Column(String(255))  # External calendar event
    notes = Column("observations", Text)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_reservations_date_status", "date", "status"),
    )
