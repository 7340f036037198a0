"""
Reservation Pydantic schemas.
"""
from datetime import date, datetime, time
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer

from backoffice.models.reservation import ReservationStatus


class ReservationCreate(BaseModel):
    """Request model for creating or fully replacing a reservation."""
    customer_name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=50, validation_alias=AliasChoices("phone", "customer_phone"))
    customer_email: Optional[str] = Field(None, max_length=255)
    date: date
    time: time
    guests: int = Field(..., ge=1, validation_alias=AliasChoices("guests", "people"))
    table_number: Optional[int] = Field(None, ge=1)
    status: ReservationStatus = ReservationStatus.CONFIRMED
    google_event_id: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = Field(None, validation_alias=AliasChoices("notes", "observations"))


class ReservationStatusUpdate(BaseModel):
    status: ReservationStatus


class ReservationResponse(BaseModel):
    id: int
    customer_name: str
    phone: str
    customer_email: Optional[str] = None
    date: date
    time: time
    guests: int
    table_number: Optional[int] = None
    status: str
    google_event_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("time")
    def serialize_time(self, value: time) -> str:
        return value.strftime("%H:%M")


class AvailabilityResponse(BaseModel):
    """How many confirmed reservations a day holds against its capacity."""
    date: date
    confirmed: int
    capacity: int
    available: bool
