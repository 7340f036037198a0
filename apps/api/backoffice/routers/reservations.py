"""
Reservations router.
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from backoffice.core.deps import get_reservation_service
from backoffice.models.reservation import ReservationStatus
from backoffice.schemas.common import Envelope
from backoffice.schemas.reservation import (
    AvailabilityResponse,
    ReservationCreate,
    ReservationResponse,
    ReservationStatusUpdate,
)
from backoffice.services.reservations import ReservationService

router = APIRouter(prefix="/reservations", tags=["reservations"])


@router.get("", response_model=Envelope[List[ReservationResponse]])
def list_reservations(
    on_date: Optional[date] = Query(None, alias="date", description="YYYY-MM-DD"),
    status_filter: Optional[ReservationStatus] = Query(None, alias="status"),
    service: ReservationService = Depends(get_reservation_service),
):
    reservations = service.list_reservations(on_date=on_date, status=status_filter)
    return Envelope(data=[ReservationResponse.model_validate(r) for r in reservations])


@router.get("/availability", response_model=Envelope[AvailabilityResponse])
def check_availability(
    on_date: date = Query(..., alias="date", description="YYYY-MM-DD"),
    service: ReservationService = Depends(get_reservation_service),
):
    """Confirmed reservations for a day against the daily capacity."""
    return Envelope(data=AvailabilityResponse(**service.check_availability(on_date)))


@router.get("/{reservation_id}", response_model=Envelope[ReservationResponse])
def get_reservation(reservation_id: int, service: ReservationService = Depends(get_reservation_service)):
    return Envelope(data=ReservationResponse.model_validate(service.get(reservation_id)))


@router.post("", response_model=Envelope[ReservationResponse], status_code=status.HTTP_201_CREATED)
def create_reservation(
    data: ReservationCreate,
    service: ReservationService = Depends(get_reservation_service),
):
    """Book a table. A confirmed booking on a full day returns 409."""
    return Envelope(data=ReservationResponse.model_validate(service.create(data)))


@router.put("/{reservation_id}", response_model=Envelope[ReservationResponse])
def replace_reservation(
    reservation_id: int,
    data: ReservationCreate,
    service: ReservationService = Depends(get_reservation_service),
):
    return Envelope(data=ReservationResponse.model_validate(service.replace(reservation_id, data)))


@router.patch("/{reservation_id}/status", response_model=Envelope[ReservationResponse])
def update_reservation_status(
    reservation_id: int,
    data: ReservationStatusUpdate,
    service: ReservationService = Depends(get_reservation_service),
):
    reservation = service.set_status(reservation_id, data.status)
    return Envelope(data=ReservationResponse.model_validate(reservation))


@router.delete("/{reservation_id}", response_model=Envelope[None])
def delete_reservation(reservation_id: int, service: ReservationService = Depends(get_reservation_service)):
    service.delete(reservation_id)
    return Envelope()
