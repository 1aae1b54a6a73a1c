from fastapi import APIRouter, Depends, Query
from typing import Optional

from reservation_ledger.bookings.schemas import BookingDetails, BookingList
from reservation_ledger.ledger import Ledger, get_ledger

router = APIRouter()

@router.get("", response_model=BookingList)
def get_bookings(
    train_id: Optional[int] = Query(None, description="Filter by train ID"),
    passenger: Optional[str] = Query(None, min_length=1, description="Filter by passenger"),
    ledger: Ledger = Depends(get_ledger)
):
    """List bookings ordered by id"""
    bookings = ledger.bookings.list_bookings(train_id=train_id, passenger=passenger)
    return BookingList(bookings=bookings, total=len(bookings))

@router.get("/{booking_id}", response_model=BookingDetails)
def get_booking(booking_id: int, ledger: Ledger = Depends(get_ledger)):
    """Get booking details by ID"""
    return ledger.bookings.get_booking_details(booking_id)
