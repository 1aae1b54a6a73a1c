from fastapi import APIRouter, Depends, Header, Query, status

from reservation_ledger.bookings.schemas import BookingCreated, BookingDetails
from reservation_ledger.ledger import Ledger, get_ledger
from reservation_ledger.trains.schemas import (
    SeatAvailability, Train, TrainCreate, TrainCreateResponse, TrainList
)

router = APIRouter()

@router.post("", response_model=TrainCreateResponse, status_code=status.HTTP_201_CREATED)
def create_train(request: TrainCreate, ledger: Ledger = Depends(get_ledger)):
    """Register a new train"""
    train_id = ledger.trains.create_train(request.name, request.capacity)
    return TrainCreateResponse(train_id=train_id)

@router.get("", response_model=TrainList)
def get_trains(
    skip: int = Query(0, ge=0, description="Number of trains to skip"),
    limit: int = Query(50, ge=1, le=100, description="Number of trains to return"),
    ledger: Ledger = Depends(get_ledger)
):
    """List trains ordered by id"""
    trains, total = ledger.trains.list_trains(skip=skip, limit=limit)

    return TrainList(
        trains=[Train.model_validate(train) for train in trains],
        total=total,
        page=(skip // limit) + 1,
        per_page=limit
    )

@router.get("/{train_id}", response_model=Train)
def get_train(train_id: int, ledger: Ledger = Depends(get_ledger)):
    return ledger.trains.get_train(train_id)

@router.get("/{train_id}/seats", response_model=SeatAvailability)
def get_available_seats(train_id: int, ledger: Ledger = Depends(get_ledger)):
    """Seats still available on a train"""
    return SeatAvailability(
        train_id=train_id,
        available_seats=ledger.trains.get_available_seats(train_id)
    )

@router.post(
    "/{train_id}/bookings",
    response_model=BookingCreated,
    status_code=status.HTTP_201_CREATED
)
def book_ticket(
    train_id: int,
    passenger: str = Header(..., alias="X-Passenger-Id", min_length=1, description="Caller identity"),
    ledger: Ledger = Depends(get_ledger)
):
    """Book one seat on the train for the calling passenger"""
    booking = ledger.bookings.reserve_seat(train_id, passenger)
    return BookingCreated(
        booking_id=booking.id,
        train_id=booking.train_id,
        seat_number=booking.seat_number
    )

@router.get("/{train_id}/bookings/mine", response_model=BookingDetails)
def get_my_booking(
    train_id: int,
    passenger: str = Header(..., alias="X-Passenger-Id", min_length=1, description="Caller identity"),
    ledger: Ledger = Depends(get_ledger)
):
    """The calling passenger's booking on this train"""
    return ledger.bookings.get_passenger_booking(passenger, train_id)
