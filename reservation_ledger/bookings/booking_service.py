from typing import List, Optional
from sqlalchemy.orm import Session

from reservation_ledger.bookings.schemas import BookingDetails
from reservation_ledger.exceptions import (
    AlreadyExists, InternalInvariantViolation, NotFound, ResourceExhausted
)
from reservation_ledger.logger_config import logger
from reservation_ledger.models import Booking, PassengerBooking, Train
from reservation_ledger.notifications.events import TicketBooked
from reservation_ledger.store import LedgerStore
from reservation_ledger.trains.service import TrainRegistry

class BookingLedger:
    """Books one seat per request and answers booking lookups"""

    def __init__(self, store: LedgerStore, trains: TrainRegistry):
        self.store = store
        self.trains = trains

    def book_ticket(self, train_id: int, passenger: str) -> int:
        """Reserve one seat on ``train_id`` for ``passenger``; returns the booking id"""
        return self.reserve_seat(train_id, passenger).id

    def reserve_seat(self, train_id: int, passenger: str) -> Booking:
        """
        Atomic seat reservation.

        Checks run in a fixed order (train exists, seats left, no duplicate)
        and any failure leaves the ledger untouched.
        """
        with self.store.transaction() as uow:
            db = uow.db
            train = self.trains.load_train(db, train_id, for_update=True)

            if train.available_seats <= 0:
                raise ResourceExhausted("no available seats")

            if db.get(PassengerBooking, (passenger, train.id)) is not None:
                raise AlreadyExists("duplicate booking")

            seat_number = self._allocate_seat(train)
            self._verify_seat_number(train, seat_number)

            booking = Booking(
                id=self.store.next_id(db, Booking),
                passenger=passenger,
                train_id=train.id,
                seat_number=seat_number
            )
            db.add(booking)
            db.flush()
            db.add(PassengerBooking(
                passenger=passenger,
                train_id=train.id,
                booking_id=booking.id
            ))
            db.flush()

            uow.emit(TicketBooked(
                booking_id=booking.id,
                passenger=passenger,
                train_id=train.id,
                seat_number=seat_number
            ))

        logger.info(
            f"Booking {booking.id}: {passenger!r} holds seat {seat_number} on train {train_id}"
        )
        return booking

    def get_booking_details(self, booking_id: int) -> BookingDetails:
        with self.store.read() as db:
            booking = self._load_booking(db, booking_id)
            return BookingDetails.model_validate(booking)

    def get_passenger_booking(self, passenger: str, train_id: int) -> BookingDetails:
        """The booking ``passenger`` holds on ``train_id``, via the passenger index"""
        with self.store.read() as db:
            entry = db.get(PassengerBooking, (passenger, train_id))
            if entry is None:
                raise NotFound(f"no booking for {passenger!r} on train {train_id}")
            return BookingDetails.model_validate(self._load_booking(db, entry.booking_id))

    def list_bookings(
        self,
        train_id: Optional[int] = None,
        passenger: Optional[str] = None
    ) -> List[BookingDetails]:
        """Bookings ordered by id, optionally filtered by train and/or passenger"""
        with self.store.read() as db:
            query = db.query(Booking)
            if train_id is not None:
                query = query.filter(Booking.train_id == train_id)
            if passenger is not None:
                query = query.filter(Booking.passenger == passenger)
            return [BookingDetails.model_validate(b) for b in query.order_by(Booking.id).all()]

    @staticmethod
    def _allocate_seat(train: Train) -> int:
        # Seats go out in descending order: the first booking gets seat == capacity
        train.available_seats -= 1
        return train.available_seats + 1

    @staticmethod
    def _verify_seat_number(train: Train, seat_number: int):
        if 0 < seat_number <= train.capacity:
            return
        logger.bind(
            invariant="seat_number in [1, capacity]",
            train_id=train.id,
            seat_number=seat_number,
            capacity=train.capacity
        ).critical(f"Seat allocation produced seat {seat_number} on train {train.id}")
        raise InternalInvariantViolation(
            "seat_number in [1, capacity]",
            train_id=train.id,
            seat_number=seat_number
        )

    @staticmethod
    def _load_booking(db: Session, booking_id: int) -> Booking:
        booking = db.get(Booking, booking_id)
        if booking is None:
            raise NotFound(f"booking {booking_id} not found")
        return booking
