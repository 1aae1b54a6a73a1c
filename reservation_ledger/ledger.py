import threading
from typing import Optional

from sqlalchemy.orm import sessionmaker

from reservation_ledger.bookings.booking_service import BookingLedger
from reservation_ledger.bookings.schemas import BookingDetails
from reservation_ledger.notifications.bus import EventBus
from reservation_ledger.store import LedgerStore
from reservation_ledger.trains.service import TrainRegistry

class Ledger:
    """Train registry and booking ledger sharing one state boundary"""

    def __init__(self, session_factory: sessionmaker, bus: Optional[EventBus] = None):
        self.store = LedgerStore(session_factory, bus)
        self.trains = TrainRegistry(self.store)
        self.bookings = BookingLedger(self.store, self.trains)

    @property
    def bus(self) -> EventBus:
        return self.store.bus

    # Operation surface
    def create_train(self, name: str, capacity: int) -> int:
        return self.trains.create_train(name, capacity)

    def get_available_seats(self, train_id: int) -> int:
        return self.trains.get_available_seats(train_id)

    def book_ticket(self, train_id: int, passenger: str) -> int:
        return self.bookings.book_ticket(train_id, passenger)

    def get_booking_details(self, booking_id: int) -> BookingDetails:
        return self.bookings.get_booking_details(booking_id)

_ledger: Optional[Ledger] = None
_ledger_lock = threading.Lock()

def get_ledger() -> Ledger:
    """Process-wide ledger bound to the configured database"""
    global _ledger
    if _ledger is None:
        with _ledger_lock:
            if _ledger is None:
                from reservation_ledger.database import SessionLocal, init_db
                init_db()
                _ledger = Ledger(SessionLocal)
    return _ledger
