from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, ClassVar, Dict


@dataclass(frozen=True)
class LedgerEvent:
    type: ClassVar[str] = "ledger_event"

    def to_message(self) -> Dict[str, Any]:
        """Serialize to the JSON payload pushed to subscribers"""
        return {
            "type": self.type,
            **asdict(self),
            "timestamp": datetime.now().isoformat(),
        }


@dataclass(frozen=True)
class TrainCreated(LedgerEvent):
    type: ClassVar[str] = "train_created"

    train_id: int
    name: str
    capacity: int


@dataclass(frozen=True)
class TicketBooked(LedgerEvent):
    type: ClassVar[str] = "ticket_booked"

    booking_id: int
    passenger: str
    train_id: int
    seat_number: int
