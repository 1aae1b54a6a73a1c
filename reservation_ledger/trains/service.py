from sqlalchemy.orm import Session
from typing import List, Tuple

from reservation_ledger.exceptions import InvalidArgument, NotFound
from reservation_ledger.logger_config import logger
from reservation_ledger.models import Train
from reservation_ledger.notifications.events import TrainCreated
from reservation_ledger.store import LedgerStore

class TrainRegistry:
    """Owns train records and answers seat-availability queries"""

    def __init__(self, store: LedgerStore):
        self.store = store

    def create_train(self, name: str, capacity: int) -> int:
        """Register a train with ``capacity`` seats and return its id"""
        name = self._validate_name(name)
        self._validate_capacity(capacity)

        with self.store.transaction() as uow:
            train_id = self.store.next_id(uow.db, Train)
            uow.db.add(Train(
                id=train_id,
                name=name,
                capacity=capacity,
                available_seats=capacity
            ))
            uow.db.flush()
            uow.emit(TrainCreated(train_id=train_id, name=name, capacity=capacity))

        logger.info(f"Train {train_id} created: {name!r} with {capacity} seats")
        return train_id

    def get_available_seats(self, train_id: int) -> int:
        with self.store.read() as db:
            return self.load_train(db, train_id).available_seats

    def get_train(self, train_id: int) -> Train:
        with self.store.read() as db:
            return self.load_train(db, train_id)

    def list_trains(self, skip: int = 0, limit: int = 50) -> Tuple[List[Train], int]:
        """Trains ordered by id, with the total count for pagination"""
        with self.store.read() as db:
            query = db.query(Train)
            total = query.count()
            trains = query.order_by(Train.id).offset(skip).limit(limit).all()
            return trains, total

    def train_count(self) -> int:
        with self.store.read() as db:
            return db.query(Train).count()

    @staticmethod
    def load_train(db: Session, train_id: int, for_update: bool = False) -> Train:
        """Fetch a train inside an open session or raise NotFound"""
        query = db.query(Train).filter(Train.id == train_id)
        if for_update:
            query = query.with_for_update()
        train = query.first()
        if train is None:
            raise NotFound(f"train {train_id} not found")
        return train

    @staticmethod
    def _validate_name(name) -> str:
        if not isinstance(name, str):
            raise InvalidArgument("name must be text")
        name = name.strip()
        if not name:
            raise InvalidArgument("name empty")
        return name

    @staticmethod
    def _validate_capacity(capacity):
        # bool is an int subclass but never a seat count
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise InvalidArgument("capacity must be an integer")
        if capacity < 1:
            raise InvalidArgument("capacity must be positive")
