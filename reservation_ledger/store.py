"""
Shared state boundary for the train registry and the booking ledger.

Every mutation runs under one re-entrant lock and one database transaction:
the lock is taken, checks and writes happen, the transaction commits (or rolls
back on any exception), the collected events are published and only then is
the lock released. Mutations are therefore linearizable and notifications are
delivered in commit order. Reads take the same lock so that a single SQLite
connection is never shared by two threads at once.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional, Type

from sqlalchemy import func
from sqlalchemy.orm import Session, sessionmaker

from reservation_ledger.notifications.bus import EventBus
from reservation_ledger.notifications.events import LedgerEvent


class UnitOfWork:
    """Session plus the events a transaction will announce once committed"""

    def __init__(self, db: Session):
        self.db = db
        self.events: List[LedgerEvent] = []

    def emit(self, event: LedgerEvent):
        self.events.append(event)


class LedgerStore:
    def __init__(self, session_factory: sessionmaker, bus: Optional[EventBus] = None):
        self._session_factory = session_factory
        self._lock = threading.RLock()
        self.bus = bus or EventBus()

    @contextmanager
    def transaction(self) -> Iterator[UnitOfWork]:
        with self._lock:
            uow = UnitOfWork(self._session_factory())
            try:
                yield uow
                uow.db.commit()
            except BaseException:
                uow.db.rollback()
                raise
            finally:
                uow.db.close()

            for event in uow.events:
                self.bus.publish(event)

    @contextmanager
    def read(self) -> Iterator[Session]:
        with self._lock:
            db = self._session_factory()
            try:
                yield db
            finally:
                db.close()

    @staticmethod
    def next_id(db: Session, model: Type) -> int:
        """Next dense id for ``model``; only valid inside ``transaction()``"""
        current = db.query(func.max(model.id)).scalar()
        return (current or 0) + 1
