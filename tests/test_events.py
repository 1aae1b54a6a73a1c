import asyncio
import threading

import pytest
from loguru import logger

from reservation_ledger.exceptions import AlreadyExists, InvalidArgument, ResourceExhausted
from reservation_ledger.notifications import EventBus, TicketBooked, TrainCreated, WebSocketManager


@pytest.mark.unit
class TestLedgerNotifications:
    def test_create_and_book_are_announced_in_order(self, ledger, events):
        # When
        train_id = ledger.create_train("Express 101", 3)
        booking_id = ledger.book_ticket(train_id, "alice")

        # Then
        assert events == [
            TrainCreated(train_id=1, name="Express 101", capacity=3),
            TicketBooked(booking_id=booking_id, passenger="alice", train_id=1, seat_number=3),
        ]

    def test_failed_operations_announce_nothing(self, ledger, events):
        train_id = ledger.create_train("Airport Shuttle", 1)
        ledger.book_ticket(train_id, "alice")
        events.clear()

        with pytest.raises(InvalidArgument):
            ledger.create_train("", 1)
        with pytest.raises(ResourceExhausted):
            ledger.book_ticket(train_id, "bob")

        assert events == []

    def test_duplicate_booking_announces_nothing(self, ledger, express_train, events):
        ledger.book_ticket(express_train, "alice")
        with pytest.raises(AlreadyExists):
            ledger.book_ticket(express_train, "alice")

        assert [e.type for e in events] == ["ticket_booked"]

    def test_subscriber_sees_committed_state(self, ledger):
        seen = []
        # Subscribers may read back through the ledger while being notified
        ledger.bus.subscribe(
            lambda event: seen.append(ledger.get_available_seats(event.train_id))
        )

        train_id = ledger.create_train("Express 101", 3)
        ledger.book_ticket(train_id, "alice")

        assert seen == [3, 2]

    def test_message_payload(self):
        message = TicketBooked(booking_id=4, passenger="bob", train_id=2, seat_number=7).to_message()

        assert message["type"] == "ticket_booked"
        assert message["booking_id"] == 4
        assert message["passenger"] == "bob"
        assert message["seat_number"] == 7
        assert "timestamp" in message


@pytest.mark.unit
class TestEventBus:
    def test_failing_subscriber_does_not_block_others(self, ledger):
        received = []

        def broken(event):
            raise RuntimeError("subscriber down")

        ledger.bus.subscribe(broken)
        ledger.bus.subscribe(received.append)

        train_id = ledger.create_train("Express 101", 3)

        assert [e.train_id for e in received] == [train_id]
        assert ledger.trains.train_count() == 1

    def test_unsubscribe_stops_delivery(self):
        bus = EventBus()
        received = []
        unsubscribe = bus.subscribe(received.append)

        bus.publish(TrainCreated(train_id=1, name="Express 101", capacity=3))
        unsubscribe()
        bus.publish(TrainCreated(train_id=2, name="Coastal Sleeper", capacity=9))

        assert [e.train_id for e in received] == [1]


@pytest.mark.unit
class TestWebSocketManager:
    @pytest.fixture
    def error_logs(self):
        records = []
        handler_id = logger.add(records.append, level="ERROR")
        yield records
        logger.remove(handler_id)

    @pytest.fixture
    def server_loop(self):
        loop = asyncio.new_event_loop()
        thread = threading.Thread(target=loop.run_forever, daemon=True)
        thread.start()
        yield loop
        loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout=5)
        loop.close()

    def test_failed_broadcast_is_logged(self, server_loop, error_logs):
        # Given: a manager whose broadcast blows up
        manager = WebSocketManager()

        async def broken_broadcast(message):
            raise ValueError("encoder down")

        manager.broadcast_to_all = broken_broadcast
        manager._loop = server_loop

        # When
        manager._on_event(TrainCreated(train_id=1, name="Express 101", capacity=3))
        # Drain the loop: the failed broadcast was scheduled first
        asyncio.run_coroutine_threadsafe(asyncio.sleep(0), server_loop).result(timeout=5)

        # Then
        assert len(error_logs) == 1
        assert "encoder down" in error_logs[0].record["message"]

    def test_successful_broadcast_logs_nothing(self, server_loop, error_logs):
        manager = WebSocketManager()
        manager._loop = server_loop

        manager._on_event(TrainCreated(train_id=1, name="Express 101", capacity=3))
        asyncio.run_coroutine_threadsafe(asyncio.sleep(0), server_loop).result(timeout=5)

        assert error_logs == []
