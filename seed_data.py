#!/usr/bin/env python3

from reservation_ledger.database import SessionLocal, init_db
from reservation_ledger.exceptions import InvalidArgument
from reservation_ledger.ledger import Ledger

DEMO_TRAINS = [
    ("Express 101", 3),
    ("Coastal Sleeper", 120),
    ("Northern Regional", 64),
    ("Airport Shuttle", 48),
]

def create_seed_data():
    init_db()
    ledger = Ledger(SessionLocal)

    print("🚀 Creating demo trains...")
    for name, capacity in DEMO_TRAINS:
        try:
            train_id = ledger.trains.create_train(name, capacity)
        except InvalidArgument as e:
            print(f"❌ Skipped {name!r}: {e.message}")
            continue
        print(f"  Train {train_id}: {name} ({capacity} seats)")

    print(f"✅ Ledger now holds {ledger.trains.train_count()} train(s)")

if __name__ == "__main__":
    create_seed_data()
