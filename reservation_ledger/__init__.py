"""Train reservation ledger: trains, one-seat bookings and their read-back."""
