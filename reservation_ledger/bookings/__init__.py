"""
Booking ledger module

Owns booking records and the passenger booking index, and performs the
atomic "reserve one seat" transition against the train registry.

Key Components:
- booking_service.py: BookingLedger with the seat reservation transition
- router.py: FastAPI endpoints for booking lookups
- schemas.py: Pydantic models for booking data structures

Rules:
- One seat per request, seats handed out from the highest number down
- A passenger holds at most one booking per train
- Failed attempts never consume a booking id
"""
