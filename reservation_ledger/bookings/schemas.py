from pydantic import AliasChoices, BaseModel, Field
from typing import List

class BookingDetails(BaseModel):
    """Read-back of one booking: who holds which seat on which train"""
    booking_id: int = Field(validation_alias=AliasChoices("booking_id", "id"))
    passenger: str
    train_id: int
    seat_number: int

    class Config:
        from_attributes = True

class BookingCreated(BaseModel):
    booking_id: int
    train_id: int
    seat_number: int

class BookingList(BaseModel):
    bookings: List[BookingDetails]
    total: int
