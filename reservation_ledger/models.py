from sqlalchemy import Column, Integer, BigInteger, Text, DateTime, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from reservation_ledger.database import Base

# ================================
# Trains
# ================================
class Train(Base):
    __tablename__ = "trains"
    __table_args__ = (
        CheckConstraint("capacity >= 1", name="ck_trains_capacity_positive"),
        CheckConstraint("available_seats >= 0 AND available_seats <= capacity", name="ck_trains_available_seats_range"),
    )

    # Ids are assigned by the registry, never by the database
    id = Column(BigInteger, primary_key=True, autoincrement=False)
    name = Column(Text, nullable=False)
    capacity = Column(Integer, nullable=False)
    available_seats = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    bookings = relationship("Booking", back_populates="train")

# ================================
# Bookings
# ================================
class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        UniqueConstraint("train_id", "seat_number", name="uq_bookings_train_seat"),
        CheckConstraint("seat_number >= 1", name="ck_bookings_seat_number_positive"),
    )

    id = Column(BigInteger, primary_key=True, autoincrement=False)
    passenger = Column(Text, nullable=False, index=True)
    train_id = Column(BigInteger, ForeignKey("trains.id"), nullable=False, index=True)
    seat_number = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    train = relationship("Train", back_populates="bookings")
    index_entry = relationship("PassengerBooking", back_populates="booking", uselist=False)

# ================================
# Passenger Booking Index
# ================================
class PassengerBooking(Base):
    __tablename__ = "passenger_bookings"

    passenger = Column(Text, primary_key=True)
    train_id = Column(BigInteger, ForeignKey("trains.id"), primary_key=True)
    booking_id = Column(BigInteger, ForeignKey("bookings.id"), nullable=False, unique=True)

    # Relationships
    booking = relationship("Booking", back_populates="index_entry")
