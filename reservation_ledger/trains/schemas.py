from pydantic import BaseModel
from typing import Any, List, Optional
from datetime import datetime

class TrainCreate(BaseModel):
    # Left untyped: the registry decides, so bad input maps to InvalidArgument
    name: Any = None
    capacity: Any = None

class TrainCreateResponse(BaseModel):
    train_id: int

class Train(BaseModel):
    id: int
    name: str
    capacity: int
    available_seats: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class TrainList(BaseModel):
    trains: List[Train]
    total: int
    page: int
    per_page: int

class SeatAvailability(BaseModel):
    train_id: int
    available_seats: int
