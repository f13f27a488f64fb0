from typing import Optional

from pydantic import BaseModel, Field

from app.models.room_models import RoomType


class RoomCreate(BaseModel):
    room_number: str = Field(..., min_length=2, max_length=20)
    capacity: int = Field(..., ge=1, le=4)
    floor: int = Field(..., ge=1)
    block: str = Field(..., min_length=1, max_length=100)
    is_active: bool = True


class RoomUpdate(BaseModel):
    room_number: Optional[str] = Field(None, min_length=2, max_length=20)
    capacity: Optional[int] = Field(None, ge=1, le=4)
    floor: Optional[int] = Field(None, ge=1)
    block: Optional[str] = Field(None, min_length=1, max_length=100)
    is_active: Optional[bool] = None


class RoomResponse(BaseModel):
    id: str
    room_number: str
    capacity: int
    occupied_seats: int
    available_seats: int
    floor: int
    block: str
    room_type: RoomType
    is_active: bool

    class Config:
        from_attributes = True


class RoomAssignment(BaseModel):
    room_id: Optional[str] = None
