import uuid
import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Boolean, CheckConstraint
from sqlalchemy.orm import relationship

from app.db.database import Base


class RoomType(str, enum.Enum):
    single = "single"
    double = "double"
    triple = "triple"


def room_type_for_capacity(capacity: int) -> RoomType:
    if capacity <= 1:
        return RoomType.single
    if capacity == 2:
        return RoomType.double
    return RoomType.triple


class Room(Base):
    __tablename__ = "rooms"

    id = Column(
        String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4())
    )
    room_number = Column(String(20), unique=True, nullable=False)
    capacity = Column(Integer, nullable=False)
    occupied_seats = Column(Integer, nullable=False, default=0)
    floor = Column(Integer, nullable=False)
    block = Column(String(100), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    students = relationship("StudentProfile", back_populates="room")

    __table_args__ = (
        CheckConstraint("capacity BETWEEN 1 AND 4", name="ck_room_capacity_range"),
        CheckConstraint(
            "occupied_seats >= 0 AND occupied_seats <= capacity",
            name="ck_room_occupancy_within_capacity",
        ),
    )

    # derived, never stored
    @property
    def room_type(self) -> RoomType:
        return room_type_for_capacity(self.capacity)

    @property
    def available_seats(self) -> int:
        return max(self.capacity - self.occupied_seats, 0)
