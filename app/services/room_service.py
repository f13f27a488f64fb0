import logging

from sqlalchemy import case
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import CapacityError, ConflictError, NotFoundError, ValidationError
from app.db.database import transaction
from app.models.room_models import Room
from app.models.student_profile_models import StudentProfile
from app.schemas.room_schemas import RoomCreate, RoomUpdate

logger = logging.getLogger(__name__)


# -------------------------
# Lookups
# -------------------------
def list_rooms(db: Session) -> list[Room]:
    return db.query(Room).order_by(Room.block, Room.room_number).all()


def get_room_or_404(db: Session, room_id: str, lock: bool = False) -> Room:
    q = db.query(Room).filter(Room.id == room_id)
    if lock:
        q = q.with_for_update()
    room = q.first()
    if not room:
        raise NotFoundError("Room not found")
    return room


def get_profile_or_404(db: Session, student_id: str, lock: bool = False) -> StudentProfile:
    q = db.query(StudentProfile).filter(StudentProfile.user_id == student_id)
    if lock:
        q = q.with_for_update()
    profile = q.first()
    if not profile:
        raise NotFoundError("Student not found")
    return profile


def _ensure_room_number_free(db: Session, room_number: str, exclude_id: str | None = None) -> None:
    q = db.query(Room.id).filter(Room.room_number == room_number)
    if exclude_id:
        q = q.filter(Room.id != exclude_id)
    if q.first():
        raise ConflictError(f"Room number {room_number} already exists")


# -------------------------
# Seat counters
# -------------------------
def release_seat(db: Session, room_id: str) -> None:
    """Decrement a room's occupancy, never below zero."""
    db.query(Room).filter(Room.id == room_id).update(
        {
            Room.occupied_seats: case(
                (Room.occupied_seats > 0, Room.occupied_seats - 1),
                else_=0,
            )
        },
        synchronize_session=False,
    )


def claim_seat(db: Session, room_id: str) -> bool:
    # capacity check and increment in one statement
    claimed = (
        db.query(Room)
        .filter(Room.id == room_id, Room.occupied_seats < Room.capacity)
        .update({Room.occupied_seats: Room.occupied_seats + 1}, synchronize_session=False)
    )
    return claimed == 1


def move_student(db: Session, profile: StudentProfile, new_room_id: str | None) -> None:
    """
    Point a student profile at a new room (or none) and adjust both counters.
    Does not commit: callers run it inside their own transaction.
    """
    new_room_id = new_room_id or None
    current_room_id = profile.room_id

    if new_room_id == current_room_id:
        return

    if new_room_id:
        room = get_room_or_404(db, new_room_id, lock=True)
        if not room.is_active:
            raise ValidationError(f"Room {room.room_number} is not active")
        if room.occupied_seats >= room.capacity:
            raise CapacityError(f"Room {room.room_number} is at full capacity")

    if current_room_id:
        release_seat(db, current_room_id)

    if new_room_id and not claim_seat(db, new_room_id):
        raise CapacityError("Room is at full capacity")

    profile.room_id = new_room_id
    logger.info(
        "Moved student %s from room %s to room %s",
        profile.user_id,
        current_room_id,
        new_room_id,
    )


# -------------------------
# Operations
# -------------------------
def assign_room(db: Session, student_id: str, room_id: str | None) -> StudentProfile:
    with transaction(db):
        profile = get_profile_or_404(db, student_id, lock=True)
        move_student(db, profile, room_id)

    db.refresh(profile)
    return profile


def create_room(db: Session, payload: RoomCreate) -> Room:
    room_number = payload.room_number.strip()
    _ensure_room_number_free(db, room_number)

    room = Room(
        room_number=room_number,
        capacity=payload.capacity,
        occupied_seats=0,
        floor=payload.floor,
        block=payload.block.strip(),
        is_active=payload.is_active,
    )
    db.add(room)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Room number {room_number} already exists")

    db.refresh(room)
    logger.info("Created room %s (capacity %s)", room.room_number, room.capacity)
    return room


def update_room(db: Session, room_id: str, payload: RoomUpdate) -> Room:
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    for field in ("room_number", "block"):
        if field in changes:
            changes[field] = changes[field].strip()

    try:
        with transaction(db):
            room = get_room_or_404(db, room_id, lock=True)

            if "capacity" in changes and changes["capacity"] < room.occupied_seats:
                raise ValidationError("New capacity cannot be less than current occupancy")

            if room.occupied_seats > 0:
                raise ValidationError("Cannot edit room with occupants")

            if "room_number" in changes and changes["room_number"] != room.room_number:
                _ensure_room_number_free(db, changes["room_number"], exclude_id=room.id)

            for field, value in changes.items():
                setattr(room, field, value)
    except IntegrityError:
        raise ConflictError("Room number already exists")

    db.refresh(room)
    logger.info("Updated room %s: %s", room.room_number, sorted(changes))
    return room


def delete_room(db: Session, room_id: str) -> None:
    with transaction(db):
        room = get_room_or_404(db, room_id, lock=True)
        if room.occupied_seats > 0:
            raise ValidationError("Cannot delete room with occupants")
        db.delete(room)

    logger.info("Deleted room %s", room_id)
