from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.models.user_models import User
from app.schemas.room_schemas import RoomCreate, RoomResponse, RoomUpdate
from app.services.dependencies import get_current_admin
from app.services.room_service import (
    create_room,
    delete_room,
    get_room_or_404,
    list_rooms,
    update_room,
)

router = APIRouter(prefix="/admin/rooms", tags=["Rooms (Admin)"])


@router.get("", response_model=list[RoomResponse])
def get_rooms(
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return list_rooms(db)


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def add_room(
    payload: RoomCreate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return create_room(db=db, payload=payload)


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(
    room_id: str,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return get_room_or_404(db, room_id)


@router.patch("/{room_id}", response_model=RoomResponse)
def edit_room(
    room_id: str,
    payload: RoomUpdate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return update_room(db=db, room_id=room_id, payload=payload)


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_room(
    room_id: str,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    delete_room(db=db, room_id=room_id)
    return None
