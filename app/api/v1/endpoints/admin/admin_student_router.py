from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.models.user_models import User
from app.schemas.fee_schemas import FeeResolution, PaymentRequest, PaymentResponse
from app.schemas.room_schemas import RoomAssignment
from app.schemas.student_schemas import AdminStudentUpdate, StudentDetail, StudentListItem
from app.services.dependencies import get_current_admin
from app.services.fee_service import record_full_payment, resolve_fees
from app.services.room_service import assign_room
from app.services.student_service import (
    delete_student,
    get_student_detail,
    list_students,
    update_student,
)

router = APIRouter(prefix="/admin/students", tags=["Students (Admin)"])


@router.get("", response_model=list[StudentListItem])
def get_students(
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return list_students(db)


@router.get("/{student_id}", response_model=StudentDetail)
def get_student(
    student_id: str,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return get_student_detail(db, student_id)


@router.put("/{student_id}", response_model=StudentDetail)
def edit_student(
    student_id: str,
    payload: AdminStudentUpdate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return update_student(db=db, student_id=student_id, payload=payload)


@router.put("/{student_id}/room", response_model=StudentDetail)
def change_room(
    student_id: str,
    payload: RoomAssignment,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    assign_room(db=db, student_id=student_id, room_id=payload.room_id)
    return get_student_detail(db, student_id)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_student(
    student_id: str,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    delete_student(db=db, student_id=student_id)
    return None


@router.get("/{student_id}/fees", response_model=FeeResolution)
def get_student_fees(
    student_id: str,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return resolve_fees(db, student_id)


@router.put("/{student_id}/fees", response_model=PaymentResponse)
def settle_student_fees(
    student_id: str,
    payload: PaymentRequest,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return record_full_payment(db=db, student_id=student_id, payment_type=payload.type)
