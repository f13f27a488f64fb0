from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.models.user_models import User
from app.schemas.fee_schemas import FeeResolution, PaymentRequest, PaymentResponse
from app.schemas.student_schemas import HostelDetails, ProfileUpdate, StudentDashboard, StudentDetail
from app.services.dependencies import get_current_user
from app.services.fee_service import record_full_payment, resolve_fees
from app.services.student_service import (
    get_dashboard,
    get_hostel_details,
    get_own_profile,
    update_own_profile,
)

router = APIRouter(prefix="/student", tags=["Student"])


@router.get("/dashboard", response_model=StudentDashboard)
def dashboard(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_dashboard(db, user)


@router.get("/hostel", response_model=HostelDetails)
def hostel(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_hostel_details(db, user)


@router.get("/profile", response_model=StudentDetail)
def profile(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_own_profile(db, user)


@router.put("/profile", response_model=StudentDetail)
def edit_profile(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return update_own_profile(db, user, payload)


@router.get("/fees", response_model=FeeResolution)
def my_fees(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return resolve_fees(db, user.id)


@router.post("/fees/pay", response_model=PaymentResponse)
def pay_fees(
    payload: PaymentRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return record_full_payment(db=db, student_id=user.id, payment_type=payload.type)
