import logging
from datetime import date, timedelta

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import InternalError, NotFoundError
from app.models.fee_structure_models import FeeStructure
from app.models.payment_models import Payment, PaymentStatus, PaymentType, derive_payment_status
from app.models.room_models import Room, RoomType
from app.models.student_profile_models import StudentProfile
from app.models.user_models import User
from app.schemas.fee_schemas import FeeResolution, HostelFeeStatus, MessFeeStatus

logger = logging.getLogger(__name__)

NOT_ASSIGNED = "Not Assigned"

# last resort when no fee structure has been published yet
DEFAULT_ROOM_TYPE_FEES = {
    RoomType.single: 15000,
    RoomType.double: 12000,
    RoomType.triple: 10000,
}
DEFAULT_HOSTEL_FEE = 8000
DEFAULT_MESS_FEE = 6000

PLACEHOLDER_DUE_DAYS = 7


def first_of_month(value: date) -> date:
    return value.replace(day=1)


def get_latest_fee_structure(db: Session) -> FeeStructure | None:
    return (
        db.query(FeeStructure)
        .order_by(desc(FeeStructure.year), desc(FeeStructure.created_at))
        .first()
    )


def room_type_fee(structure: FeeStructure | None, room_type: RoomType | None) -> int:
    if room_type is None:
        return 0
    if structure is None:
        return DEFAULT_ROOM_TYPE_FEES[room_type]
    return {
        RoomType.single: structure.single_room_fees,
        RoomType.double: structure.double_room_fees,
        RoomType.triple: structure.triple_room_fees,
    }[room_type] or 0


def get_month_payment(
    db: Session, student_id: str, payment_type: PaymentType, month: date
) -> Payment | None:
    return (
        db.query(Payment)
        .filter(
            Payment.student_id == student_id,
            Payment.type == payment_type,
            Payment.due_date == first_of_month(month),
        )
        .first()
    )


def _load_student(db: Session, student_id: str) -> tuple[User, StudentProfile, Room | None]:
    row = (
        db.query(User, StudentProfile, Room)
        .join(StudentProfile, StudentProfile.user_id == User.id)
        .outerjoin(Room, StudentProfile.room_id == Room.id)
        .filter(User.id == student_id)
        .first()
    )
    if not row:
        raise NotFoundError("Student not found")
    return row


def resolve_fees(db: Session, student_id: str, as_of: date | None = None) -> FeeResolution:
    as_of = as_of or date.today()
    user, profile, room = _load_student(db, student_id)

    room_type = room.room_type if room else None
    structure = get_latest_fee_structure(db)
    if structure is None:
        logger.debug("No fee structure found, using default fees for student %s", student_id)

    base_hostel_fee = structure.hostel_fees if structure else DEFAULT_HOSTEL_FEE
    type_fee = room_type_fee(structure, room_type)

    hostel_payment = get_month_payment(db, student_id, PaymentType.hostel, as_of)
    mess_payment = get_month_payment(db, student_id, PaymentType.mess, as_of)

    if structure:
        mess_total = structure.mess_fees
    elif mess_payment:
        mess_total = mess_payment.amount
    else:
        mess_total = DEFAULT_MESS_FEE

    placeholder_due = date.today() + timedelta(days=PLACEHOLDER_DUE_DAYS)

    hostel = HostelFeeStatus(
        payment_id=hostel_payment.id if hostel_payment else None,
        base_hostel_fee=base_hostel_fee,
        room_type_fee=type_fee,
        total=base_hostel_fee + type_fee,
        paid_amount=hostel_payment.paid_amount if hostel_payment else 0,
        due_date=hostel_payment.due_date if hostel_payment else placeholder_due,
        status=hostel_payment.status if hostel_payment else PaymentStatus.pending,
    )
    mess = MessFeeStatus(
        payment_id=mess_payment.id if mess_payment else None,
        total=mess_total,
        paid_amount=mess_payment.paid_amount if mess_payment else 0,
        due_date=mess_payment.due_date if mess_payment else placeholder_due,
        status=mess_payment.status if mess_payment else PaymentStatus.pending,
    )

    return FeeResolution(
        student_id=user.id,
        name=user.name,
        roll_no=profile.roll_no,
        room_id=room.id if room else None,
        room_number=room.room_number if room else None,
        room_type=room_type.value if room_type else NOT_ASSIGNED,
        fee_structure_id=structure.id if structure else None,
        fees_configured=bool(structure or hostel_payment or mess_payment),
        hostel=hostel,
        mess=mess,
    )


def record_full_payment(
    db: Session,
    student_id: str,
    payment_type: PaymentType,
    as_of: date | None = None,
    retry: bool = True,
) -> Payment:
    as_of = as_of or date.today()
    month = first_of_month(as_of)

    payment = (
        db.query(Payment)
        .filter(
            Payment.student_id == student_id,
            Payment.type == payment_type,
            Payment.due_date == month,
        )
        .with_for_update()
        .first()
    )

    if payment is None:
        fees = resolve_fees(db, student_id, as_of)
        amount = fees.hostel.total if payment_type == PaymentType.hostel else fees.mess.total
        payment = Payment(
            student_id=student_id,
            type=payment_type,
            amount=amount,
            paid_amount=0,
            due_date=month,
            status=PaymentStatus.pending,
        )
        db.add(payment)

    payment.paid_amount = payment.amount
    payment.status = derive_payment_status(payment.amount, payment.paid_amount)

    try:
        db.commit()
    except IntegrityError:
        # a concurrent request created the month's row first
        db.rollback()
        if not retry:
            logger.error("Could not record %s payment for student %s", payment_type.value, student_id)
            raise InternalError("Could not record payment")
        return record_full_payment(db, student_id, payment_type, as_of, retry=False)

    db.refresh(payment)
    logger.info(
        "Recorded %s payment of %s for student %s (%s)",
        payment_type.value,
        payment.paid_amount,
        student_id,
        month.isoformat(),
    )
    return payment
