import logging
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.db.database import transaction
from app.models.course_models import Course
from app.models.payment_models import Payment, PaymentStatus, PaymentType
from app.models.query_models import Query, QueryStatus
from app.models.room_models import Room
from app.models.student_profile_models import StudentProfile
from app.models.user_models import User, UserRole
from app.models.verification_token_models import VerificationToken
from app.schemas.student_schemas import (
    AdminStudentUpdate,
    HostelDetails,
    HostelFeeBreakdown,
    ProfileUpdate,
    StudentDashboard,
    StudentDetail,
    StudentListItem,
)
from app.services.fee_service import first_of_month, resolve_fees
from app.services.room_service import get_profile_or_404, move_student, release_seat

logger = logging.getLogger(__name__)

HOSTEL_FACILITIES = [
    "WiFi",
    "24/7 Power Backup",
    "Hot Water",
    "Laundry Service",
    "Common Room",
    "Reading Room",
    "Cafeteria",
    "Security",
]

HOSTEL_RULES = [
    "Maintain silence in corridors and rooms",
    "No visitors allowed after 8:00 PM",
    "Keep your rooms clean and tidy",
    "No cooking allowed in rooms",
    "Report any maintenance issues immediately",
    "Follow the entry/exit timings strictly",
    "Conserve electricity and water",
    "No ragging or harassment will be tolerated",
]


def _student_rows(db: Session):
    return (
        db.query(User, StudentProfile, Course, Room)
        .join(StudentProfile, StudentProfile.user_id == User.id)
        .join(Course, StudentProfile.course_id == Course.id)
        .outerjoin(Room, StudentProfile.room_id == Room.id)
        .filter(User.role == UserRole.student)
    )


def _to_detail(user: User, profile: StudentProfile, course: Course, room: Room | None) -> StudentDetail:
    return StudentDetail(
        id=user.id,
        name=user.name,
        email=user.email,
        roll_no=profile.roll_no,
        course=course.name,
        course_id=profile.course_id,
        contact_no=profile.contact_no,
        date_of_birth=profile.date_of_birth,
        address=profile.address,
        room_id=profile.room_id,
        room_number=room.room_number if room else None,
    )


# -------------------------
# ADMIN
# -------------------------
def list_students(db: Session, as_of: date | None = None) -> list[StudentListItem]:
    month = first_of_month(as_of or date.today())
    rows = _student_rows(db).order_by(StudentProfile.roll_no).all()

    statuses = {
        (student_id, payment_type): status
        for student_id, payment_type, status in (
            db.query(Payment.student_id, Payment.type, Payment.status)
            .filter(Payment.due_date == month)
            .all()
        )
    }

    return [
        StudentListItem(
            id=user.id,
            name=user.name,
            email=user.email,
            roll_no=profile.roll_no,
            course=course.name,
            course_id=profile.course_id,
            contact_no=profile.contact_no,
            room_id=profile.room_id,
            room_number=room.room_number if room else None,
            hostel_fee_status=statuses.get((user.id, PaymentType.hostel), PaymentStatus.pending),
            mess_fee_status=statuses.get((user.id, PaymentType.mess), PaymentStatus.pending),
        )
        for user, profile, course, room in rows
    ]


def get_student_detail(db: Session, student_id: str) -> StudentDetail:
    row = _student_rows(db).filter(User.id == student_id).first()
    if not row:
        raise NotFoundError("Student not found")
    return _to_detail(*row)


def update_student(db: Session, student_id: str, payload: AdminStudentUpdate) -> StudentDetail:
    try:
        with transaction(db):
            profile = get_profile_or_404(db, student_id, lock=True)
            user = profile.user

            if payload.email != user.email:
                taken = (
                    db.query(User.id)
                    .filter(User.email == payload.email, User.id != user.id)
                    .first()
                )
                if taken:
                    raise ConflictError("Email already used by another user")

            if "room_id" in payload.model_fields_set:
                move_student(db, profile, payload.room_id)

            profile.contact_no = payload.contact_no
            profile.date_of_birth = payload.date_of_birth
            profile.address = payload.address.strip()
            user.name = payload.name.strip()
            user.email = payload.email
    except IntegrityError:
        raise ConflictError("Unique constraint failed")

    return get_student_detail(db, student_id)


def delete_student(db: Session, student_id: str) -> None:
    with transaction(db):
        profile = get_profile_or_404(db, student_id, lock=True)
        user = profile.user
        room_id = profile.room_id

        if room_id:
            release_seat(db, room_id)

        db.query(Payment).filter(Payment.student_id == student_id).delete(synchronize_session=False)
        db.query(Query).filter(Query.student_id == student_id).delete(synchronize_session=False)
        db.query(VerificationToken).filter(
            VerificationToken.identifier == user.email
        ).delete(synchronize_session=False)
        db.delete(profile)
        db.flush()
        db.delete(user)

    logger.info("Deleted student %s (released room %s)", student_id, room_id)


# -------------------------
# STUDENT (self-service)
# -------------------------
def get_own_profile(db: Session, user: User) -> StudentDetail:
    row = (
        db.query(User, StudentProfile, Course, Room)
        .join(StudentProfile, StudentProfile.user_id == User.id)
        .join(Course, StudentProfile.course_id == Course.id)
        .outerjoin(Room, StudentProfile.room_id == Room.id)
        .filter(User.id == user.id)
        .first()
    )
    if not row:
        raise NotFoundError("Student profile not found")
    return _to_detail(*row)


def update_own_profile(db: Session, user: User, payload: ProfileUpdate) -> StudentDetail:
    profile = db.query(StudentProfile).filter(StudentProfile.user_id == user.id).first()
    if not profile:
        raise NotFoundError("Student profile not found")

    if not db.query(Course.id).filter(Course.id == payload.course_id).first():
        raise ValidationError("Invalid course")

    user.name = payload.name.strip()
    profile.course_id = payload.course_id
    profile.contact_no = payload.contact_no.strip()
    profile.date_of_birth = payload.date_of_birth
    profile.address = payload.address.strip()
    db.commit()

    return get_own_profile(db, user)


def get_dashboard(db: Session, user: User, as_of: date | None = None) -> StudentDashboard:
    profile = get_own_profile(db, user)
    fees = resolve_fees(db, user.id, as_of)

    pending_queries = (
        db.query(Query)
        .filter(Query.student_id == user.id, Query.status == QueryStatus.pending)
        .count()
    )

    return StudentDashboard(
        name=profile.name,
        email=profile.email,
        roll_no=profile.roll_no,
        course=profile.course,
        contact_no=profile.contact_no,
        room_number=profile.room_number,
        room_type=fees.room_type,
        # hide the panels rather than show an unconfigured zero
        hostel_fees=fees.hostel if fees.fees_configured else None,
        mess_charges=fees.mess if fees.fees_configured else None,
        pending_queries=pending_queries,
    )


def get_hostel_details(db: Session, user: User) -> HostelDetails:
    profile = db.query(StudentProfile).filter(StudentProfile.user_id == user.id).first()
    if not profile:
        raise NotFoundError("Student profile not found")

    if not profile.room_id:
        return HostelDetails(has_room=False, message="No room assigned")

    room = profile.room
    fees = resolve_fees(db, user.id)

    return HostelDetails(
        has_room=True,
        room_number=room.room_number,
        capacity=room.capacity,
        occupied_seats=room.occupied_seats,
        floor=room.floor,
        block=room.block,
        room_type=fees.room_type,
        fees=HostelFeeBreakdown(
            base_hostel_fee=fees.hostel.base_hostel_fee,
            room_type_fee=fees.hostel.room_type_fee,
            total_fees=fees.hostel.total,
        ),
        facilities=HOSTEL_FACILITIES,
        rules=HOSTEL_RULES,
    )


def list_courses(db: Session) -> list[Course]:
    return db.query(Course).order_by(Course.name).all()
