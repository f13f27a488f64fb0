import logging
import secrets
from datetime import datetime, timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.exceptions import AuthError, ConflictError, ValidationError
from app.db.database import transaction
from app.models.course_models import Course
from app.models.student_profile_models import StudentProfile
from app.models.user_models import User, UserRole
from app.models.verification_token_models import VerificationToken
from app.schemas.auth_schemas import RegisterSchema
from app.services.email_service import build_verification_url, send_verification_email
from app.utils.hashing import get_password_hash, verify_password

logger = logging.getLogger(__name__)


def register_student(db: Session, payload: RegisterSchema, settings: Settings) -> User:
    if db.query(User.id).filter(User.email == payload.email).first():
        raise ConflictError("Email already registered")

    if db.query(StudentProfile.id).filter(StudentProfile.roll_no == payload.roll_no).first():
        raise ConflictError("Roll number already registered")

    if not db.query(Course.id).filter(Course.id == payload.course_id).first():
        raise ValidationError("Invalid course")

    token = secrets.token_urlsafe(32)
    user = User(
        name=payload.name.strip(),
        email=payload.email,
        password=get_password_hash(payload.password),
        role=UserRole.student,
        email_verified_at=None,
    )

    try:
        with transaction(db):
            db.add(user)
            db.flush()
            db.add(StudentProfile(
                user_id=user.id,
                roll_no=payload.roll_no,
                course_id=payload.course_id,
                contact_no=payload.contact_no,
                date_of_birth=payload.date_of_birth,
                address=payload.address.strip(),
            ))
            db.add(VerificationToken(
                identifier=user.email,
                token=token,
                expires=datetime.utcnow() + timedelta(hours=settings.VERIFICATION_TOKEN_EXPIRE_HOURS),
            ))
    except IntegrityError:
        raise ConflictError("Email or roll number already registered")

    db.refresh(user)
    logger.info("Registered student %s (%s)", user.id, payload.roll_no)

    # registration stands even if the email cannot be delivered
    try:
        send_verification_email(settings, user.email, build_verification_url(settings, token))
    except Exception:
        logger.exception("Failed to send verification email to %s", user.email)

    return user


def verify_email(db: Session, token: str) -> User:
    with transaction(db):
        record = (
            db.query(VerificationToken)
            .filter(
                VerificationToken.token == token,
                VerificationToken.expires > datetime.utcnow(),
            )
            .with_for_update()
            .first()
        )
        if not record:
            raise ValidationError("Invalid or expired verification token")

        user = db.query(User).filter(User.email == record.identifier).first()
        if not user:
            raise ValidationError("Invalid or expired verification token")

        user.email_verified_at = datetime.utcnow()
        db.delete(record)

    db.refresh(user)
    logger.info("Verified email for user %s", user.id)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password):
        raise AuthError("Invalid credentials")

    if not user.email_verified_at:
        raise AuthError("Email not verified")

    return user
