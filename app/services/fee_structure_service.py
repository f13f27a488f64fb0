import logging
from datetime import date, timedelta

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.fee_structure_models import FeeStructure, Semester
from app.schemas.fee_schemas import FeeStructureCreate, FeeStructureUpdate

logger = logging.getLogger(__name__)

MIN_DUE_DATE_LEAD_DAYS = 10


def _duplicate_message(year: int, semester: Semester) -> str:
    return f"A fee structure for {year} ({semester.value}) already exists"


def _validate_due_date(due_date: date, today: date | None = None) -> None:
    earliest = (today or date.today()) + timedelta(days=MIN_DUE_DATE_LEAD_DAYS)
    if due_date < earliest:
        raise ValidationError(
            f"Due date must be at least {MIN_DUE_DATE_LEAD_DAYS} days from today "
            f"(on or after {earliest.isoformat()})"
        )


def _ensure_unique_period(
    db: Session, year: int, semester: Semester, exclude_id: str | None = None
) -> None:
    q = db.query(FeeStructure.id).filter(
        FeeStructure.year == year,
        FeeStructure.semester == semester,
    )
    if exclude_id:
        q = q.filter(FeeStructure.id != exclude_id)
    if q.first():
        raise ConflictError(_duplicate_message(year, semester))


def list_fee_structures(db: Session) -> list[FeeStructure]:
    return (
        db.query(FeeStructure)
        .order_by(desc(FeeStructure.year), desc(FeeStructure.created_at))
        .all()
    )


def get_fee_structure_or_404(db: Session, fee_structure_id: str) -> FeeStructure:
    structure = db.query(FeeStructure).filter(FeeStructure.id == fee_structure_id).first()
    if not structure:
        raise NotFoundError("Fee structure not found")
    return structure


def create_fee_structure(db: Session, payload: FeeStructureCreate) -> FeeStructure:
    _validate_due_date(payload.due_date)
    _ensure_unique_period(db, payload.year, payload.semester)

    structure = FeeStructure(**payload.model_dump())
    db.add(structure)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(_duplicate_message(payload.year, payload.semester))

    db.refresh(structure)
    logger.info("Created fee structure %s %s", structure.year, structure.semester.value)
    return structure


def update_fee_structure(
    db: Session, fee_structure_id: str, payload: FeeStructureUpdate
) -> FeeStructure:
    structure = get_fee_structure_or_404(db, fee_structure_id)

    _validate_due_date(payload.due_date)
    _ensure_unique_period(db, payload.year, payload.semester, exclude_id=structure.id)

    for field, value in payload.model_dump().items():
        setattr(structure, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(_duplicate_message(payload.year, payload.semester))

    db.refresh(structure)
    logger.info("Updated fee structure %s", structure.id)
    return structure


def delete_fee_structure(db: Session, fee_structure_id: str) -> None:
    # recorded payments keep their amounts
    structure = get_fee_structure_or_404(db, fee_structure_id)
    db.delete(structure)
    db.commit()
    logger.info("Deleted fee structure %s", fee_structure_id)
