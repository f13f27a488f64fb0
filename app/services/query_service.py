import logging

from sqlalchemy import asc, desc
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.models.query_models import Query, QueryStatus
from app.models.student_profile_models import StudentProfile
from app.models.user_models import User
from app.schemas.query_schemas import AdminQueryResponse, QueryCreate, QueryUpdate

logger = logging.getLogger(__name__)


# -------------------------
# STUDENT
# -------------------------
def create_query(db: Session, student: User, payload: QueryCreate) -> Query:
    query = Query(
        student_id=student.id,
        title=payload.title.strip(),
        description=payload.description.strip(),
        status=QueryStatus.pending,
    )
    db.add(query)
    db.commit()
    db.refresh(query)
    logger.info("Student %s opened query %s", student.id, query.id)
    return query


def get_student_queries(db: Session, student: User) -> list[Query]:
    return (
        db.query(Query)
        .filter(Query.student_id == student.id)
        .order_by(asc(Query.created_at))
        .all()
    )


# -------------------------
# ADMIN
# -------------------------
def _to_admin_response(query: Query, name: str | None, roll_no: str | None) -> AdminQueryResponse:
    data = AdminQueryResponse.model_validate(query)
    data.student_name = name
    data.student_roll_no = roll_no or "N/A"
    return data


def _admin_query_rows(db: Session):
    return (
        db.query(Query, User.name, StudentProfile.roll_no)
        .join(User, Query.student_id == User.id)
        .outerjoin(StudentProfile, StudentProfile.user_id == User.id)
    )


def get_all_queries(db: Session) -> list[AdminQueryResponse]:
    rows = _admin_query_rows(db).order_by(desc(Query.created_at)).all()
    return [_to_admin_response(q, name, roll_no) for q, name, roll_no in rows]


def get_query_or_404(db: Session, query_id: str) -> Query:
    query = db.query(Query).filter(Query.id == query_id).first()
    if not query:
        raise NotFoundError("Query not found")
    return query


def get_query_detail(db: Session, query_id: str) -> AdminQueryResponse:
    row = _admin_query_rows(db).filter(Query.id == query_id).first()
    if not row:
        raise NotFoundError("Query not found")
    return _to_admin_response(*row)


def update_query(db: Session, query_id: str, payload: QueryUpdate) -> Query:
    query = get_query_or_404(db, query_id)

    response = payload.admin_response.strip() if payload.admin_response is not None else None
    if payload.status == QueryStatus.resolved and not response:
        raise ValidationError("Admin response is required when resolving a query")

    previous = query.status
    query.status = payload.status
    if payload.admin_response is not None:
        query.admin_response = response

    db.commit()
    db.refresh(query)
    logger.info("Query %s moved from %s to %s", query.id, previous.value, query.status.value)
    return query
