from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.models.user_models import User
from app.schemas.query_schemas import QueryCreate, QueryResponse
from app.services.dependencies import get_current_user
from app.services.query_service import create_query, get_student_queries

router = APIRouter(prefix="/student/queries", tags=["Queries (Student)"])


@router.get("", response_model=list[QueryResponse])
def get_my_queries(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_student_queries(db, user)


@router.post("", response_model=QueryResponse, status_code=status.HTTP_201_CREATED)
def raise_query(
    payload: QueryCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return create_query(db=db, student=user, payload=payload)
