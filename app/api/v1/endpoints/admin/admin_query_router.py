from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.models.user_models import User
from app.schemas.query_schemas import AdminQueryResponse, QueryUpdate
from app.services.dependencies import get_current_admin
from app.services.query_service import get_all_queries, get_query_detail, update_query

router = APIRouter(prefix="/admin/queries", tags=["Queries (Admin)"])


@router.get("", response_model=list[AdminQueryResponse])
def get_queries(
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return get_all_queries(db)


@router.get("/{query_id}", response_model=AdminQueryResponse)
def get_query(
    query_id: str,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return get_query_detail(db, query_id)


@router.patch("/{query_id}", response_model=AdminQueryResponse)
def respond_to_query(
    query_id: str,
    payload: QueryUpdate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    update_query(db=db, query_id=query_id, payload=payload)
    return get_query_detail(db, query_id)
