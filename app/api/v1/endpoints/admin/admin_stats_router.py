from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.models.user_models import User
from app.schemas.stats_schemas import AdminStats
from app.services.dependencies import get_current_admin
from app.services.stats_service import get_admin_stats

router = APIRouter(prefix="/admin/stats", tags=["Dashboard (Admin)"])


@router.get("", response_model=AdminStats)
def get_stats(
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return get_admin_stats(db)
