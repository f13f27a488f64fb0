from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.schemas.student_schemas import CourseResponse
from app.services.student_service import list_courses

router = APIRouter(prefix="/courses", tags=["Courses"])


@router.get("", response_model=list[CourseResponse])
def get_courses(db: Session = Depends(get_db)):
    return list_courses(db)
