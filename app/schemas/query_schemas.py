from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.models.query_models import QueryStatus


class QueryCreate(BaseModel):
    title: str = Field(..., min_length=5, max_length=255)
    description: str = Field(..., min_length=20)


class QueryUpdate(BaseModel):
    status: QueryStatus
    admin_response: Optional[str] = None


class QueryResponse(BaseModel):
    id: str
    student_id: str
    title: str
    description: str
    status: QueryStatus
    admin_response: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AdminQueryResponse(QueryResponse):
    student_name: Optional[str] = None
    student_roll_no: Optional[str] = None
