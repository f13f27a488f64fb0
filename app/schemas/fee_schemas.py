import re
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.models.fee_structure_models import Semester
from app.models.payment_models import PaymentStatus, PaymentType

DUE_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class FeeStructureCreate(BaseModel):
    year: int = Field(..., ge=2000, le=2100)
    semester: Semester
    single_room_fees: int = Field(..., ge=0)
    double_room_fees: int = Field(..., ge=0)
    triple_room_fees: int = Field(..., ge=0)
    hostel_fees: int = Field(..., ge=0)
    mess_fees: int = Field(..., ge=0)
    due_date: date

    @field_validator("due_date", mode="before")
    def validate_due_date_format(cls, value):
        if isinstance(value, str) and not DUE_DATE_PATTERN.match(value):
            raise ValueError("Due date must be in YYYY-MM-DD format")
        return value


# updates replace the whole structure
FeeStructureUpdate = FeeStructureCreate


class FeeStructureResponse(BaseModel):
    id: str
    year: int
    semester: Semester
    single_room_fees: int
    double_room_fees: int
    triple_room_fees: int
    hostel_fees: int
    mess_fees: int
    due_date: date
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class HostelFeeStatus(BaseModel):
    payment_id: Optional[str] = None
    base_hostel_fee: float
    room_type_fee: float
    total: float
    paid_amount: float
    due_date: date
    status: PaymentStatus


class MessFeeStatus(BaseModel):
    payment_id: Optional[str] = None
    total: float
    paid_amount: float
    due_date: date
    status: PaymentStatus


class FeeResolution(BaseModel):
    student_id: str
    name: str
    roll_no: str
    room_id: Optional[str] = None
    room_number: Optional[str] = None
    room_type: str
    fee_structure_id: Optional[str] = None
    fees_configured: bool
    hostel: HostelFeeStatus
    mess: MessFeeStatus


class PaymentRequest(BaseModel):
    type: PaymentType


class PaymentResponse(BaseModel):
    id: str
    student_id: str
    type: PaymentType
    amount: float
    paid_amount: float
    due_date: date
    status: PaymentStatus

    class Config:
        from_attributes = True
