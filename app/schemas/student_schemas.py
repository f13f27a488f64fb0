from datetime import date
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.models.payment_models import PaymentStatus
from app.schemas.auth_schemas import CONTACT_NO_PATTERN
from app.schemas.fee_schemas import HostelFeeStatus, MessFeeStatus


class CourseResponse(BaseModel):
    id: str
    name: str

    class Config:
        from_attributes = True


class StudentListItem(BaseModel):
    id: str
    name: str
    email: EmailStr
    roll_no: str
    course: Optional[str] = None
    course_id: str
    contact_no: str
    room_id: Optional[str] = None
    room_number: Optional[str] = None
    hostel_fee_status: PaymentStatus
    mess_fee_status: PaymentStatus


class StudentDetail(BaseModel):
    id: str
    name: str
    email: EmailStr
    roll_no: str
    course: Optional[str] = None
    course_id: str
    contact_no: str
    date_of_birth: date
    address: str
    room_id: Optional[str] = None
    room_number: Optional[str] = None


class AdminStudentUpdate(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    contact_no: str
    date_of_birth: date
    address: str = Field(..., min_length=10)
    room_id: Optional[str] = None

    @field_validator("contact_no")
    def validate_contact_no(cls, value):
        value = value.strip()
        if not CONTACT_NO_PATTERN.match(value):
            raise ValueError("Contact number must be 10 digits")
        return value


class ProfileUpdate(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    course_id: str = Field(..., min_length=1)
    contact_no: str
    date_of_birth: date
    address: str = Field(..., min_length=10)

    @field_validator("contact_no")
    def validate_contact_no(cls, value):
        value = value.strip()
        if not CONTACT_NO_PATTERN.match(value):
            raise ValueError("Contact number must be 10 digits")
        return value


class StudentDashboard(BaseModel):
    name: str
    email: EmailStr
    roll_no: str
    course: Optional[str] = None
    contact_no: str
    room_number: Optional[str] = None
    room_type: str
    hostel_fees: Optional[HostelFeeStatus] = None
    mess_charges: Optional[MessFeeStatus] = None
    pending_queries: int


class HostelFeeBreakdown(BaseModel):
    base_hostel_fee: float
    room_type_fee: float
    total_fees: float


class HostelDetails(BaseModel):
    has_room: bool
    message: Optional[str] = None
    room_number: Optional[str] = None
    capacity: Optional[int] = None
    occupied_seats: Optional[int] = None
    floor: Optional[int] = None
    block: Optional[str] = None
    room_type: Optional[str] = None
    fees: Optional[HostelFeeBreakdown] = None
    facilities: list[str] = []
    rules: list[str] = []
