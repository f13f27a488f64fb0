import re
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, constr, field_validator

from app.models.user_models import UserRole

ROLL_NO_PATTERN = re.compile(r"^[A-Z]{3}\d{7}$")
CONTACT_NO_PATTERN = re.compile(r"^\d{10}$")


class RegisterSchema(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: constr(min_length=6)
    roll_no: str
    course_id: str = Field(..., min_length=1)
    contact_no: str
    date_of_birth: date
    address: str = Field(..., min_length=10)

    @field_validator("roll_no")
    def validate_roll_no(cls, value):
        value = value.strip()
        if not ROLL_NO_PATTERN.match(value):
            raise ValueError("Roll number must be 3 capital letters followed by 7 digits")
        return value

    @field_validator("contact_no")
    def validate_contact_no(cls, value):
        value = value.strip()
        if not CONTACT_NO_PATTERN.match(value):
            raise ValueError("Contact number must be 10 digits")
        return value


class LoginSchema(BaseModel):
    email: EmailStr
    password: constr(min_length=1)


class UserResponse(BaseModel):
    id: str
    name: str
    email: EmailStr
    role: UserRole
    email_verified_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
