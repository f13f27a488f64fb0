from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.db.database import get_db
from app.models.user_models import User
from app.schemas.auth_schemas import LoginSchema, RegisterSchema, TokenResponse, UserResponse
from app.services.auth_service import authenticate_user, register_student, verify_email
from app.services.dependencies import create_user_access_token, get_current_user
from app.utils.logger import logger

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterSchema,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    user = register_student(db=db, payload=payload, settings=settings)
    return {
        "message": "Registration successful. Check your email to verify your account.",
        "user_id": user.id,
    }


@router.get("/verify")
def verify(token: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    verify_email(db=db, token=token)
    return {"message": "Email verified", "verified": True}


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginSchema, db: Session = Depends(get_db)):
    user = authenticate_user(db=db, email=payload.email, password=payload.password)
    logger.info("User %s logged in as %s", user.id, user.role.value)
    return TokenResponse(
        access_token=create_user_access_token(user),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    return user
