import jwt
from datetime import datetime, timedelta, timezone
from jwt.exceptions import InvalidTokenError

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.exceptions import AuthError
from app.db.database import get_db
from app.models.user_models import User, UserRole


# HTTPBearer for extracting Bearer token from Authorization header
http_bearer = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    to_encode = data.copy()

    expire = datetime.now(timezone.utc) + (
        expires_delta if expires_delta else timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    to_encode.update({
        "exp": expire,
        "iat": datetime.now(timezone.utc),
    })

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_user_access_token(user: User) -> str:
    return create_access_token(
        data={
            "sub": user.id,
            "role": user.role.value,
            "type": "access",
        }
    )


def verify_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except InvalidTokenError:
        raise AuthError("Could not validate credentials")


def _get_bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    if not credentials or not credentials.scheme or credentials.scheme.lower() != "bearer":
        raise AuthError("Unauthorized")
    token = credentials.credentials
    if not token:
        raise AuthError("Unauthorized")
    return token


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    db: Session = Depends(get_db),
) -> User:
    token = _get_bearer_token(credentials)
    payload = verify_access_token(token)

    if payload.get("type") != "access":
        raise AuthError("Access token required")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthError("Could not validate credentials")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise AuthError("Could not validate credentials")

    return user


def get_current_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != UserRole.admin:
        raise AuthError("Unauthorized")
    return user
