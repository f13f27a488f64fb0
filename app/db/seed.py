"""
Seed reference data: the course list and one pre-verified admin account.

    ADMIN_EMAIL=admin@hostel.com ADMIN_PASSWORD=... python -m app.db.seed
"""
import os
from datetime import datetime

from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.db.base import Base, Course, User
from app.db.database import create_db_engine, create_session_factory
from app.models.user_models import UserRole
from app.utils.hashing import get_password_hash
from app.utils.logger import configure_logging, logger

COURSE_NAMES = [
    "B.Tech IT",
    "B.Tech IT-BI",
    "B.Tech ECE",
    "M.Tech IT",
    "M.Tech BI",
    "M.Tech ECE",
    "MBA",
    "PHD",
]


def seed_courses(db: Session, names: list[str] = COURSE_NAMES) -> int:
    existing = {name for (name,) in db.query(Course.name).all()}
    added = 0
    for name in names:
        if name in existing:
            continue
        db.add(Course(name=name))
        added += 1
    db.commit()
    return added


def seed_admin(db: Session, email: str, password: str, name: str = "Admin") -> User:
    admin = db.query(User).filter(User.email == email).first()
    if admin:
        return admin

    admin = User(
        name=name,
        email=email,
        password=get_password_hash(password),
        role=UserRole.admin,
        email_verified_at=datetime.utcnow(),
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


def main():
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    email = os.getenv("ADMIN_EMAIL", "admin@hostel.com")
    password = os.getenv("ADMIN_PASSWORD")
    if not password:
        raise RuntimeError("ADMIN_PASSWORD is missing in .env")

    engine = create_db_engine(settings.DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    SessionLocal = create_session_factory(engine)

    with SessionLocal() as db:
        added = seed_courses(db)
        logger.info("Seeded %s courses", added)
        admin = seed_admin(db, email, password)
        logger.info("Admin account ready: %s", admin.email)

    engine.dispose()


if __name__ == "__main__":
    main()
