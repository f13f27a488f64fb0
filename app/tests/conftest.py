import os

os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("SMTP_HOST", None)

from datetime import date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from app.db.base import Base
from app.db.database import create_db_engine, create_session_factory
from app.main import create_app
from app.models.course_models import Course
from app.models.fee_structure_models import FeeStructure, Semester
from app.models.room_models import Room
from app.models.student_profile_models import StudentProfile
from app.models.user_models import User, UserRole
from app.services.dependencies import create_user_access_token
from app.utils.hashing import get_password_hash

PASSWORD = "secret123"
PASSWORD_HASH = get_password_hash(PASSWORD)


# ----------------------------
# Database / client
# ----------------------------
@pytest.fixture
def db():
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(tmp_path):
    app = create_app(f"sqlite:///{tmp_path / 'hostel.db'}")
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api_db(client):
    session = client.app.state.SessionLocal()
    try:
        yield session
    finally:
        session.close()


# ----------------------------
# Factories
# ----------------------------
def make_course(db, name="B.Tech IT") -> Course:
    course = Course(name=name)
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


def make_admin(db, email="admin@hostel.com") -> User:
    admin = User(
        name="Admin",
        email=email,
        password=PASSWORD_HASH,
        role=UserRole.admin,
        email_verified_at=datetime.utcnow(),
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


def make_room(db, room_number="101", capacity=2, occupied_seats=0, is_active=True) -> Room:
    room = Room(
        room_number=room_number,
        capacity=capacity,
        occupied_seats=occupied_seats,
        floor=1,
        block="A",
        is_active=is_active,
    )
    db.add(room)
    db.commit()
    db.refresh(room)
    return room


def make_student(db, course, roll_no="ABC1234567", email=None, room=None, verified=True) -> User:
    user = User(
        name=f"Student {roll_no}",
        email=email or f"{roll_no.lower()}@example.com",
        password=PASSWORD_HASH,
        role=UserRole.student,
        email_verified_at=datetime.utcnow() if verified else None,
    )
    db.add(user)
    db.flush()
    db.add(StudentProfile(
        user_id=user.id,
        roll_no=roll_no,
        course_id=course.id,
        contact_no="9876543210",
        date_of_birth=date(2003, 5, 17),
        address="12 Hostel Road, Campus",
        room_id=room.id if room else None,
    ))
    if room:
        room.occupied_seats += 1
    db.commit()
    db.refresh(user)
    return user


def make_fee_structure(db, year=2025, semester=Semester.JUL_DEC, **fees) -> FeeStructure:
    values = {
        "single_room_fees": 15000,
        "double_room_fees": 12000,
        "triple_room_fees": 10000,
        "hostel_fees": 8000,
        "mess_fees": 6000,
    }
    values.update(fees)
    structure = FeeStructure(
        year=year,
        semester=semester,
        due_date=date.today() + timedelta(days=30),
        **values,
    )
    db.add(structure)
    db.commit()
    db.refresh(structure)
    return structure


def auth_header(user: User) -> dict:
    return {"Authorization": f"Bearer {create_user_access_token(user)}"}
