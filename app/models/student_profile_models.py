import uuid
from datetime import datetime

from sqlalchemy import Column, String, Date, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship

from app.db.database import Base


class StudentProfile(Base):
    __tablename__ = "student_profiles"

    id = Column(
        String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4())
    )
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    roll_no = Column(String(20), unique=True, nullable=False)
    course_id = Column(String(36), ForeignKey("courses.id"), nullable=False)
    contact_no = Column(String(20), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    address = Column(Text, nullable=False)

    # the student does not own the room; only room assignment writes this
    room_id = Column(String(36), ForeignKey("rooms.id"), nullable=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="student_profile")
    course = relationship("Course", back_populates="students")
    room = relationship("Room", back_populates="students")
