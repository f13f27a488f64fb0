import uuid
import enum
from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    Enum as SAEnum,
    UniqueConstraint,
)

from app.db.database import Base


class Semester(str, enum.Enum):
    JAN_MAY = "JAN-MAY"
    JUL_DEC = "JUL-DEC"


class FeeStructure(Base):
    __tablename__ = "fee_structures"

    id = Column(
        String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4())
    )
    year = Column(Integer, nullable=False)
    semester = Column(
        SAEnum(
            Semester,
            name="fee_semester",
            values_callable=lambda enum_cls: [m.value for m in enum_cls],
        ),
        nullable=False,
    )

    single_room_fees = Column(Integer, nullable=False)
    double_room_fees = Column(Integer, nullable=False)
    triple_room_fees = Column(Integer, nullable=False)
    hostel_fees = Column(Integer, nullable=False)
    mess_fees = Column(Integer, nullable=False)

    due_date = Column(Date, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("year", "semester", name="uq_fee_structures_year_semester"),
    )
