import uuid
import enum
from datetime import datetime

from sqlalchemy import (
    Column,
    String,
    Numeric,
    Date,
    DateTime,
    ForeignKey,
    Enum as SAEnum,
    CheckConstraint,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.db.database import Base


class PaymentType(str, enum.Enum):
    hostel = "hostel"
    mess = "mess"


class PaymentStatus(str, enum.Enum):
    pending = "pending"
    partial = "partial"
    paid = "paid"


def derive_payment_status(amount: float, paid_amount: float) -> PaymentStatus:
    if paid_amount >= amount:
        return PaymentStatus.paid
    if paid_amount > 0:
        return PaymentStatus.partial
    return PaymentStatus.pending


class Payment(Base):
    __tablename__ = "payments"

    id = Column(
        String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4())
    )
    student_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    type = Column(SAEnum(PaymentType, name="payment_type"), nullable=False)

    amount = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    paid_amount = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)

    # month bucket: always the first day of the month
    due_date = Column(Date, nullable=False)
    status = Column(
        SAEnum(PaymentStatus, name="payment_status"),
        nullable=False,
        default=PaymentStatus.pending,
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    student = relationship("User")

    __table_args__ = (
        CheckConstraint("paid_amount >= 0", name="ck_payment_paid_amount_non_negative"),
        UniqueConstraint("student_id", "type", "due_date", name="uq_payment_student_type_month"),
    )
