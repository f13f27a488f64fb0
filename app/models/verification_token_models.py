from sqlalchemy import Column, String, DateTime

from app.db.database import Base


class VerificationToken(Base):
    __tablename__ = "verification_tokens"

    identifier = Column(String(255), nullable=False, index=True)
    token = Column(String(255), primary_key=True)
    expires = Column(DateTime, nullable=False)
