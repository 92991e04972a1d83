from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..base import Base, new_id


class Exam(Base):
    __tablename__ = "exams"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships with cascade delete
    subjects = relationship(
        "Subject",
        back_populates="exam",
        cascade="all, delete-orphan",
    )
