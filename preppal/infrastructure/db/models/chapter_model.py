from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..base import Base, new_id


class Chapter(Base):
    __tablename__ = "chapters"

    id = Column(String(36), primary_key=True, default=new_id)
    subject_id = Column(String(36), ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    order = Column("order", Integer, nullable=True)  # display sort only, not unique
    pdf_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    subject = relationship("Subject", back_populates="chapters", lazy="joined")
    questions = relationship(
        "Question", back_populates="chapter", cascade="all, delete-orphan"
    )

    @property
    def subject_name(self):
        return self.subject.name if self.subject else None

    @property
    def exam_id(self):
        return self.subject.exam_id if self.subject else None

    @property
    def exam_name(self):
        return self.subject.exam_name if self.subject else None
