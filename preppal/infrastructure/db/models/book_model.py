from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..base import Base, new_id


class Book(Base):
    __tablename__ = "books"

    id = Column(String(36), primary_key=True, default=new_id)
    subject_id = Column(String(36), ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    author = Column(String, nullable=False)
    link = Column(String, nullable=True)
    pdf_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    subject = relationship("Subject", back_populates="books", lazy="joined")

    @property
    def subject_name(self):
        return self.subject.name if self.subject else None

    @property
    def exam_id(self):
        return self.subject.exam_id if self.subject else None

    @property
    def exam_name(self):
        return self.subject.exam_name if self.subject else None
