from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..base import Base, new_id


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(String(36), primary_key=True, default=new_id)
    exam_id = Column(String(36), ForeignKey("exams.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    syllabus_pdf_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    exam = relationship("Exam", back_populates="subjects", lazy="joined")
    chapters = relationship(
        "Chapter", back_populates="subject", cascade="all, delete-orphan"
    )
    books = relationship(
        "Book", back_populates="subject", cascade="all, delete-orphan"
    )

    @property
    def exam_name(self):
        return self.exam.name if self.exam else None
