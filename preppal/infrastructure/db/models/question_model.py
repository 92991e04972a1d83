from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..base import Base, new_id


class Question(Base):
    __tablename__ = "questions"

    id = Column(String(36), primary_key=True, default=new_id)
    chapter_id = Column(String(36), ForeignKey("chapters.id", ondelete="CASCADE"), nullable=False, index=True)
    question_text = Column(Text, nullable=False)
    option_a = Column(Text, nullable=False)
    option_b = Column(Text, nullable=False)
    option_c = Column(Text, nullable=False)
    option_d = Column(Text, nullable=False)
    correct_option = Column(String, nullable=False)  # "A".."D", presence checked only
    explaination = Column(Text, nullable=True)  # column name kept as deployed
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    chapter = relationship("Chapter", back_populates="questions", lazy="joined")

    @property
    def chapter_name(self):
        return self.chapter.name if self.chapter else None

    @property
    def subject_id(self):
        return self.chapter.subject_id if self.chapter else None

    @property
    def subject_name(self):
        return self.chapter.subject_name if self.chapter else None

    @property
    def exam_id(self):
        return self.chapter.exam_id if self.chapter else None

    @property
    def exam_name(self):
        return self.chapter.exam_name if self.chapter else None
