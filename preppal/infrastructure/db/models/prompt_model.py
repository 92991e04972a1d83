from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from ..base import Base, new_id


class Prompt(Base):
    __tablename__ = "prompts"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)  # auth service user, no local FK
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
