from datetime import datetime
from pydantic import BaseModel
from typing import Optional

# ------------------ Chapter Schemas ------------------

class ChapterCreate(BaseModel):
    name: str
    subject_id: str
    exam_id: Optional[str] = None  # form context only, not stored
    description: Optional[str] = None
    order: Optional[int] = None


class ChapterUpdate(BaseModel):
    name: Optional[str] = None
    subject_id: Optional[str] = None
    exam_id: Optional[str] = None
    description: Optional[str] = None
    order: Optional[int] = None


class ChapterOut(BaseModel):
    id: str
    subject_id: str
    name: str
    description: Optional[str] = None
    order: Optional[int] = None
    pdf_url: Optional[str] = None
    subject_name: Optional[str] = None
    exam_id: Optional[str] = None
    exam_name: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
