from datetime import datetime
from pydantic import BaseModel
from typing import Optional

# ------------------ Subject Schemas ------------------

class SubjectCreate(BaseModel):
    name: str
    exam_id: str


class SubjectUpdate(BaseModel):
    name: Optional[str] = None
    exam_id: Optional[str] = None


class SubjectOut(BaseModel):
    id: str
    exam_id: str
    name: str
    syllabus_pdf_url: Optional[str] = None
    exam_name: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
