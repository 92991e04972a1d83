from datetime import datetime
from pydantic import BaseModel
from typing import Optional

# ------------------ Book Schemas ------------------

class BookCreate(BaseModel):
    title: str
    author: str
    exam_id: str = ""
    subject_id: str
    link: Optional[str] = None


class BookUpdate(BaseModel):
    title: Optional[str] = None
    author: Optional[str] = None
    exam_id: Optional[str] = None
    subject_id: Optional[str] = None
    link: Optional[str] = None


class BookOut(BaseModel):
    id: str
    subject_id: str
    title: str
    author: str
    link: Optional[str] = None
    pdf_url: Optional[str] = None
    subject_name: Optional[str] = None
    exam_id: Optional[str] = None
    exam_name: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
