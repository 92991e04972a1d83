from datetime import datetime
from pydantic import BaseModel
from typing import Optional

# ------------------ Exam Schemas ------------------

class ExamCreate(BaseModel):
    name: str


class ExamOut(BaseModel):
    id: str
    name: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
