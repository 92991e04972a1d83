from pydantic import BaseModel
from typing import Dict, List, Optional
from .exam_schema import ExamOut
from .subject_schema import SubjectOut
from .chapter_schema import ChapterOut
from .book_schema import BookOut


class ReferenceData(BaseModel):
    exams: List[ExamOut]
    subjects: List[SubjectOut]
    chapters: List[ChapterOut]
    books: Optional[List[BookOut]] = None


class CascadeOut(BaseModel):
    mode: str
    selection: Dict[str, str]
    subjects: List[SubjectOut]
    chapters: List[ChapterOut]


class DashboardCounts(BaseModel):
    exams: int
    subjects: int
    chapters: int
    books: int


class CommandMessage(BaseModel):
    message: str
    dismiss_after: Optional[float] = None


class SetupDocOut(BaseModel):
    file: str
    title: str
    content: str
