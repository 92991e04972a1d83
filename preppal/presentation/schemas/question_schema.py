# question_schema.py
from datetime import datetime
from pydantic import BaseModel
from typing import List, Optional


class QuestionDraft(BaseModel):
    question_text: str
    option_a: str
    option_b: str
    option_c: str
    option_d: str
    correct_option: str
    explaination: Optional[str] = None


class QuestionCreate(QuestionDraft):
    chapter_id: str


class QuestionUpdate(BaseModel):
    chapter_id: Optional[str] = None
    question_text: Optional[str] = None
    option_a: Optional[str] = None
    option_b: Optional[str] = None
    option_c: Optional[str] = None
    option_d: Optional[str] = None
    correct_option: Optional[str] = None
    explaination: Optional[str] = None


class QuestionOut(QuestionDraft):
    id: str
    chapter_id: str
    chapter_name: Optional[str] = None
    subject_id: Optional[str] = None
    subject_name: Optional[str] = None
    exam_id: Optional[str] = None
    exam_name: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ParseRequest(BaseModel):
    json_text: str


class ParsedQuestions(BaseModel):
    questions: List[QuestionDraft]
    count: int


class DestinationIn(BaseModel):
    exam_id: str = ""
    subject_id: str = ""
    chapter_id: str = ""


class BulkSubmitRequest(BaseModel):
    questions: List[QuestionDraft] = []
    destinations: List[DestinationIn] = []
    chapter_id: str = ""  # single selected chapter, used when no destinations are given


class BulkSubmitResponse(BaseModel):
    inserted: int
    chapters: int
    message: str


class SelectionRequest(BaseModel):
    ids: List[str]


class BulkDeleteRequest(SelectionRequest):
    confirm: bool = False


class ExportResponse(BaseModel):
    json_text: str
    count: int
