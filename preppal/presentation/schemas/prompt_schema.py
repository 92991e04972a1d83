from datetime import datetime
from pydantic import BaseModel
from typing import Optional


class PromptCreate(BaseModel):
    title: str
    content: str


class PromptUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class PromptOut(BaseModel):
    id: str
    user_id: str
    title: str
    content: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
