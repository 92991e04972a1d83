import io
import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

import pandas as pd
from sqlalchemy.orm import Session

from preppal.application.errors import DuplicateDestinationError, ValidationError
from preppal.infrastructure.repositories.question_repo_impl import bulk_insert_questions
from preppal.presentation.schemas.question_schema import QuestionDraft

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("question_text", "option_a", "option_b", "option_c", "option_d", "correct_option")
CONTENT_FIELDS = REQUIRED_FIELDS + ("explaination",)

MISSING_FIELDS_MESSAGE = "All questions must have question text, options A-D, and correct option"

EXAMPLE_QUESTIONS = [
    {
        "question_text": "Which quantity stays constant for a body in uniform circular motion?",
        "option_a": "Velocity",
        "option_b": "Speed",
        "option_c": "Acceleration",
        "option_d": "Displacement",
        "correct_option": "B",
        "explaination": "Only the magnitude of velocity is unchanged; its direction keeps turning.",
    },
    {
        "question_text": "What is the SI unit of impulse?",
        "option_a": "N m",
        "option_b": "J",
        "option_c": "N s",
        "option_d": "W",
        "correct_option": "C",
        "explaination": "Impulse is force multiplied by time.",
    },
]


def _is_blank(value: Any) -> bool:
    # Presence only: whitespace counts as a value
    if value is None or value == "":
        return True
    return isinstance(value, float) and pd.isna(value)


def _to_drafts(items: Iterable[Any]) -> List[QuestionDraft]:
    drafts = []
    for item in items:
        if not isinstance(item, dict) or any(_is_blank(item.get(name)) for name in REQUIRED_FIELDS):
            raise ValidationError(MISSING_FIELDS_MESSAGE)
        explanation = item.get("explaination")
        drafts.append(
            QuestionDraft(
                **{name: str(item[name]) for name in REQUIRED_FIELDS},
                explaination=None if _is_blank(explanation) else str(explanation),
            )
        )
    return drafts


def parse_questions(json_text: str) -> List[QuestionDraft]:
    """
    Parses a pasted JSON array of questions for review. Nothing is written;
    the drafts are held until they are submitted to one or more chapters.
    """
    try:
        parsed = json.loads(json_text)
    except (TypeError, ValueError) as e:
        logger.warning(f"Rejected question import, invalid JSON: {e}")
        raise ValidationError("Invalid JSON format")

    if not isinstance(parsed, list):
        raise ValidationError("Input must be a JSON array")

    drafts = _to_drafts(parsed)
    logger.info(f"Parsed {len(drafts)} questions for review")
    return drafts


def parse_question_file(file_content: bytes, filename: str) -> List[QuestionDraft]:
    """Same checks as `parse_questions`, for uploaded .json, .csv or .xlsx files."""
    name = filename.lower()
    if name.endswith(".json"):
        return parse_questions(file_content.decode("utf-8-sig"))

    try:
        if name.endswith(".csv"):
            df = pd.read_csv(io.BytesIO(file_content), dtype=str, keep_default_na=False)
        elif name.endswith((".xlsx", ".xls")):
            df = pd.read_excel(io.BytesIO(file_content), dtype=str)
        else:
            raise ValidationError("Unsupported file format. Please upload JSON, CSV or XLSX.")
    except ValidationError:
        raise
    except Exception as e:
        logger.error(f"Could not read question file {filename}: {e}", exc_info=True)
        raise ValidationError(f"Could not read {filename}: {e}")

    # Clean column names
    df.columns = [str(c).strip().lower() for c in df.columns]
    for col in REQUIRED_FIELDS:
        if col not in df.columns:
            raise ValidationError(f"Missing required column: {col}")

    columns = [c for c in CONTENT_FIELDS if c in df.columns]
    records = df[columns].to_dict(orient="records")
    drafts = _to_drafts(records)
    logger.info(f"Parsed {len(drafts)} questions from {filename}")
    return drafts


@dataclass(frozen=True)
class Destination:
    exam_id: str
    subject_id: str
    chapter_id: str


class DestinationSet:
    """Chapters chosen as targets for one bulk insert, unique by chapter id."""

    def __init__(self):
        self._destinations: List[Destination] = []

    def __len__(self) -> int:
        return len(self._destinations)

    def __iter__(self):
        return iter(self._destinations)

    @property
    def chapter_ids(self) -> List[str]:
        return [d.chapter_id for d in self._destinations]

    def add(self, exam_id: str, subject_id: str, chapter_id: str) -> Destination:
        if not (exam_id and subject_id and chapter_id):
            raise ValidationError("Please select an exam, subject and chapter")
        if chapter_id in self.chapter_ids:
            raise DuplicateDestinationError("This chapter is already selected")
        destination = Destination(exam_id, subject_id, chapter_id)
        self._destinations.append(destination)
        return destination

    def remove(self, chapter_id: str) -> None:
        self._destinations = [d for d in self._destinations if d.chapter_id != chapter_id]

    def clear(self) -> None:
        self._destinations = []


def resolve_destination_chapters(destinations: DestinationSet, selected_chapter_id: str = "") -> List[str]:
    if len(destinations):
        return destinations.chapter_ids
    if selected_chapter_id:
        return [selected_chapter_id]
    raise ValidationError("Please select a chapter before submitting questions")


def submit_questions(db: Session, drafts: List[QuestionDraft], chapter_ids: List[str]) -> int:
    """Inserts an independent copy of every draft into every chapter (N x M rows)."""
    if not chapter_ids:
        raise ValidationError("Please select a chapter before submitting questions")
    if not drafts:
        raise ValidationError("Please parse questions before submitting")

    rows = [
        {"chapter_id": chapter_id, **draft.model_dump()}
        for chapter_id in chapter_ids
        for draft in drafts
    ]
    logger.info(f"Submitting {len(drafts)} questions to {len(chapter_ids)} chapters")
    inserted = bulk_insert_questions(db, rows)
    return len(inserted)


class QuestionSelection:
    """Saved-question ids picked for bulk delete or export."""

    def __init__(self, ids: Optional[Iterable[str]] = None):
        self._ids = {}
        for row_id in ids or ():
            self._ids[row_id] = None

    def __contains__(self, row_id: str) -> bool:
        return row_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    @property
    def ids(self) -> List[str]:
        return list(self._ids)

    def toggle(self, row_id: str) -> None:
        if row_id in self._ids:
            del self._ids[row_id]
        else:
            self._ids[row_id] = None

    def toggle_all(self, loaded_ids: Iterable[str]) -> None:
        loaded_ids = list(loaded_ids)
        if loaded_ids and all(row_id in self._ids for row_id in loaded_ids):
            self.clear()
        else:
            self._ids = dict.fromkeys(loaded_ids)

    def clear(self) -> None:
        self._ids = {}


def export_questions(rows: Iterable[Any]) -> str:
    """
    Serializes saved questions back into the pasted-import shape. Ids, chapter
    and timestamps are left out so the text can be imported anywhere.
    """
    payload = [{name: getattr(row, name) for name in CONTENT_FIELDS} for row in rows]
    return json.dumps(payload, indent=2, ensure_ascii=False)
