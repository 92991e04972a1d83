"""
Cascading dropdown filters for the exam -> subject -> chapter hierarchy.

Selecting a parent recomputes the child candidates as the children whose
parent id matches, and clears a child selection that is no longer among them.
With no parent selected the child list is empty in STRICT mode (add forms)
or the whole collection in LOOSE mode (filter views where "All" is valid).
"""
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterable, List

logger = logging.getLogger(__name__)

ALL = ""


class FilterMode(str, Enum):
    STRICT = "strict"
    LOOSE = "loose"


def _value(item: Any, key: str):
    if isinstance(item, Mapping):
        return item.get(key)
    return getattr(item, key, None)


def filter_children(children: Iterable[Any], parent_key: str, parent_id: str, mode: FilterMode) -> List[Any]:
    # The ALL sentinel never takes part in a parent id comparison
    if not parent_id:
        return [] if mode == FilterMode.STRICT else list(children)
    return [child for child in children if _value(child, parent_key) == parent_id]


def visible_rows(rows: Iterable[Any], subjects: Iterable[Any], exam_id: str = ALL, subject_id: str = ALL) -> List[Any]:
    """Rows (chapters, books) shown under the current filter: subject wins, then exam."""
    if subject_id:
        return [row for row in rows if _value(row, "subject_id") == subject_id]
    if exam_id:
        exam_subjects = {_value(s, "id") for s in subjects if _value(s, "exam_id") == exam_id}
        return [row for row in rows if _value(row, "subject_id") in exam_subjects]
    return list(rows)


class CascadingFilter:
    def __init__(self, subjects: Iterable[Any], chapters: Iterable[Any] = (), mode: FilterMode = FilterMode.LOOSE):
        self._subjects = list(subjects)
        self._chapters = list(chapters)
        self.mode = FilterMode(mode)
        self.exam_id = ALL
        self.subject_id = ALL
        self.chapter_id = ALL

    @property
    def subject_options(self) -> List[Any]:
        return filter_children(self._subjects, "exam_id", self.exam_id, self.mode)

    @property
    def chapter_options(self) -> List[Any]:
        if not self.subject_id and self.exam_id and self.mode == FilterMode.LOOSE:
            # No subject yet: chapters are narrowed through their subject's exam
            return visible_rows(self._chapters, self._subjects, exam_id=self.exam_id)
        return filter_children(self._chapters, "subject_id", self.subject_id, self.mode)

    @property
    def selection(self) -> dict:
        return {"exam_id": self.exam_id, "subject_id": self.subject_id, "chapter_id": self.chapter_id}

    def select_exam(self, exam_id: str) -> None:
        self.exam_id = exam_id or ALL
        if self.subject_id and not self._contains(self.subject_options, self.subject_id):
            logger.debug(f"Subject {self.subject_id} not under exam '{self.exam_id}', clearing")
            self.subject_id = ALL
        self._revalidate_chapter()

    def select_subject(self, subject_id: str) -> None:
        subject_id = subject_id or ALL
        if subject_id and not self._contains(self.subject_options, subject_id):
            logger.debug(f"Subject {subject_id} is not a candidate under exam '{self.exam_id}'")
            subject_id = ALL
        self.subject_id = subject_id
        self._revalidate_chapter()

    def select_chapter(self, chapter_id: str) -> None:
        chapter_id = chapter_id or ALL
        if chapter_id and not self._contains(self.chapter_options, chapter_id):
            chapter_id = ALL
        self.chapter_id = chapter_id

    def apply(self, exam_id: str = ALL, subject_id: str = ALL, chapter_id: str = ALL) -> dict:
        """Applies a whole selection top-down; children that do not fit are dropped."""
        self.select_exam(exam_id)
        self.select_subject(subject_id)
        self.select_chapter(chapter_id)
        return self.selection

    def _revalidate_chapter(self) -> None:
        if self.chapter_id and not self._contains(self.chapter_options, self.chapter_id):
            logger.debug(f"Chapter {self.chapter_id} no longer a candidate, clearing")
            self.chapter_id = ALL

    @staticmethod
    def _contains(options: List[Any], item_id: str) -> bool:
        return any(_value(option, "id") == item_id for option in options)
