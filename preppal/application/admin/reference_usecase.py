import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from preppal.application.filters.cascading_filter import ALL, CascadingFilter, FilterMode
from preppal.infrastructure.repositories.reference_repo_impl import (
    count_rows,
    get_all_books,
    get_all_chapters,
    get_all_exams,
    get_all_subjects,
)

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load data. Please refresh the page."


class ReferenceDataError(Exception):
    pass


def load_reference_data(db: Session, include_books: bool = False) -> Dict[str, Any]:
    """
    Full exam, subject and chapter collections (books on request) that feed
    every dropdown on the dashboard. No pagination.
    """
    try:
        data = {
            "exams": get_all_exams(db),
            "subjects": get_all_subjects(db),
            "chapters": get_all_chapters(db),
        }
        if include_books:
            data["books"] = get_all_books(db)
    except Exception as e:
        logger.error(f"Error loading reference data: {e}", exc_info=True)
        raise ReferenceDataError(LOAD_FAILED_MESSAGE) from e

    logger.info(
        f"Loaded reference data: {len(data['exams'])} exams, "
        f"{len(data['subjects'])} subjects, {len(data['chapters'])} chapters"
    )
    return data


def resolve_cascade(
    db: Session,
    exam_id: str = ALL,
    subject_id: str = ALL,
    chapter_id: str = ALL,
    mode: FilterMode = FilterMode.LOOSE,
) -> Dict[str, Any]:
    data = load_reference_data(db)
    cascade = CascadingFilter(data["subjects"], data["chapters"], mode=mode)
    selection = cascade.apply(exam_id, subject_id, chapter_id)
    return {
        "mode": cascade.mode.value,
        "selection": selection,
        "subjects": cascade.subject_options,
        "chapters": cascade.chapter_options,
    }


def dashboard_counts(db: Session) -> Dict[str, int]:
    try:
        return count_rows(db)
    except Exception as e:
        logger.error(f"Error counting dashboard rows: {e}", exc_info=True)
        raise ReferenceDataError(LOAD_FAILED_MESSAGE) from e
