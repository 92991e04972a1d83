from typing import Any, Dict, List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from preppal.infrastructure.db.models import Chapter, Question, Subject
import logging

logger = logging.getLogger(__name__)


def list_questions(db: Session, exam_id: str = "", subject_id: str = "", chapter_id: str = "") -> List[Question]:
    """Saved questions, newest first; the most specific filter given wins."""
    try:
        query = db.query(Question)
        if chapter_id:
            query = query.filter(Question.chapter_id == chapter_id)
        elif subject_id:
            query = query.join(Chapter, Question.chapter_id == Chapter.id).filter(Chapter.subject_id == subject_id)
        elif exam_id:
            query = (
                query.join(Chapter, Question.chapter_id == Chapter.id)
                .join(Subject, Chapter.subject_id == Subject.id)
                .filter(Subject.exam_id == exam_id)
            )
        questions = query.order_by(Question.created_at.desc()).all()
        logger.info(
            f"Retrieved {len(questions)} questions (exam={exam_id or 'all'}, "
            f"subject={subject_id or 'all'}, chapter={chapter_id or 'all'})"
        )
        return questions
    except Exception as e:
        logger.error(f"Error fetching saved questions: {e}", exc_info=True)
        raise


def bulk_insert_questions(db: Session, rows: List[Dict[str, Any]]) -> List[Question]:
    """Inserts every row in a single transaction."""
    try:
        questions = [Question(**row) for row in rows]
        db.add_all(questions)
        db.commit()
        logger.info(f"Inserted {len(questions)} questions")
        return questions
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error during bulk question insert: {e}", exc_info=True)
        raise
