from sqlalchemy.orm import Session
from preppal.infrastructure.db.models import Book, Chapter, Exam, Subject
import logging

logger = logging.getLogger(__name__)


def get_all_exams(db: Session):
    return db.query(Exam).order_by(Exam.name).all()


def get_all_subjects(db: Session):
    return db.query(Subject).order_by(Subject.name).all()


def get_all_chapters(db: Session):
    return db.query(Chapter).order_by(Chapter.order, Chapter.name).all()


def get_all_books(db: Session):
    return db.query(Book).order_by(Book.title).all()


def count_rows(db: Session) -> dict:
    counts = {
        "exams": db.query(Exam).count(),
        "subjects": db.query(Subject).count(),
        "chapters": db.query(Chapter).count(),
        "books": db.query(Book).count(),
    }
    logger.info(f"Dashboard counts: {counts}")
    return counts
