from .exam_model import Exam
from .subject_model import Subject
from .chapter_model import Chapter
from .book_model import Book
from .prompt_model import Prompt
from .question_model import Question

__all__ = ["Exam", "Subject", "Chapter", "Book", "Prompt", "Question"]
