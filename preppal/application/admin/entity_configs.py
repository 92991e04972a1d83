from preppal.application.admin.entity_controller import EntityConfig
from preppal.application.attachments.attachment_service import (
    BOOKS_BUCKET,
    CHAPTERS_BUCKET,
    SYLLABUS_BUCKET,
)
from preppal.infrastructure.db.models import Book, Chapter, Exam, Prompt, Question, Subject


def _exam_syllabus_attachments(exam):
    # Subjects go with the exam through the cascade; their syllabus objects do not
    return [(SYLLABUS_BUCKET.name, subject.syllabus_pdf_url) for subject in exam.subjects]


EXAM = EntityConfig(
    name="exam",
    model=Exam,
    fields=("name",),
    required=("name",),
    required_message="Exam name is required",
    order_by=(Exam.name,),
    dependent_attachments=_exam_syllabus_attachments,
)

SUBJECT = EntityConfig(
    name="subject",
    model=Subject,
    fields=("name", "exam_id"),
    required=("name", "exam_id"),
    required_message="Subject name and exam are required",
    order_by=(Subject.name,),
    parent_filters=("exam_id",),
    bucket=SYLLABUS_BUCKET,
)

CHAPTER = EntityConfig(
    name="chapter",
    model=Chapter,
    fields=("name", "description", "order", "subject_id"),
    required=("name", "subject_id"),
    required_message="Name and Subject are required",
    order_by=(Chapter.order, Chapter.name),
    form_only=("exam_id",),
    parent_filters=("subject_id",),
    exam_scoped=True,
    bucket=CHAPTERS_BUCKET,
)

BOOK = EntityConfig(
    name="book",
    model=Book,
    fields=("title", "author", "link", "subject_id"),
    required=("title", "author", "exam_id", "subject_id"),
    required_message="Title, Author, Exam and Subject are required",
    order_by=(Book.title,),
    form_only=("exam_id",),
    parent_filters=("subject_id",),
    exam_scoped=True,
    bucket=BOOKS_BUCKET,
)

PROMPT = EntityConfig(
    name="prompt",
    model=Prompt,
    fields=("title", "content"),
    required=("title", "content"),
    required_message="Title and Content are required",
    order_by=(Prompt.created_at.desc(),),
    owner_field="user_id",
)

QUESTION = EntityConfig(
    name="question",
    model=Question,
    fields=(
        "chapter_id",
        "question_text",
        "option_a",
        "option_b",
        "option_c",
        "option_d",
        "correct_option",
        "explaination",
    ),
    required=("chapter_id", "question_text", "option_a", "option_b", "option_c", "option_d", "correct_option"),
    required_message="A chapter, question text, options A-D and the correct option are required",
    order_by=(Question.created_at.desc(),),
    parent_filters=("chapter_id",),
)
