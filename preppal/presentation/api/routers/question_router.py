from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from preppal.application.admin.bulk_question_usecase import (
    EXAMPLE_QUESTIONS,
    DestinationSet,
    QuestionSelection,
    export_questions,
    parse_question_file,
    parse_questions,
    resolve_destination_chapters,
    submit_questions,
)
from preppal.application.admin.entity_configs import QUESTION
from preppal.application.admin.entity_controller import (
    SUCCESS_DISMISS_SECONDS,
    EntityController,
    describe_remote_error,
)
from preppal.infrastructure.auth import AuthSession
from preppal.infrastructure.db.models import Question
from preppal.infrastructure.repositories.entity_repo_impl import EntityRepository
from preppal.infrastructure.repositories.question_repo_impl import list_questions
from preppal.presentation.api.responses import message, unwrap
from preppal.presentation.dependencies import controller_for, get_db, require_session
from preppal.presentation.schemas.question_schema import (
    BulkDeleteRequest,
    BulkSubmitRequest,
    BulkSubmitResponse,
    ExportResponse,
    ParsedQuestions,
    ParseRequest,
    QuestionCreate,
    QuestionDraft,
    QuestionOut,
    QuestionUpdate,
    SelectionRequest,
)
from preppal.presentation.schemas.reference_schema import CommandMessage
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/questions", tags=["Questions"])

get_controller = controller_for(QUESTION)


@router.get("", response_model=list[QuestionOut])
def browse_questions(
    exam_id: str = "",
    subject_id: str = "",
    chapter_id: str = "",
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_session),
):
    try:
        return list_questions(db, exam_id=exam_id, subject_id=subject_id, chapter_id=chapter_id)
    except SQLAlchemyError:
        raise HTTPException(status_code=500, detail="Failed to load saved questions.")


@router.get("/example", response_model=list[QuestionDraft])
def example_questions(session: AuthSession = Depends(require_session)):
    return EXAMPLE_QUESTIONS


@router.post("/parse", response_model=ParsedQuestions)
def parse_pasted_questions(request: ParseRequest, session: AuthSession = Depends(require_session)):
    try:
        drafts = parse_questions(request.json_text)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"questions": drafts, "count": len(drafts)}


@router.post("/import", response_model=ParsedQuestions)
def import_question_file(
    file: UploadFile = File(...),
    session: AuthSession = Depends(require_session),
):
    logger.info(f"Received question file: {file.filename}")
    try:
        drafts = parse_question_file(file.file.read(), file.filename or "")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"questions": drafts, "count": len(drafts)}


@router.post("/bulk", response_model=BulkSubmitResponse)
def submit_bulk_questions(
    request: BulkSubmitRequest,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_session),
):
    try:
        destinations = DestinationSet()
        for destination in request.destinations:
            destinations.add(destination.exam_id, destination.subject_id, destination.chapter_id)
        chapter_ids = resolve_destination_chapters(destinations, request.chapter_id)
        inserted = submit_questions(db, request.questions, chapter_ids)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to save questions: {describe_remote_error(e) or 'Unknown error'}",
        )

    return {
        "inserted": inserted,
        "chapters": len(chapter_ids),
        "message": f"Successfully saved {inserted} questions to the database",
    }


@router.post("/bulk-delete", response_model=CommandMessage)
def delete_selected_questions(
    request: BulkDeleteRequest,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_session),
):
    selection = QuestionSelection(request.ids)
    if not len(selection):
        raise HTTPException(status_code=400, detail="Please select questions to delete")
    if not request.confirm:
        raise HTTPException(
            status_code=409,
            detail=f"Are you sure you want to delete {len(selection)} questions? This action cannot be undone.",
        )

    try:
        deleted = EntityRepository(db, Question).delete_many(selection.ids)
    except SQLAlchemyError as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete questions: {describe_remote_error(e)}")
    return {"message": f"Successfully deleted {deleted} questions", "dismiss_after": SUCCESS_DISMISS_SECONDS}


@router.post("/export", response_model=ExportResponse)
def export_selected_questions(
    request: SelectionRequest,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_session),
):
    selection = QuestionSelection(request.ids)
    if not len(selection):
        raise HTTPException(status_code=400, detail="Please select questions to export")

    rows = EntityRepository(db, Question).list_by_ids(selection.ids)
    # Keep the order the questions were picked in
    by_id = {row.id: row for row in rows}
    ordered = [by_id[row_id] for row_id in selection.ids if row_id in by_id]
    return {"json_text": export_questions(ordered), "count": len(ordered)}


@router.get("/{question_id}", response_model=QuestionOut)
def get_question(question_id: str, controller: EntityController = Depends(get_controller)):
    return unwrap(controller.get(question_id))


@router.post("", response_model=QuestionOut)
def add_question(question: QuestionCreate, controller: EntityController = Depends(get_controller)):
    return unwrap(controller.create(question.model_dump()))


@router.put("/{question_id}", response_model=QuestionOut)
def modify_question(
    question_id: str,
    question: QuestionUpdate,
    controller: EntityController = Depends(get_controller),
):
    return unwrap(controller.update(question_id, question.model_dump(exclude_unset=True)))


@router.delete("/{question_id}", response_model=CommandMessage)
def remove_question(
    question_id: str,
    confirm: bool = Query(False),
    controller: EntityController = Depends(get_controller),
):
    return message(controller.delete(question_id, confirm=lambda prompt: confirm))
