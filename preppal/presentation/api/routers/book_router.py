from fastapi import APIRouter, Depends, File, Query, UploadFile
from preppal.application.admin.entity_configs import BOOK
from preppal.application.admin.entity_controller import EntityController
from preppal.presentation.api.responses import attachment_from_upload, message, unwrap
from preppal.presentation.dependencies import controller_for
from preppal.presentation.schemas.book_schema import BookCreate, BookOut, BookUpdate
from preppal.presentation.schemas.reference_schema import CommandMessage
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/books", tags=["Books"])

get_controller = controller_for(BOOK)


@router.get("", response_model=list[BookOut])
def list_books(
    exam_id: str = "",
    subject_id: str = "",
    controller: EntityController = Depends(get_controller),
):
    return unwrap(controller.list(exam_id=exam_id, subject_id=subject_id))


@router.get("/{book_id}", response_model=BookOut)
def get_book(book_id: str, controller: EntityController = Depends(get_controller)):
    return unwrap(controller.get(book_id))


@router.post("", response_model=BookOut)
def add_book(book: BookCreate, controller: EntityController = Depends(get_controller)):
    return unwrap(controller.create(book.model_dump()))


@router.put("/{book_id}", response_model=BookOut)
def modify_book(
    book_id: str,
    book: BookUpdate,
    controller: EntityController = Depends(get_controller),
):
    return unwrap(controller.update(book_id, book.model_dump(exclude_unset=True)))


@router.put("/{book_id}/attachment", response_model=BookOut)
def upload_book_pdf(
    book_id: str,
    file: UploadFile = File(...),
    controller: EntityController = Depends(get_controller),
):
    logger.info(f"Received PDF upload {file.filename} for book {book_id}")
    return unwrap(controller.replace_attachment(book_id, attachment_from_upload(file)))


@router.delete("/{book_id}", response_model=CommandMessage)
def remove_book(
    book_id: str,
    confirm: bool = Query(False),
    controller: EntityController = Depends(get_controller),
):
    return message(controller.delete(book_id, confirm=lambda prompt: confirm))
