from fastapi import APIRouter, Depends, File, Query, UploadFile
from preppal.application.admin.entity_configs import CHAPTER
from preppal.application.admin.entity_controller import EntityController
from preppal.presentation.api.responses import attachment_from_upload, message, unwrap
from preppal.presentation.dependencies import controller_for
from preppal.presentation.schemas.chapter_schema import ChapterCreate, ChapterOut, ChapterUpdate
from preppal.presentation.schemas.reference_schema import CommandMessage
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/chapters", tags=["Chapters"])

get_controller = controller_for(CHAPTER)


@router.get("", response_model=list[ChapterOut])
def list_chapters(
    exam_id: str = "",
    subject_id: str = "",
    controller: EntityController = Depends(get_controller),
):
    return unwrap(controller.list(exam_id=exam_id, subject_id=subject_id))


@router.get("/{chapter_id}", response_model=ChapterOut)
def get_chapter(chapter_id: str, controller: EntityController = Depends(get_controller)):
    return unwrap(controller.get(chapter_id))


@router.post("", response_model=ChapterOut)
def add_chapter(chapter: ChapterCreate, controller: EntityController = Depends(get_controller)):
    return unwrap(controller.create(chapter.model_dump()))


@router.put("/{chapter_id}", response_model=ChapterOut)
def modify_chapter(
    chapter_id: str,
    chapter: ChapterUpdate,
    controller: EntityController = Depends(get_controller),
):
    return unwrap(controller.update(chapter_id, chapter.model_dump(exclude_unset=True)))


@router.put("/{chapter_id}/attachment", response_model=ChapterOut)
def upload_chapter_pdf(
    chapter_id: str,
    file: UploadFile = File(...),
    controller: EntityController = Depends(get_controller),
):
    logger.info(f"Received PDF upload {file.filename} for chapter {chapter_id}")
    return unwrap(controller.replace_attachment(chapter_id, attachment_from_upload(file)))


@router.delete("/{chapter_id}", response_model=CommandMessage)
def remove_chapter(
    chapter_id: str,
    confirm: bool = Query(False),
    controller: EntityController = Depends(get_controller),
):
    return message(controller.delete(chapter_id, confirm=lambda prompt: confirm))
