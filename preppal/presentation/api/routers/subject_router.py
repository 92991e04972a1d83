from fastapi import APIRouter, Depends, File, Query, UploadFile
from preppal.application.admin.entity_configs import SUBJECT
from preppal.application.admin.entity_controller import EntityController
from preppal.presentation.api.responses import attachment_from_upload, message, unwrap
from preppal.presentation.dependencies import controller_for
from preppal.presentation.schemas.subject_schema import SubjectCreate, SubjectOut, SubjectUpdate
from preppal.presentation.schemas.reference_schema import CommandMessage
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/subjects", tags=["Subjects"])

get_controller = controller_for(SUBJECT)


@router.get("", response_model=list[SubjectOut])
def list_subjects(exam_id: str = "", controller: EntityController = Depends(get_controller)):
    return unwrap(controller.list(exam_id=exam_id))


@router.get("/{subject_id}", response_model=SubjectOut)
def get_subject(subject_id: str, controller: EntityController = Depends(get_controller)):
    return unwrap(controller.get(subject_id))


@router.post("", response_model=SubjectOut)
def add_subject(subject: SubjectCreate, controller: EntityController = Depends(get_controller)):
    return unwrap(controller.create(subject.model_dump()))


@router.put("/{subject_id}", response_model=SubjectOut)
def modify_subject(
    subject_id: str,
    subject: SubjectUpdate,
    controller: EntityController = Depends(get_controller),
):
    return unwrap(controller.update(subject_id, subject.model_dump(exclude_unset=True)))


@router.put("/{subject_id}/attachment", response_model=SubjectOut)
def upload_syllabus(
    subject_id: str,
    file: UploadFile = File(...),
    controller: EntityController = Depends(get_controller),
):
    logger.info(f"Received syllabus upload {file.filename} for subject {subject_id}")
    return unwrap(controller.replace_attachment(subject_id, attachment_from_upload(file)))


@router.delete("/{subject_id}", response_model=CommandMessage)
def remove_subject(
    subject_id: str,
    confirm: bool = Query(False),
    controller: EntityController = Depends(get_controller),
):
    return message(controller.delete(subject_id, confirm=lambda prompt: confirm))
