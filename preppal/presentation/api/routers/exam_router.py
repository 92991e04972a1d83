from fastapi import APIRouter, Depends, Query
from preppal.application.admin.entity_configs import EXAM
from preppal.application.admin.entity_controller import EntityController
from preppal.presentation.api.responses import message, unwrap
from preppal.presentation.dependencies import controller_for
from preppal.presentation.schemas.exam_schema import ExamCreate, ExamOut
from preppal.presentation.schemas.reference_schema import CommandMessage
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/exams", tags=["Exams"])

get_controller = controller_for(EXAM)


@router.get("", response_model=list[ExamOut])
def list_exams(controller: EntityController = Depends(get_controller)):
    return unwrap(controller.list())


@router.get("/{exam_id}", response_model=ExamOut)
def get_exam(exam_id: str, controller: EntityController = Depends(get_controller)):
    return unwrap(controller.get(exam_id))


@router.post("", response_model=ExamOut)
def add_exam(exam: ExamCreate, controller: EntityController = Depends(get_controller)):
    return unwrap(controller.create(exam.model_dump()))


@router.put("/{exam_id}", response_model=ExamOut)
def modify_exam(exam_id: str, exam: ExamCreate, controller: EntityController = Depends(get_controller)):
    return unwrap(controller.update(exam_id, exam.model_dump()))


@router.delete("/{exam_id}", response_model=CommandMessage)
def remove_exam(
    exam_id: str,
    confirm: bool = Query(False),
    controller: EntityController = Depends(get_controller),
):
    # Subjects, chapters, books and questions go with the exam
    return message(controller.delete(exam_id, confirm=lambda prompt: confirm))
