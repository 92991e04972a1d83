from fastapi import APIRouter, Depends, Query
from preppal.application.admin.entity_configs import PROMPT
from preppal.application.admin.entity_controller import EntityController
from preppal.presentation.api.responses import message, unwrap
from preppal.presentation.dependencies import controller_for
from preppal.presentation.schemas.prompt_schema import PromptCreate, PromptOut, PromptUpdate
from preppal.presentation.schemas.reference_schema import CommandMessage

router = APIRouter(prefix="/prompts", tags=["Prompts"])

# Every prompt query is scoped to the signed-in user
get_controller = controller_for(PROMPT)


@router.get("", response_model=list[PromptOut])
def list_prompts(controller: EntityController = Depends(get_controller)):
    return unwrap(controller.list())


@router.get("/{prompt_id}", response_model=PromptOut)
def get_prompt(prompt_id: str, controller: EntityController = Depends(get_controller)):
    return unwrap(controller.get(prompt_id))


@router.post("", response_model=PromptOut)
def add_prompt(prompt: PromptCreate, controller: EntityController = Depends(get_controller)):
    return unwrap(controller.create(prompt.model_dump()))


@router.put("/{prompt_id}", response_model=PromptOut)
def modify_prompt(
    prompt_id: str,
    prompt: PromptUpdate,
    controller: EntityController = Depends(get_controller),
):
    return unwrap(controller.update(prompt_id, prompt.model_dump(exclude_unset=True)))


@router.delete("/{prompt_id}", response_model=CommandMessage)
def remove_prompt(
    prompt_id: str,
    confirm: bool = Query(False),
    controller: EntityController = Depends(get_controller),
):
    return message(controller.delete(prompt_id, confirm=lambda prompt: confirm))
