from fastapi import HTTPException, UploadFile

from preppal.application.admin.entity_controller import CommandResult
from preppal.application.attachments.attachment_service import Attachment

STATUS_BY_KIND = {
    "validation": 400,
    "not_found": 404,
    "cancelled": 409,
    "remote": 500,
}


def unwrap(result: CommandResult):
    """Returns the value of a successful command, or raises the matching HTTPException."""
    if result.ok:
        return result.value
    raise HTTPException(status_code=STATUS_BY_KIND.get(result.kind, 500), detail=result.error)


def message(result: CommandResult) -> dict:
    unwrap(result)
    return {"message": result.message, "dismiss_after": result.dismiss_after}


def attachment_from_upload(file: UploadFile) -> Attachment:
    return Attachment(
        filename=file.filename or "",
        content_type=file.content_type or "",
        data=file.file.read(),
    )
