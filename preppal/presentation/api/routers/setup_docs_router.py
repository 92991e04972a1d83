from fastapi import APIRouter, Depends, HTTPException
from preppal.infrastructure.auth import AuthSession
from preppal.infrastructure.config import Settings, get_settings
from preppal.presentation.dependencies import require_session
from preppal.presentation.schemas.reference_schema import SetupDocOut
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/setup-docs", tags=["Setup"])

SETUP_DOCS = {
    "setup": ("SETUP.md", "Setup Guide"),
    "sql": ("scripts/setup-tables.sql", "SQL Setup Script"),
}


@router.get("/{file}", response_model=SetupDocOut)
def read_setup_doc(
    file: str,
    settings: Settings = Depends(get_settings),
    session: AuthSession = Depends(require_session),
):
    if file not in SETUP_DOCS:
        raise HTTPException(status_code=404, detail=f"Unknown setup document: {file}")

    relative_path, title = SETUP_DOCS[file]
    try:
        content = (settings.public_dir / relative_path).read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Error reading setup document {relative_path}: {e}")
        raise HTTPException(status_code=404, detail="Failed to load the file. Please check if it exists.")
    return {"file": file, "title": title, "content": content}
