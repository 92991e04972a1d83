from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from supabase import Client, create_client

from preppal.application.admin.entity_controller import EntityConfig, EntityController
from preppal.application.attachments.attachment_service import AttachmentManager
from preppal.infrastructure.auth import AuthClient, AuthSession
from preppal.infrastructure.auth.supabase_auth import SupabaseAuthClient
from preppal.infrastructure.config import get_settings
from preppal.infrastructure.db.session import SessionLocal
from preppal.infrastructure.storage import StorageClient
from preppal.infrastructure.storage.supabase_storage import SupabaseStorageClient
import logging

logger = logging.getLogger(__name__)

# auto_error=False so a missing token reaches require_session and gets the login redirect
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


class SessionRequired(Exception):
    """No valid session; main.py turns this into a login redirect or a 401."""

    def __init__(self, reason: str = "Not authenticated"):
        super().__init__(reason)
        self.reason = reason


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@lru_cache
def get_supabase_client() -> Client:
    settings = get_settings()
    return create_client(settings.supabase_url, settings.supabase_key)


def get_storage_client() -> StorageClient:
    return SupabaseStorageClient(get_supabase_client())


@lru_cache
def get_auth_client() -> AuthClient:
    settings = get_settings()
    return SupabaseAuthClient(url=settings.supabase_url, key=settings.supabase_key)


def get_attachment_manager(storage: StorageClient = Depends(get_storage_client)) -> AttachmentManager:
    return AttachmentManager(storage)


def require_session(
    token: Optional[str] = Depends(oauth2_scheme),
    auth: AuthClient = Depends(get_auth_client),
) -> AuthSession:
    if not token:
        raise SessionRequired()

    try:
        session = auth.get_session(token)
    except Exception as e:
        # A failed lookup is the same as no session
        logger.warning(f"Session lookup failed: {e}")
        raise SessionRequired("Could not validate session")

    if session is None:
        raise SessionRequired("Session expired")

    logger.debug(f"Session accepted for user_id: {session.user_id}")
    return session


def controller_for(config: EntityConfig):
    """Builds a dependency that yields the EntityController for one table."""

    def _controller(
        db: Session = Depends(get_db),
        attachments: AttachmentManager = Depends(get_attachment_manager),
        session: AuthSession = Depends(require_session),
    ) -> EntityController:
        owner_id = session.user_id if config.owner_field else None
        return EntityController(db, config, attachments=attachments, owner_id=owner_id)

    return _controller
