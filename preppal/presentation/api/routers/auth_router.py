from fastapi import APIRouter, Depends, HTTPException
from preppal.infrastructure.auth import AuthClient, AuthError, AuthSession
from preppal.presentation.dependencies import get_auth_client, require_session
from preppal.presentation.schemas.user_schema import LoginRequest, SessionOut
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/auth/login", response_model=SessionOut, tags=["Authentication"])
def login(request: LoginRequest, auth: AuthClient = Depends(get_auth_client)):
    email = request.email.strip()
    if not email or not request.password:
        raise HTTPException(status_code=400, detail="Email and password are required")
    try:
        return auth.sign_in_with_password(email, request.password)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e))


@router.post("/auth/logout", tags=["Authentication"])
def logout(
    session: AuthSession = Depends(require_session),
    auth: AuthClient = Depends(get_auth_client),
):
    try:
        auth.sign_out(session.access_token)
    except AuthError as e:
        # The local session ends either way
        logger.warning(f"Sign-out failed for user_id {session.user_id}: {e}")
    logger.info(f"Signed out user_id: {session.user_id}")
    return {"message": "Signed out"}


@router.get("/auth/session", response_model=SessionOut, tags=["Authentication"])
def current_session(session: AuthSession = Depends(require_session)):
    return session


@router.get("/login", tags=["Authentication"])
def login_page():
    return {"message": "Sign in required", "login_endpoint": "/auth/login"}
