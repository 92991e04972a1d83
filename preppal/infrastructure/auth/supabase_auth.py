import logging
from typing import Optional

from supabase import create_client

from .auth_client import AuthClient, AuthError, AuthSession

logger = logging.getLogger(__name__)


class SupabaseAuthClient(AuthClient):
    """
    Stateless wrapper: every sign-in gets its own client so sessions never
    leak between requests served by the same process.
    """

    def __init__(self, *, url: str, key: str):
        self._url = url
        self._key = key
        self._client = create_client(url, key)

    def get_session(self, access_token: str) -> Optional[AuthSession]:
        response = self._client.auth.get_user(access_token)
        user = getattr(response, "user", None)
        if user is None:
            return None
        return AuthSession(user_id=str(user.id), email=user.email, access_token=access_token)

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        client = create_client(self._url, self._key)
        try:
            response = client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            logger.warning(f"Sign-in rejected for {email}: {e}")
            raise AuthError(getattr(e, "message", None) or str(e)) from e

        session = response.session
        if session is None or response.user is None:
            raise AuthError("No active session returned")
        logger.info(f"Signed in user_id={response.user.id}")
        return AuthSession(
            user_id=str(response.user.id),
            email=response.user.email,
            access_token=session.access_token,
            refresh_token=session.refresh_token,
        )

    def sign_out(self, access_token: str) -> None:
        try:
            self._client.auth.admin.sign_out(access_token)
        except Exception as e:
            raise AuthError(str(e)) from e
