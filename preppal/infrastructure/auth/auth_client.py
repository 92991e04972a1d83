from dataclasses import dataclass
from typing import Optional, Protocol


class AuthError(Exception):
    """Raised when the auth service refuses a sign-in or sign-out."""


@dataclass(frozen=True)
class AuthSession:
    user_id: str
    email: Optional[str]
    access_token: str
    refresh_token: Optional[str] = None


class AuthClient(Protocol):
    def get_session(self, access_token: str) -> Optional[AuthSession]:
        """
        Resolves an access token to the active session, or None when the token
        does not belong to one.
        """
        ...

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        ...

    def sign_out(self, access_token: str) -> None:
        ...
