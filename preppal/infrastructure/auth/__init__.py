from .auth_client import AuthClient, AuthError, AuthSession

__all__ = ["AuthClient", "AuthError", "AuthSession"]
