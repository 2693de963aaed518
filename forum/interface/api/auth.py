"""Session cookie helpers for routes."""

from forum.domain.service import JWTService
from forum.interface.error import AuthenticationRequiredError
from forum.util.jwt import JWTError


def require_user_id(jwt_service: JWTService, auth_token: str | None) -> str:
    """Return the user ID carried by the session cookie.

    Raises:
        AuthenticationRequiredError: If there is no cookie
        JWTError: If the token is invalid or expired
    """
    if not auth_token:
        raise AuthenticationRequiredError()
    return jwt_service.verify_token(auth_token).user_id


def optional_user_id(jwt_service: JWTService, auth_token: str | None) -> str | None:
    """Like ``require_user_id``, but anonymous requests yield None."""
    if not auth_token:
        return None
    try:
        return jwt_service.verify_token(auth_token).user_id
    except JWTError:
        # Invalid token, treat as unauthenticated
        return None
