"""Translation of application errors into HTTP responses."""

import logfire
from fastapi import HTTPException, status

from forum.domain.error import (
    AdminRequiredError,
    BusinessRuleViolationError,
    ContentDeletedException,
    InvalidEditOperationError,
    NotAuthorizedError,
    NotFoundError,
    PostLockedError,
    UserBannedError,
    ValidationError,
)
from forum.interface.error import AuthenticationRequiredError
from forum.util.jwt import JWTError

FORBIDDEN = (NotAuthorizedError, PostLockedError, UserBannedError, AdminRequiredError)
BAD_REQUEST = (
    ValidationError,
    ContentDeletedException,
    InvalidEditOperationError,
    BusinessRuleViolationError,
    ValueError,  # includes pydantic.ValidationError
)


def to_http_exception(error: Exception, action: str) -> HTTPException:
    """Map an exception raised while handling a request to an HTTPException.

    Args:
        error: The exception caught by the route
        action: What the route was doing, used in the generic 500 message

    Returns:
        HTTPException with the matching status code
    """
    if isinstance(error, HTTPException):
        return error

    if isinstance(error, (AuthenticationRequiredError, JWTError)):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(error)
        )

    if isinstance(error, NotFoundError):
        logfire.info("Resource not found", error=str(error))
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))

    if isinstance(error, FORBIDDEN):
        logfire.warn("Forbidden request", error=str(error))
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))

    if isinstance(error, BAD_REQUEST):
        logfire.warn("Invalid request", error=str(error))
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(error)
        )

    logfire.error(
        f"Unexpected error: {action}",
        error=str(error),
        error_type=type(error).__name__,
    )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )
