"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to modify content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class ContentDeletedException(DomainError):
    """Raised when attempting to act on deleted content."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(f"Cannot modify deleted {resource} {resource_id}")


class InvalidEditOperationError(DomainError):
    """Raised when an edit operation violates business rules."""

    def __init__(self, message: str):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class PostLockedError(BusinessRuleViolationError):
    """Raised when commenting on a locked post."""

    def __init__(self, post_id: str):
        self.post_id = post_id
        super().__init__(f"Cannot comment on locked post {post_id}")


class UserBannedError(BusinessRuleViolationError):
    """Raised when a banned user tries to contribute content."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User {user_id} is banned")


class AdminRequiredError(BusinessRuleViolationError):
    """Raised when a non-admin calls an admin-only operation."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User {user_id} is not an admin")
