"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class AuthenticationRequiredError(InterfaceError):
    """The request carries no usable session cookie."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)
