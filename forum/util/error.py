"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Settings that the application refuses to start with."""

    pass


class DependencyInjectionError(UtilError):
    """A provider could not be resolved for a component."""

    pass
