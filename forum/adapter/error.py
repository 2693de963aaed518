"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class CacheError(AdapterError):
    """Cache backend misconfigured or unusable."""

    pass
