"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain models.

    Entities are immutable; a change produces a new instance via
    ``model_copy(update=...)``. They round-trip through JSON unchanged, which
    is how they are stored in the cache.
    """

    model_config = ConfigDict(frozen=True)
