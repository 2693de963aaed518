"""Base value objects and pagination primitives."""

from math import ceil

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ValueObject(BaseModel):
    """Base class for all value objects.

    Value objects are immutable and compared by value, not identity.
    """

    model_config = ConfigDict(
        frozen=True,  # All value objects are immutable
        arbitrary_types_allowed=True,
    )


class PageRequest(ValueObject):
    """A 1-based page of a listing.

    Pages start at 1 and hold between 1 and 100 items.
    """

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)

    @property
    def offset(self) -> int:
        """Number of items to skip before this page."""
        return (self.page - 1) * self.limit

    def slice(self, items: list) -> list:
        """Cut this page out of an already ordered list."""
        return items[self.offset : self.offset + self.limit]


class Pagination(ValueObject):
    """Pagination metadata returned alongside a page of items."""

    page: int
    limit: int
    total: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        """Number of pages needed to show every item."""
        return ceil(self.total / self.limit) if self.limit else 0

    @classmethod
    def of(cls, page_request: PageRequest, total: int) -> "Pagination":
        """Build pagination metadata for a page request."""
        return cls(page=page_request.page, limit=page_request.limit, total=total)
