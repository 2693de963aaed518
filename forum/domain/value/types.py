"""Domain value types for the forum.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum, IntEnum


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class VoteValue(IntEnum):
    """Signed value of a vote.

    NEUTRAL is what a vote becomes when its upvote or downvote is toggled
    off; the row keeps its creation time and counts as "no vote" everywhere.
    """

    DOWN = -1
    NEUTRAL = 0
    UP = 1


class VoteAction(str, Enum):
    """Outcome of a vote transition."""

    UPVOTED = "upvoted"
    REMOVED_UPVOTE = "removed_upvote"
    CHANGED_TO_UPVOTE = "changed_to_upvote"
    DOWNVOTED = "downvoted"
    REMOVED_DOWNVOTE = "removed_downvote"
    CHANGED_TO_DOWNVOTE = "changed_to_downvote"
    REMOVED_VOTE = "removed_vote"
    NO_CHANGE = "no_change"


class UserRole(str, Enum):
    """Role of a user account.

    A banned account keeps its base role with a "-ban" suffix. Admins
    cannot be banned, so "user-ban" is the only banned role.
    """

    USER = "user"
    ADMIN = "admin"
    BANNED_USER = "user-ban"

    @property
    def is_banned(self) -> bool:
        return self.value.endswith("-ban")


class PostSortField(str, Enum):
    """Column a post listing is ordered by."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    UPVOTES = "upvotes"
    VIEW_COUNT = "view_count"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class SearchSort(str, Enum):
    """Ordering of full-text post search results."""

    RELEVANCE = "relevance"
    RECENT = "recent"
    POPULAR = "popular"


class AutocompleteType(str, Enum):
    """Which prefix trees an autocomplete query consults."""

    ALL = "all"
    POST = "post"
    USER = "user"
    TAG = "tag"
