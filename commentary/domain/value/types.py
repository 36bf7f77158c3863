"""Domain value objects for comment sections.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import Field, field_validator

from commentary.domain.value.common import ValueObject
from commentary.domain.value.identifiers import ObjectId, ProfileId


class ViewMode(str, Enum):
    """Mutually exclusive data source of a comment section."""

    ALL = "all"
    THREAD = "thread"
    SEARCH = "search"


class CommentSort(str, Enum):
    """Ordering of top-level comments and search results."""

    NEWEST = "newest"
    OLDEST = "oldest"
    MOST_LIKED = "most_liked"
    MOST_REPLIES = "most_replies"


class SearchType(str, Enum):
    """Which part of a comment a search query matches against."""

    ALL = "all"
    CONTENT = "content"
    AUTHOR = "author"
    MEDIA = "media"
    LINKS = "links"


class ContentType(str, Enum):
    """Top-level content types that carry a comment section."""

    POLL = "Poll"
    ARTICLE = "Article"
    GENERIC_COMMENT = "GenericComment"


class MediaType(str, Enum):
    """Kind of media attached to a comment."""

    IMAGE = "image"
    VIDEO = "video"
    GIF = "gif"


class MutationKind(str, Enum):
    """Local optimistic mutation applied to the comment tree."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    REPLY = "reply"


class MutationOutcome(str, Enum):
    """Result of applying a mutation locally."""

    APPLIED = "applied"
    NOT_FOUND = "not_found"  # Target id no longer in the tree
    REFETCH_REQUIRED = "refetch_required"  # Thread mode: reload instead
    SKIPPED = "skipped"  # Active mode keeps no patchable tree


class EmptyState(str, Enum):
    """Why a comment section shows no items."""

    NO_COMMENTS = "no_comments"
    QUERY_TOO_SHORT = "query_too_short"
    NO_RESULTS = "no_results"
    THREAD_NOT_FOUND = "thread_not_found"


class TargetRef(ValueObject):
    """Content item a comment section belongs to (e.g. a poll)."""

    content_type: ContentType = ContentType.POLL
    object_id: ObjectId

    def __str__(self) -> str:
        return f"{self.content_type.value}:{self.object_id}"


class AuthorInfo(ValueObject):
    """Public author information shown next to a comment."""

    id: ProfileId | None = None
    username: str
    display_name: str = ""
    avatar: str | None = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Username must be 1-255 characters")
        return v


class Media(ValueObject):
    """Media attachment of a comment."""

    media_type: MediaType
    file_url: str
    alt_text: str | None = None
    width: int | None = None
    height: int | None = None


class Link(ValueObject):
    """Link preview attached to a comment."""

    url: str
    title: str | None = None
    description: str | None = None
    display_text: str | None = None
    image_url: str | None = None


class UserReactions(ValueObject):
    """The current viewer's own reactions on a comment.

    Like and dislike are mutually exclusive on the server.
    """

    like: bool = False
    dislike: bool = False


class ContentRef(ValueObject):
    """Reference to the top-level content a search hit belongs to."""

    id: ObjectId
    title: str | None = None


class PaginationInfo(ValueObject):
    """Pagination summary for the presentation layer."""

    total: int = Field(default=0, ge=0)
    has_more: bool
    current_count: int = Field(ge=0)
