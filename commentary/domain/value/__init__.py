"""Domain value objects for comment sections."""

from commentary.domain.value.identifiers import CommentId, ObjectId, ProfileId
from commentary.domain.value.types import (
    AuthorInfo,
    CommentSort,
    ContentRef,
    ContentType,
    EmptyState,
    Link,
    Media,
    MediaType,
    MutationKind,
    MutationOutcome,
    PaginationInfo,
    SearchType,
    TargetRef,
    UserReactions,
    ViewMode,
)

__all__ = [
    # Identifiers
    "CommentId",
    "ObjectId",
    "ProfileId",
    # Types
    "AuthorInfo",
    "CommentSort",
    "ContentRef",
    "ContentType",
    "EmptyState",
    "Link",
    "Media",
    "MediaType",
    "MutationKind",
    "MutationOutcome",
    "PaginationInfo",
    "SearchType",
    "TargetRef",
    "UserReactions",
    "ViewMode",
]
