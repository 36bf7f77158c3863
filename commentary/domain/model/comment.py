"""Comment entity.

Comments are threaded discussions on a piece of content (a poll, an
article). The server resolves replies up to a declared depth and flags
nodes whose replies were cut off with ``has_more_replies``.
"""

from collections.abc import Iterable, Iterator
from datetime import datetime
from typing import Literal

from pydantic import Field

from commentary.domain.model.common import DomainModel
from commentary.domain.value import (
    AuthorInfo,
    CommentId,
    Link,
    Media,
    UserReactions,
)


class Comment(DomainModel):
    """Comment entity.

    Represents a top-level comment or a reply. ``reply_count`` is the count
    declared by the server and may exceed ``len(children)`` when replies were
    not loaded.

    Soft deletion keeps the node in place (a tombstone) so that its replies
    remain reachable; hiding childless tombstones is a rendering decision.
    """

    kind: Literal["comment"] = "comment"
    id: CommentId
    parent_id: CommentId | None = None
    content: str = Field(default="", max_length=10000)
    author_info: AuthorInfo
    media: Media | None = None
    link: Link | None = None
    like_count: int = Field(default=0, ge=0)
    dislike_count: int = Field(default=0, ge=0)
    user_reactions: UserReactions = UserReactions()
    reply_count: int = Field(default=0, ge=0)
    children: list["Comment"] = Field(default_factory=list, alias="replies")
    depth: int = Field(default=0, ge=0)
    is_author: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    has_more_replies: bool = False
    default_collapsed: bool = False
    is_deleted: bool = False
    is_edited: bool = False

    @property
    def has_children(self) -> bool:
        """Whether any replies are loaded under this comment."""
        return len(self.children) > 0


def iter_tree(roots: Iterable[Comment]) -> Iterator[Comment]:
    """Yield every comment of a forest in depth-first pre-order.

    Uses an explicit stack so very deep reply chains cannot exhaust the
    interpreter's recursion limit.
    """
    stack = list(reversed(list(roots)))
    while stack:
        comment = stack.pop()
        yield comment
        stack.extend(reversed(comment.children))
