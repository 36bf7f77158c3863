"""Test configuration and fixtures."""

from datetime import datetime, timedelta

import logfire
import pytest

from commentary.domain.model.comment import Comment
from commentary.domain.model.search_result import SearchResult
from commentary.domain.value import (
    AuthorInfo,
    CommentId,
    ContentType,
    ObjectId,
    TargetRef,
)

POLL = TargetRef(content_type=ContentType.POLL, object_id=ObjectId(1))
BASE_TIME = datetime(2025, 1, 1, 12, 0, 0)


@pytest.fixture(scope="session", autouse=True)
def quiet_logfire():
    """Keep logfire local and silent during tests."""
    logfire.configure(send_to_logfire=False, console=False)


def make_author(username: str = "alice") -> AuthorInfo:
    """Helper function to build author info."""
    return AuthorInfo(username=username, display_name=username.title())


def make_comment(
    comment_id: int,
    content: str | None = None,
    parent_id: int | None = None,
    replies: list[Comment] | None = None,
    author: str = "alice",
    **fields,
) -> Comment:
    """Helper function to build a comment.

    ``created_at`` grows with the id, so higher ids are newer. ``depth`` and
    ``reply_count`` follow the arguments unless given explicitly.
    """
    replies = replies or []
    fields.setdefault("depth", 0 if parent_id is None else 1)
    fields.setdefault("reply_count", len(replies))
    fields.setdefault("created_at", BASE_TIME + timedelta(minutes=comment_id))
    return Comment(
        id=CommentId(comment_id),
        parent_id=CommentId(parent_id) if parent_id is not None else None,
        content=content if content is not None else f"comment {comment_id}",
        author_info=make_author(author),
        replies=replies,
        **fields,
    )


def make_search_result(comment_id: int, content: str | None = None) -> SearchResult:
    """Helper function to build a search result."""
    return SearchResult(
        id=CommentId(comment_id),
        content=content if content is not None else f"comment {comment_id}",
        author_info=make_author(),
        created_at=BASE_TIME + timedelta(minutes=comment_id),
    )


def make_chain(length: int, start_id: int = 1) -> Comment:
    """Helper function to build a single reply chain ``length`` nodes deep.

    Built bottom-up without recursion so very long chains are fine.
    """
    node: Comment | None = None
    for offset in reversed(range(length)):
        comment_id = start_id + offset
        parent_id = comment_id - 1 if offset > 0 else None
        node = make_comment(
            comment_id,
            parent_id=parent_id,
            replies=[node] if node is not None else [],
            depth=offset,
        )
    assert node is not None
    return node
