"""Comment gateway interface."""

from abc import ABC, abstractmethod
from typing import Any

from commentary.domain.model.comment import Comment
from commentary.domain.model.page import Page
from commentary.domain.model.search_result import SearchResult
from commentary.domain.model.thread import ThreadView
from commentary.domain.value import (
    CommentId,
    CommentSort,
    Link,
    Media,
    SearchType,
    TargetRef,
)


class CommentGateway(ABC):
    """Gateway to the platform's comment API.

    Defines the contract the core relies on. Implementations live in the
    adapter layer and must raise ``TransportError`` when a request fails.
    """

    @abstractmethod
    async def list_comments(
        self,
        target: TargetRef,
        sort: CommentSort,
        page: int,
        page_size: int,
    ) -> Page[Comment]:
        """List top-level comments of a content item with nested replies.

        Args:
            target: Content item
            sort: Ordering of top-level comments
            page: 1-based page number
            page_size: Maximum number of top-level comments per page

        Returns:
            One page of comments, replies resolved to the server's depth
        """
        pass

    @abstractmethod
    async def search_comments(
        self,
        query: str,
        search_type: SearchType,
        scope: TargetRef | None,
        sort: CommentSort,
        page: int,
        page_size: int,
    ) -> Page[SearchResult]:
        """Full-text search over comments.

        Args:
            query: Search query
            search_type: Field(s) to match against
            scope: Restrict to one content item (None searches everywhere)
            sort: Ordering of results
            page: 1-based page number
            page_size: Maximum number of results per page

        Returns:
            One page of flat search results
        """
        pass

    @abstractmethod
    async def get_thread(
        self,
        focal_id: CommentId,
        parent_levels: int,
        reply_depth: int,
    ) -> ThreadView:
        """Fetch a comment with its ancestors and a bounded reply subtree.

        Args:
            focal_id: Comment to center the thread on
            parent_levels: Maximum number of ancestors to return
            reply_depth: Maximum reply depth below the focal comment

        Returns:
            Thread view of the focal comment
        """
        pass

    @abstractmethod
    async def create_comment(
        self,
        target: TargetRef,
        content: str,
        media: Media | None = None,
        link: Link | None = None,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment or a reply.

        Returns:
            The created comment as stored by the server
        """
        pass

    @abstractmethod
    async def update_comment(self, comment_id: CommentId, patch: dict[str, Any]) -> Comment:
        """Update a comment's editable fields.

        Returns:
            The updated comment as stored by the server
        """
        pass

    @abstractmethod
    async def delete_comment(self, comment_id: CommentId) -> None:
        """Soft-delete a comment."""
        pass
