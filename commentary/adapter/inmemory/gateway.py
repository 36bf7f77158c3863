"""In-memory comment gateway for testing."""

import asyncio
from datetime import datetime
from typing import Any

from commentary.domain.error import TransportError
from commentary.domain.gateway.comment import CommentGateway
from commentary.domain.model.arena import CommentArena
from commentary.domain.model.comment import Comment, iter_tree
from commentary.domain.model.page import Page
from commentary.domain.model.search_result import SearchResult
from commentary.domain.model.thread import ThreadView
from commentary.domain.service.thread_service import ThreadService
from commentary.domain.value import (
    AuthorInfo,
    CommentId,
    CommentSort,
    ContentRef,
    Link,
    Media,
    SearchType,
    TargetRef,
)

DEFAULT_LIST_DEPTH = 3


class InMemoryCommentGateway(CommentGateway):
    """In-memory implementation of CommentGateway for testing.

    Behaves like the platform API: top-level comments are paginated, replies
    are nested up to ``list_depth`` levels, deleted comments are returned as
    tombstones. Failures can be injected with ``fail_next``.
    """

    def __init__(self, list_depth: int = DEFAULT_LIST_DEPTH) -> None:
        self.list_depth = list_depth
        self.viewer = AuthorInfo(username="viewer", display_name="Viewer")
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._arenas: dict[TargetRef, CommentArena] = {}
        self._targets: dict[CommentId, TargetRef] = {}
        self._failures: list[TransportError] = []
        self._next_id = 1
        self._thread_service = ThreadService()
        # Set to pause every request until the event is set
        self.gate: asyncio.Event | None = None

    # Seeding helpers (not part of the gateway contract)

    def seed(self, target: TargetRef, *comments: Comment) -> None:
        """Store comments (with nested replies) for a content item."""
        arena = self._arenas.setdefault(target, CommentArena())
        for node in iter_tree(comments):
            arena.add(node)
            self._targets[node.id] = target
            self._next_id = max(self._next_id, node.id + 1)

    def fail_next(self, operation: str = "request", status_code: int | None = 503) -> None:
        """Make the next request raise a TransportError."""
        self._failures.append(
            TransportError(operation, "injected failure", status_code=status_code)
        )

    async def _enter(self, operation: str, **params: Any) -> None:
        self.calls.append((operation, params))
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        if self._failures:
            raise self._failures.pop(0)

    def _arena_for(self, comment_id: CommentId) -> CommentArena:
        target = self._targets.get(comment_id)
        if target is None:
            raise TransportError("lookup", f"comment {comment_id} not found", status_code=404)
        return self._arenas[target]

    # Gateway contract

    async def list_comments(
        self,
        target: TargetRef,
        sort: CommentSort,
        page: int,
        page_size: int,
    ) -> Page[Comment]:
        """List top-level comments with nested replies."""
        await self._enter(
            "list_comments", target=target, sort=sort, page=page, page_size=page_size
        )
        arena = self._arenas.get(target, CommentArena())
        roots = [arena.get(root_id) for root_id in arena.root_ids]
        roots = self._sorted(roots, sort)

        start = (page - 1) * page_size
        window = roots[start : start + page_size]
        items = [arena.materialize(root.id, max_depth=self.list_depth) for root in window]
        return Page[Comment](
            items=items,
            total=len(roots),
            has_next=start + page_size < len(roots),
        )

    async def search_comments(
        self,
        query: str,
        search_type: SearchType,
        scope: TargetRef | None,
        sort: CommentSort,
        page: int,
        page_size: int,
    ) -> Page[SearchResult]:
        """Case-insensitive substring search."""
        await self._enter(
            "search_comments",
            query=query,
            search_type=search_type,
            scope=scope,
            sort=sort,
            page=page,
            page_size=page_size,
        )
        needle = query.strip().lower()
        arenas = [self._arenas[scope]] if scope in self._arenas else []
        if scope is None:
            arenas = list(self._arenas.values())

        hits: list[Comment] = []
        for arena in arenas:
            for comment_id in self._all_ids(arena):
                comment = arena.get(comment_id)
                if not comment.is_deleted and self._matches(comment, needle, search_type):
                    hits.append(comment)

        ordered = self._sorted(hits, sort)
        start = (page - 1) * page_size
        window = ordered[start : start + page_size]
        items = [self._to_search_result(comment) for comment in window]
        return Page[SearchResult](
            items=items,
            total=len(ordered),
            has_next=start + page_size < len(ordered),
        )

    async def get_thread(
        self,
        focal_id: CommentId,
        parent_levels: int,
        reply_depth: int,
    ) -> ThreadView:
        """Reconstruct the thread from the stored arena."""
        await self._enter(
            "get_thread",
            focal_id=focal_id,
            parent_levels=parent_levels,
            reply_depth=reply_depth,
        )
        thread = self._thread_service.reconstruct(
            self._arena_for(focal_id), focal_id, parent_levels, reply_depth
        )
        if thread is None:
            raise TransportError("get_thread", f"comment {focal_id} not found", 404)
        return thread

    async def create_comment(
        self,
        target: TargetRef,
        content: str,
        media: Media | None = None,
        link: Link | None = None,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Store a new comment authored by the viewer."""
        await self._enter(
            "create_comment", target=target, content=content, parent_id=parent_id
        )
        arena = self._arenas.setdefault(target, CommentArena())
        depth = 0
        if parent_id is not None:
            parent = arena.get(parent_id)
            if parent is None:
                raise TransportError("create_comment", "parent comment not found", 400)
            depth = parent.depth + 1
            arena.replace(parent.model_copy(update={"reply_count": parent.reply_count + 1}))

        comment = Comment(
            id=CommentId(self._next_id),
            parent_id=parent_id,
            content=content,
            author_info=self.viewer,
            media=media,
            link=link,
            depth=depth,
            is_author=True,
            created_at=datetime.now(),
        )
        self._next_id += 1
        arena.add(comment, prepend=True)
        self._targets[comment.id] = target
        return comment

    async def update_comment(self, comment_id: CommentId, patch: dict[str, Any]) -> Comment:
        """Merge the patch and mark the comment edited."""
        await self._enter("update_comment", comment_id=comment_id, patch=patch)
        arena = self._arena_for(comment_id)
        existing = arena.get(comment_id)
        if existing.is_deleted:
            raise TransportError("update_comment", "comment is deleted", 400)
        updated = existing.model_copy(update={**patch, "is_edited": True})
        arena.replace(updated)
        return updated

    async def delete_comment(self, comment_id: CommentId) -> None:
        """Soft-delete: keep the node, clear its content."""
        await self._enter("delete_comment", comment_id=comment_id)
        arena = self._arena_for(comment_id)
        existing = arena.get(comment_id)
        arena.replace(
            existing.model_copy(
                update={"is_deleted": True, "content": "", "media": None, "link": None}
            )
        )

    # Helpers

    @staticmethod
    def _all_ids(arena: CommentArena) -> list[CommentId]:
        ids: list[CommentId] = []
        stack = list(reversed(arena.root_ids))
        while stack:
            current = stack.pop()
            ids.append(current)
            stack.extend(reversed(arena.child_ids(current)))
        return ids

    @staticmethod
    def _matches(comment: Comment, needle: str, search_type: SearchType) -> bool:
        in_content = needle in comment.content.lower()
        in_author = (
            needle in comment.author_info.username.lower()
            or needle in comment.author_info.display_name.lower()
        )
        if search_type is SearchType.CONTENT:
            return in_content
        if search_type is SearchType.AUTHOR:
            return in_author
        if search_type is SearchType.MEDIA:
            return comment.media is not None and in_content
        if search_type is SearchType.LINKS:
            return comment.link is not None and (
                in_content or needle in comment.link.url.lower()
            )
        return in_content or in_author

    @staticmethod
    def _sorted(comments: list[Comment], sort: CommentSort) -> list[Comment]:
        # Ties broken by id
        if sort is CommentSort.NEWEST:
            return sorted(comments, key=lambda c: (c.created_at, c.id), reverse=True)
        if sort is CommentSort.OLDEST:
            return sorted(comments, key=lambda c: (c.created_at, c.id))
        if sort is CommentSort.MOST_LIKED:
            return sorted(comments, key=lambda c: (-c.like_count, c.id))
        return sorted(comments, key=lambda c: (-c.reply_count, c.id))

    def _to_search_result(self, comment: Comment) -> SearchResult:
        target = self._targets[comment.id]
        return SearchResult(
            id=comment.id,
            parent_id=comment.parent_id,
            content=comment.content,
            author_info=comment.author_info,
            created_at=comment.created_at,
            depth=comment.depth,
            like_count=comment.like_count,
            reply_count=comment.reply_count,
            has_media=comment.media is not None,
            has_link=comment.link is not None,
            poll_content=ContentRef(id=target.object_id),
        )
