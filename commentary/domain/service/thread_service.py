"""Thread reconstruction domain service."""

import logfire

from commentary.domain.error import StaleResponseError
from commentary.domain.model.arena import CommentArena
from commentary.domain.model.comment import Comment
from commentary.domain.model.section import CommentSection
from commentary.domain.model.thread import ThreadView
from commentary.domain.model.view_state import ViewState
from commentary.domain.value import CommentId, ViewMode

from .base import Service

DEFAULT_PARENT_LEVELS = 3
DEFAULT_REPLY_DEPTH = 6


class ThreadService(Service):
    """Builds the thread view of a single focal comment.

    Thread mode has no pagination. Because the reply subtree is cut at a
    bounded depth, a new reply may belong below the loaded depth, so the
    thread is always refetched after a mutation instead of patched locally.
    """

    def __init__(
        self,
        parent_levels: int = DEFAULT_PARENT_LEVELS,
        reply_depth: int = DEFAULT_REPLY_DEPTH,
    ) -> None:
        """Initialize thread service.

        Args:
            parent_levels: Maximum number of ancestors in the parent context
            reply_depth: Maximum reply depth below the focal comment
        """
        self.parent_levels = parent_levels
        self.reply_depth = reply_depth

    def reconstruct(
        self,
        arena: CommentArena,
        focal_id: CommentId,
        parent_levels: int | None = None,
        reply_depth: int | None = None,
    ) -> ThreadView | None:
        """Build a thread view from a flat arena.

        Args:
            arena: All known comments
            focal_id: Comment to center the thread on
            parent_levels: Ancestor bound (defaults to the configured bound)
            reply_depth: Reply depth bound (defaults to the configured bound)

        Returns:
            Thread view with parent context ordered root-first, or None if
            the focal comment is unknown
        """
        parent_levels = self.parent_levels if parent_levels is None else parent_levels
        reply_depth = self.reply_depth if reply_depth is None else reply_depth

        with logfire.span(
            "thread_service.reconstruct",
            focal_id=focal_id,
            parent_levels=parent_levels,
            reply_depth=reply_depth,
        ):
            if focal_id not in arena:
                logfire.warn("Focal comment not found", focal_id=focal_id)
                return None

            focal = arena.materialize(focal_id, max_depth=reply_depth)
            ancestors = arena.ancestors(focal_id, limit=parent_levels)
            ancestors.reverse()  # Nearest-first -> root-first

            logfire.info(
                "Thread reconstructed",
                focal_id=focal_id,
                ancestors=len(ancestors),
                loaded_replies=arena.descendant_count(focal_id),
            )
            return ThreadView(focal=focal, parent_context=ancestors)

    def from_response(self, focal: Comment, parent_context: list[Comment]) -> ThreadView:
        """Normalize a server thread response into root-first order.

        The ancestor chain is rebuilt by following ``parent_id`` from the
        focal comment, so the result does not depend on the order the server
        listed the ancestors in. Entries that are not on the chain are
        dropped.
        """
        by_id = {comment.id: comment for comment in parent_context}
        chain: list[Comment] = []
        parent_id = focal.parent_id
        while parent_id is not None and parent_id in by_id:
            parent = by_id.pop(parent_id)
            chain.append(parent)
            parent_id = parent.parent_id

        if by_id:
            logfire.warn(
                "Dropped thread context entries not on the ancestor chain",
                focal_id=focal.id,
                dropped=sorted(by_id),
            )

        chain.reverse()
        return ThreadView(focal=focal, parent_context=chain)

    def commit(self, section: CommentSection, snapshot: ViewState, thread: ThreadView) -> None:
        """Store a thread response on the section it was requested for.

        Raises:
            StaleResponseError: If the view changed since the request
        """
        if section.view != snapshot:
            raise StaleResponseError("thread", "view state changed while in flight")
        section.thread = thread
        section.thread_loading = False
        section.failed.discard(ViewMode.THREAD)

    def commit_failure(self, section: CommentSection, snapshot: ViewState) -> bool:
        """Record a failed thread request, unless it went stale.

        The previously loaded thread (if any) is kept.

        Returns:
            True if the failure was recorded
        """
        if section.view != snapshot:
            return False
        section.thread_loading = False
        section.failed.add(ViewMode.THREAD)
        return True
