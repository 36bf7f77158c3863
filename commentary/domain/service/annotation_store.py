"""UI annotation store."""

from collections.abc import Iterable

import logfire

from commentary.domain.model.annotation import Annotation
from commentary.domain.model.comment import Comment, iter_tree
from commentary.domain.value import CommentId

from .base import Service


class AnnotationStore(Service):
    """Session-scoped collapse, read-more and highlight state keyed by id.

    The store is independent of which view mode is active: a comment
    collapsed in the list stays collapsed when it shows up in a thread.
    Entries are created lazily on first observation and never removed
    during the session.

    One instance is created per session and injected where needed; there is
    no module-level state.
    """

    def __init__(self) -> None:
        self._entries: dict[CommentId, Annotation] = {}
        self._collapse_hints: dict[CommentId, bool] = {}
        self._highlight: CommentId | None = None

    def seed(self, comments: Iterable[Comment]) -> None:
        """Record server-suggested collapse state for every comment.

        Walks nested replies. A hint is recorded once per id; ids that
        already have an entry keep their current state.
        """
        added = 0
        for comment in iter_tree(comments):
            if comment.id not in self._collapse_hints:
                self._collapse_hints[comment.id] = comment.default_collapsed
                added += 1
        if added:
            logfire.debug("Collapse hints recorded", count=added)

    def _entry(self, comment_id: CommentId) -> Annotation:
        entry = self._entries.get(comment_id)
        if entry is None:
            entry = Annotation(collapsed=self._collapse_hints.get(comment_id, False))
            self._entries[comment_id] = entry
        return entry

    def is_collapsed(self, comment_id: CommentId) -> bool:
        """Whether the comment's replies are hidden."""
        return self._entry(comment_id).collapsed

    def is_expanded(self, comment_id: CommentId) -> bool:
        """Whether a long comment is shown in full ("read more")."""
        return self._entry(comment_id).read_more_expanded

    def toggle_collapse(self, comment_id: CommentId) -> bool:
        """Flip the collapsed flag.

        Returns:
            New collapsed state
        """
        entry = self._entry(comment_id)
        self._entries[comment_id] = entry.model_copy(
            update={"collapsed": not entry.collapsed}
        )
        return not entry.collapsed

    def toggle_read_more(self, comment_id: CommentId) -> bool:
        """Flip the read-more flag.

        Returns:
            New expanded state
        """
        entry = self._entry(comment_id)
        self._entries[comment_id] = entry.model_copy(
            update={"read_more_expanded": not entry.read_more_expanded}
        )
        return not entry.read_more_expanded

    def set_highlight(self, comment_id: CommentId | None) -> CommentId | None:
        """Highlight the reply line of a comment.

        Highlighting the comment that is already highlighted clears the
        highlight. Comment data is never touched.

        Returns:
            The highlighted id after the call
        """
        self._highlight = None if comment_id == self._highlight else comment_id
        return self._highlight

    def get_highlight(self) -> CommentId | None:
        """Currently highlighted comment id."""
        return self._highlight

    def is_highlighted(self, comment_id: CommentId) -> bool:
        """Whether this comment's reply line is highlighted."""
        return self._highlight is not None and self._highlight == comment_id

    def __len__(self) -> int:
        return len(self._entries)
