"""Unit tests for ThreadService."""

import pytest

from commentary.domain.error import StaleResponseError
from commentary.domain.model.arena import CommentArena
from commentary.domain.model.section import CommentSection
from commentary.domain.model.thread import ThreadView
from commentary.domain.model.view_state import ViewState
from commentary.domain.service import ThreadService
from commentary.domain.value import ViewMode
from tests.conftest import POLL, make_chain, make_comment


class TestReconstruct:
    """Tests for reconstruct."""

    def test_parent_context_is_root_first_and_bounded(self):
        """At most parent_levels ancestors, farthest first."""
        arena = CommentArena.from_forest([make_chain(10)])
        service = ThreadService(parent_levels=3, reply_depth=6)

        thread = service.reconstruct(arena, 5)

        assert [c.id for c in thread.parent_context] == [2, 3, 4]
        assert thread.focal.id == 5

    def test_replies_cut_at_reply_depth(self):
        """The focal subtree is bounded and flags truncated nodes."""
        arena = CommentArena.from_forest([make_chain(10)])
        service = ThreadService(parent_levels=3, reply_depth=2)

        thread = service.reconstruct(arena, 5)

        child = thread.focal.children[0]
        grandchild = child.children[0]
        assert (child.id, grandchild.id) == (6, 7)
        assert grandchild.children == []
        assert grandchild.has_more_replies is True

    def test_root_focal_has_empty_context(self):
        """A top-level focal comment has no parent context."""
        arena = CommentArena.from_forest([make_comment(1)])

        thread = ThreadService().reconstruct(arena, 1)

        assert thread.parent_context == []

    def test_unknown_focal_returns_none(self):
        """An unknown focal id yields no thread."""
        assert ThreadService().reconstruct(CommentArena(), 1) is None

    def test_explicit_bounds_override_defaults(self):
        """Per-call bounds take precedence over the configured ones."""
        arena = CommentArena.from_forest([make_chain(10)])

        thread = ThreadService(parent_levels=3).reconstruct(arena, 5, parent_levels=1)

        assert [c.id for c in thread.parent_context] == [4]


class TestFromResponse:
    """Tests for from_response."""

    def test_orders_context_root_first(self):
        """Ancestors listed nearest-first are reordered root-first."""
        focal = make_comment(4, parent_id=3)
        context = [make_comment(3, parent_id=2), make_comment(2, parent_id=1), make_comment(1)]

        thread = ThreadService().from_response(focal, context)

        assert [c.id for c in thread.parent_context] == [1, 2, 3]

    def test_drops_entries_off_the_chain(self):
        """Entries that are not ancestors of the focal comment are dropped."""
        focal = make_comment(4, parent_id=3)
        context = [make_comment(3), make_comment(9)]

        thread = ThreadService().from_response(focal, context)

        assert [c.id for c in thread.parent_context] == [3]


class TestCommit:
    """Tests for commit."""

    def test_commit_sets_thread(self):
        """A matching snapshot stores the thread and clears loading."""
        section = CommentSection(target=POLL, view=ViewState(mode=ViewMode.THREAD, focused_comment_id=1))
        section.thread_loading = True
        thread = ThreadView(focal=make_comment(1))

        ThreadService().commit(section, section.view, thread)

        assert section.thread is thread
        assert section.thread_loading is False

    def test_commit_rejects_changed_view(self):
        """A thread for a previous focus is stale."""
        section = CommentSection(target=POLL, view=ViewState(mode=ViewMode.THREAD, focused_comment_id=1))
        snapshot = section.view
        section.view = ViewState(mode=ViewMode.THREAD, focused_comment_id=2)

        with pytest.raises(StaleResponseError):
            ThreadService().commit(section, snapshot, ThreadView(focal=make_comment(1)))

        assert section.thread is None

    def test_commit_failure_keeps_previous_thread(self):
        """A failed refetch leaves the loaded thread in place."""
        section = CommentSection(target=POLL, view=ViewState(mode=ViewMode.THREAD, focused_comment_id=1))
        thread = ThreadView(focal=make_comment(1))
        section.thread = thread

        assert ThreadService().commit_failure(section, section.view) is True
        assert section.thread is thread
        assert ViewMode.THREAD in section.failed
