"""Unit tests for MutationService."""

import pytest

from commentary.domain.error import ValidationError
from commentary.domain.model.accumulator import Accumulator
from commentary.domain.model.comment import iter_tree
from commentary.domain.model.mutation import CreateMutation, ReplyMutation
from commentary.domain.model.section import CommentSection
from commentary.domain.model.view_state import ViewState
from commentary.domain.service import MutationService
from commentary.domain.value import MutationKind, MutationOutcome, ViewMode
from tests.conftest import POLL, make_comment, make_search_result


def _section(mode: ViewMode = ViewMode.ALL) -> CommentSection:
    view = ViewState(mode=mode)
    if mode is ViewMode.SEARCH:
        view = ViewState(mode=mode, search_query="old")
    elif mode is ViewMode.THREAD:
        view = ViewState(mode=mode, focused_comment_id=1)
    section = CommentSection(target=POLL, view=view)
    section.accumulators[ViewMode.ALL] = Accumulator(
        items=[
            make_comment(1, replies=[make_comment(42, parent_id=1)]),
            make_comment(7, content="old"),
        ],
        total=2,
        has_next=False,
        loaded=True,
    )
    section.accumulators[ViewMode.SEARCH] = Accumulator(
        items=[make_search_result(7, content="old")], total=1, has_next=False, loaded=True
    )
    return section


def _items(section):
    return section.accumulator(ViewMode.ALL).items


class TestApplyAllMode:
    """Tests for apply in all mode."""

    def test_update_from_dict(self):
        """Updating id 7 changes only its content."""
        section = _section()

        outcome = MutationService().apply(
            section, MutationKind.UPDATE, {"id": 7, "content": "new"}
        )

        assert outcome is MutationOutcome.APPLIED
        contents = {c.id: c.content for c in iter_tree(_items(section))}
        assert contents == {1: "comment 1", 42: "comment 42", 7: "new"}

    def test_create_prepends_and_counts(self):
        """A created comment goes first and the total grows."""
        section = _section()

        outcome = MutationService().apply(
            section, MutationKind.CREATE, CreateMutation(comment=make_comment(50))
        )

        assert outcome is MutationOutcome.APPLIED
        assert [c.id for c in _items(section)] == [50, 1, 7]
        assert section.accumulator(ViewMode.ALL).total == 3

    def test_duplicate_create_is_skipped(self):
        """Creating an id already shown is not applied twice."""
        section = _section()

        outcome = MutationService().apply(
            section, MutationKind.CREATE, {"comment": make_comment(7)}
        )

        assert outcome is MutationOutcome.SKIPPED
        assert section.accumulator(ViewMode.ALL).total == 2

    def test_reply(self):
        """A reply is prepended under its parent."""
        section = _section()

        outcome = MutationService().apply(
            section,
            MutationKind.REPLY,
            ReplyMutation(parent_id=42, reply=make_comment(100, parent_id=42, depth=2)),
        )

        assert outcome is MutationOutcome.APPLIED
        parent = _items(section)[0].children[0]
        assert parent.children[0].id == 100
        assert parent.reply_count == 1

    def test_delete(self):
        """Deleting marks a tombstone."""
        section = _section()

        outcome = MutationService().apply(section, MutationKind.DELETE, {"id": 42})

        assert outcome is MutationOutcome.APPLIED
        assert _items(section)[0].children[0].is_deleted is True

    def test_missing_target_is_not_found(self):
        """A mutation for an id that is no longer loaded is dropped."""
        section = _section()
        before = _items(section)

        outcome = MutationService().apply(section, MutationKind.DELETE, {"id": 999})

        assert outcome is MutationOutcome.NOT_FOUND
        assert _items(section) is before


class TestApplyOtherModes:
    """Tests for apply outside all mode."""

    def test_thread_mode_requires_refetch(self):
        """Thread data is never patched locally."""
        section = _section(ViewMode.THREAD)
        before = _items(section)

        outcome = MutationService().apply(section, MutationKind.DELETE, {"id": 7})

        assert outcome is MutationOutcome.REFETCH_REQUIRED
        assert _items(section) is before

    def test_search_mode_is_skipped(self):
        """Search results are not patched."""
        section = _section(ViewMode.SEARCH)

        outcome = MutationService().apply(
            section, MutationKind.UPDATE, {"id": 7, "content": "new"}
        )

        assert outcome is MutationOutcome.SKIPPED
        assert section.accumulator(ViewMode.SEARCH).items[0].content == "old"


class TestApplySnapshot:
    """Tests for apply with the view state a request was issued under."""

    def test_changed_view_is_skipped(self):
        """A mutation confirmed after the view changed is not applied."""
        section = _section()
        before = _items(section)
        snapshot = ViewState(mode=ViewMode.ALL, search_query="earlier")

        outcome = MutationService().apply(
            section, MutationKind.UPDATE, {"id": 7, "content": "new"}, snapshot=snapshot
        )

        assert outcome is MutationOutcome.SKIPPED
        assert _items(section) is before

    def test_unchanged_view_is_applied(self):
        """A matching snapshot applies the mutation as usual."""
        section = _section()

        outcome = MutationService().apply(
            section,
            MutationKind.UPDATE,
            {"id": 7, "content": "new"},
            snapshot=section.view,
        )

        assert outcome is MutationOutcome.APPLIED
        assert _items(section)[1].content == "new"


class TestValidation:
    """Tests for payload validation."""

    def test_empty_content_rejected_before_change(self):
        """Whitespace-only content is a validation error."""
        section = _section()
        before = _items(section)

        with pytest.raises(ValidationError):
            MutationService().apply(section, MutationKind.UPDATE, {"id": 7, "content": "  "})

        assert _items(section) is before

    def test_empty_reply_rejected(self):
        """A reply without content is rejected."""
        with pytest.raises(ValidationError):
            MutationService().parse(
                MutationKind.REPLY,
                {"parent_id": 1, "reply": make_comment(2, content="", parent_id=1)},
            )

    def test_malformed_payload_rejected(self):
        """A payload of the wrong shape becomes a domain validation error."""
        with pytest.raises(ValidationError, match="Invalid delete payload"):
            MutationService().parse(MutationKind.DELETE, {"comment": 1})

    def test_require_content(self):
        """require_content accepts text and rejects blanks."""
        MutationService.require_content(MutationKind.CREATE, "hello")

        with pytest.raises(ValidationError):
            MutationService.require_content(MutationKind.CREATE, None)
