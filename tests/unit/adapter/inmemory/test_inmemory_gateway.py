"""Unit tests for InMemoryCommentGateway."""

import pytest

from commentary.adapter.inmemory import InMemoryCommentGateway
from commentary.domain.error import TransportError
from commentary.domain.value import (
    CommentSort,
    ContentType,
    Link,
    ObjectId,
    SearchType,
    TargetRef,
)
from tests.conftest import POLL, make_chain, make_comment

OTHER = TargetRef(content_type=ContentType.ARTICLE, object_id=ObjectId(2))


class TestListComments:
    """Tests for list_comments."""

    @pytest.mark.asyncio
    async def test_paginates_top_level(self):
        """Pages hold top-level comments only, newest first."""
        gateway = InMemoryCommentGateway()
        gateway.seed(POLL, *[make_comment(i) for i in range(1, 26)])

        first = await gateway.list_comments(POLL, CommentSort.NEWEST, 1, 20)
        second = await gateway.list_comments(POLL, CommentSort.NEWEST, 2, 20)

        assert [c.id for c in first.items] == list(range(25, 5, -1))
        assert first.has_next is True
        assert [c.id for c in second.items] == [5, 4, 3, 2, 1]
        assert second.has_next is False
        assert second.total == 25

    @pytest.mark.asyncio
    async def test_sort_orders(self):
        """Oldest, most liked and most replies orderings."""
        gateway = InMemoryCommentGateway()
        gateway.seed(
            POLL,
            make_comment(1, like_count=5),
            make_comment(2, like_count=9, replies=[make_comment(3, parent_id=2)]),
            make_comment(4),
        )

        oldest = await gateway.list_comments(POLL, CommentSort.OLDEST, 1, 20)
        liked = await gateway.list_comments(POLL, CommentSort.MOST_LIKED, 1, 20)
        replied = await gateway.list_comments(POLL, CommentSort.MOST_REPLIES, 1, 20)

        assert [c.id for c in oldest.items] == [1, 2, 4]
        assert [c.id for c in liked.items] == [2, 1, 4]
        assert replied.items[0].id == 2

    @pytest.mark.asyncio
    async def test_nests_replies_to_list_depth(self):
        """Replies beyond the list depth are cut and flagged."""
        gateway = InMemoryCommentGateway(list_depth=2)
        gateway.seed(POLL, make_chain(5))

        page = await gateway.list_comments(POLL, CommentSort.NEWEST, 1, 20)

        third = page.items[0].children[0].children[0]
        assert third.id == 3
        assert third.children == []
        assert third.has_more_replies is True

    @pytest.mark.asyncio
    async def test_unknown_target_is_empty(self):
        """A content item without comments returns an empty page."""
        page = await InMemoryCommentGateway().list_comments(OTHER, CommentSort.NEWEST, 1, 20)

        assert page.items == []
        assert page.has_next is False


class TestSearchComments:
    """Tests for search_comments."""

    @pytest.mark.asyncio
    async def test_matches_content_case_insensitively(self):
        """Nested replies are searched too."""
        gateway = InMemoryCommentGateway()
        gateway.seed(
            POLL,
            make_comment(1, content="About AI", replies=[make_comment(2, content="ai too", parent_id=1)]),
            make_comment(3, content="weather"),
        )

        page = await gateway.search_comments("ai", SearchType.ALL, POLL, CommentSort.OLDEST, 1, 20)

        assert [r.id for r in page.items] == [1, 2]
        assert page.items[0].poll_content.id == POLL.object_id

    @pytest.mark.asyncio
    async def test_search_type_filters(self):
        """Author and link searches look at their own fields."""
        gateway = InMemoryCommentGateway()
        gateway.seed(
            POLL,
            make_comment(1, content="hello", author="bob"),
            make_comment(2, content="see link", link=Link(url="https://bob.example")),
        )

        by_author = await gateway.search_comments("bob", SearchType.AUTHOR, POLL, CommentSort.OLDEST, 1, 20)
        by_link = await gateway.search_comments("bob", SearchType.LINKS, POLL, CommentSort.OLDEST, 1, 20)
        by_content = await gateway.search_comments("bob", SearchType.CONTENT, POLL, CommentSort.OLDEST, 1, 20)

        assert [r.id for r in by_author.items] == [1]
        assert [r.id for r in by_link.items] == [2]
        assert by_content.items == []

    @pytest.mark.asyncio
    async def test_scope_and_deleted(self):
        """Other content items and deleted comments are excluded."""
        gateway = InMemoryCommentGateway()
        gateway.seed(POLL, make_comment(1, content="ai"), make_comment(2, content="ai", is_deleted=True))
        gateway.seed(OTHER, make_comment(3, content="ai"))

        scoped = await gateway.search_comments("ai", SearchType.ALL, POLL, CommentSort.OLDEST, 1, 20)
        everywhere = await gateway.search_comments("ai", SearchType.ALL, None, CommentSort.OLDEST, 1, 20)

        assert [r.id for r in scoped.items] == [1]
        assert [r.id for r in everywhere.items] == [1, 3]


class TestThreadAndMutations:
    """Tests for get_thread and the mutation operations."""

    @pytest.mark.asyncio
    async def test_get_thread(self):
        """The thread has bounded ancestors and replies."""
        gateway = InMemoryCommentGateway()
        gateway.seed(POLL, make_chain(10))

        thread = await gateway.get_thread(6, parent_levels=3, reply_depth=6)

        assert [c.id for c in thread.parent_context] == [3, 4, 5]
        assert thread.focal.id == 6

    @pytest.mark.asyncio
    async def test_get_thread_unknown(self):
        """An unknown focal comment is a 404 transport error."""
        with pytest.raises(TransportError) as exc_info:
            await InMemoryCommentGateway().get_thread(1, 3, 6)

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_create_reply_bumps_parent(self):
        """Replies get the next id and count on their parent."""
        gateway = InMemoryCommentGateway()
        gateway.seed(POLL, make_comment(1))

        reply = await gateway.create_comment(POLL, "hi", parent_id=1)
        page = await gateway.list_comments(POLL, CommentSort.NEWEST, 1, 20)

        assert reply.id == 2
        assert reply.depth == 1
        assert page.items[0].reply_count == 1
        assert page.items[0].children[0].id == 2

    @pytest.mark.asyncio
    async def test_update_and_delete(self):
        """Updates mark edited, deletes leave a tombstone."""
        gateway = InMemoryCommentGateway()
        gateway.seed(POLL, make_comment(1))

        updated = await gateway.update_comment(1, {"content": "edited"})
        await gateway.delete_comment(1)
        page = await gateway.list_comments(POLL, CommentSort.NEWEST, 1, 20)

        assert updated.is_edited is True
        assert updated.content == "edited"
        assert page.items[0].is_deleted is True
        assert page.items[0].content == ""

    @pytest.mark.asyncio
    async def test_fail_next(self):
        """Injected failures hit the next call only."""
        gateway = InMemoryCommentGateway()
        gateway.fail_next()

        with pytest.raises(TransportError):
            await gateway.list_comments(POLL, CommentSort.NEWEST, 1, 20)

        page = await gateway.list_comments(POLL, CommentSort.NEWEST, 1, 20)
        assert page.items == []
        assert [name for name, _ in gateway.calls] == ["list_comments", "list_comments"]
