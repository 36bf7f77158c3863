"""Unit tests for LoadCommentsUseCase."""

import asyncio

import pytest

from commentary.adapter.inmemory import InMemoryCommentGateway
from commentary.application.usecase.section import LoadCommentsRequest, LoadCommentsUseCase
from commentary.domain.model.mutation import ChangeSort, ShowSearch, ShowThread
from commentary.domain.model.section import CommentSection
from commentary.domain.service import AnnotationStore, ViewModeService
from commentary.domain.value import CommentSort, ViewMode
from tests.conftest import POLL, make_chain, make_comment
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, in-memory gateway
unit_env = create_env_fixture()


class TestLoadAll:
    """Tests for loading all mode."""

    @pytest.mark.asyncio
    async def test_loads_first_page(self, unit_env):
        """The first page is merged into the all accumulator."""
        # Arrange
        gateway = await unit_env.get(InMemoryCommentGateway)
        use_case = await unit_env.get(LoadCommentsUseCase)
        gateway.seed(POLL, *[make_comment(i) for i in range(1, 26)])
        section = CommentSection(target=POLL)

        # Act
        response = await use_case.execute(section, LoadCommentsRequest())

        # Assert
        assert response.loaded is True
        assert response.mode is ViewMode.ALL
        assert response.item_count == 20
        accumulator = section.accumulator(ViewMode.ALL)
        assert accumulator.total == 25
        assert accumulator.has_next is True

    @pytest.mark.asyncio
    async def test_second_load_is_served_from_memory(self, unit_env):
        """Without force, loaded data is not fetched again."""
        # Arrange
        gateway = await unit_env.get(InMemoryCommentGateway)
        use_case = await unit_env.get(LoadCommentsUseCase)
        gateway.seed(POLL, make_comment(1))
        section = CommentSection(target=POLL)
        await use_case.execute(section, LoadCommentsRequest())

        # Act
        await use_case.execute(section, LoadCommentsRequest())
        await use_case.execute(section, LoadCommentsRequest(force=True))

        # Assert
        assert [name for name, _ in gateway.calls] == ["list_comments", "list_comments"]

    @pytest.mark.asyncio
    async def test_seeds_collapse_hints(self, unit_env):
        """Server collapse hints reach the annotation store."""
        # Arrange
        gateway = await unit_env.get(InMemoryCommentGateway)
        use_case = await unit_env.get(LoadCommentsUseCase)
        annotations = await unit_env.get(AnnotationStore)
        gateway.seed(POLL, make_comment(1, default_collapsed=True))

        # Act
        await use_case.execute(CommentSection(target=POLL), LoadCommentsRequest())

        # Assert
        assert annotations.is_collapsed(1) is True

    @pytest.mark.asyncio
    async def test_failure_is_reported(self, unit_env):
        """A transport error leaves data unchanged and flags the mode."""
        # Arrange
        gateway = await unit_env.get(InMemoryCommentGateway)
        use_case = await unit_env.get(LoadCommentsUseCase)
        gateway.seed(POLL, make_comment(1))
        gateway.fail_next()
        section = CommentSection(target=POLL)

        # Act
        response = await use_case.execute(section, LoadCommentsRequest())

        # Assert
        assert response.failed is True
        assert ViewMode.ALL in section.failed
        assert section.accumulator(ViewMode.ALL).items == []

        # Retry succeeds and clears the flag
        retry = await use_case.execute(section, LoadCommentsRequest())
        assert retry.loaded is True
        assert section.failed == set()

    @pytest.mark.asyncio
    async def test_stale_response_is_discarded(self, unit_env):
        """A list page arriving after a switch to search is dropped."""
        # Arrange
        gateway = await unit_env.get(InMemoryCommentGateway)
        use_case = await unit_env.get(LoadCommentsUseCase)
        view_modes = await unit_env.get(ViewModeService)
        gateway.seed(POLL, make_comment(1, content="about ai"))
        section = CommentSection(target=POLL)
        gateway.gate = asyncio.Event()

        # Act
        pending = asyncio.create_task(use_case.execute(section, LoadCommentsRequest()))
        await asyncio.sleep(0)
        view_modes.navigate(section, ShowSearch(query="zz"))
        gateway.gate.set()
        response = await pending

        # Assert
        assert response.stale is True
        assert section.accumulator(ViewMode.ALL).items == []
        assert section.accumulator(ViewMode.SEARCH).items == []


class TestLoadOtherModes:
    """Tests for loading search and thread modes."""

    @pytest.mark.asyncio
    async def test_short_query_fetches_nothing(self, unit_env):
        """A search below the minimum length issues no request."""
        # Arrange
        gateway = await unit_env.get(InMemoryCommentGateway)
        use_case = await unit_env.get(LoadCommentsUseCase)
        view_modes = await unit_env.get(ViewModeService)
        section = CommentSection(target=POLL)
        view_modes.navigate(section, ShowSearch(query="a"))

        # Act
        response = await use_case.execute(section, LoadCommentsRequest())

        # Assert
        assert response.mode is None
        assert gateway.calls == []

    @pytest.mark.asyncio
    async def test_search_uses_view_parameters(self, unit_env):
        """Search sends the query, type, scope and sort of the view."""
        # Arrange
        gateway = await unit_env.get(InMemoryCommentGateway)
        use_case = await unit_env.get(LoadCommentsUseCase)
        view_modes = await unit_env.get(ViewModeService)
        gateway.seed(POLL, make_comment(1, content="about ai"), make_comment(2, content="other"))
        section = CommentSection(target=POLL)
        view_modes.navigate(section, ChangeSort(sort=CommentSort.OLDEST))
        view_modes.navigate(section, ShowSearch(query=" ai "))

        # Act
        response = await use_case.execute(section, LoadCommentsRequest())

        # Assert
        assert response.item_count == 1
        name, params = gateway.calls[-1]
        assert name == "search_comments"
        assert params["query"] == "ai"
        assert params["scope"] == POLL
        assert params["sort"] is CommentSort.OLDEST

    @pytest.mark.asyncio
    async def test_thread_load(self, unit_env):
        """Thread mode fetches the focal comment with bounded context."""
        # Arrange
        gateway = await unit_env.get(InMemoryCommentGateway)
        use_case = await unit_env.get(LoadCommentsUseCase)
        view_modes = await unit_env.get(ViewModeService)
        gateway.seed(POLL, make_chain(8))
        section = CommentSection(target=POLL)
        view_modes.navigate(section, ShowThread(comment_id=5))

        # Act
        response = await use_case.execute(section, LoadCommentsRequest())

        # Assert
        assert response.loaded is True
        assert section.thread.focal.id == 5
        assert [c.id for c in section.thread.parent_context] == [2, 3, 4]
        assert section.thread_loading is False
        _, params = gateway.calls[-1]
        assert (params["parent_levels"], params["reply_depth"]) == (3, 6)

    @pytest.mark.asyncio
    async def test_thread_not_found(self, unit_env):
        """A missing focal comment is a failed load."""
        # Arrange
        use_case = await unit_env.get(LoadCommentsUseCase)
        view_modes = await unit_env.get(ViewModeService)
        section = CommentSection(target=POLL)
        view_modes.navigate(section, ShowThread(comment_id=99))

        # Act
        response = await use_case.execute(section, LoadCommentsRequest())

        # Assert
        assert response.failed is True
        assert section.thread is None
        assert ViewMode.THREAD in section.failed
