"""Load comments use case."""

import logfire
from pydantic import BaseModel

from commentary.application.usecase.base import BaseUseCase
from commentary.config import Settings
from commentary.domain.error import StaleResponseError, TransportError
from commentary.domain.gateway.comment import CommentGateway
from commentary.domain.model.comment import Comment
from commentary.domain.model.page import Page
from commentary.domain.model.section import CommentSection
from commentary.domain.model.view_state import ViewState
from commentary.domain.service import (
    AnnotationStore,
    PaginationService,
    ThreadService,
    ViewModeService,
)
from commentary.domain.value import ViewMode


async def fetch_page(
    gateway: CommentGateway,
    section: CommentSection,
    snapshot: ViewState,
    mode: ViewMode,
    page: int,
    page_size: int,
) -> Page:
    """Request one page of a paginated mode under a view snapshot."""
    if mode is ViewMode.ALL:
        return await gateway.list_comments(section.target, snapshot.sort, page, page_size)
    return await gateway.search_comments(
        snapshot.search_query,
        snapshot.search_type,
        section.target,
        snapshot.sort,
        page,
        page_size,
    )


class LoadCommentsRequest(BaseModel):
    """Load comments request."""

    # Reload even if the active mode already holds data
    force: bool = False


class LoadCommentsResponse(BaseModel):
    """Load comments response."""

    mode: ViewMode | None  # None when no source is enabled (short query)
    loaded: bool = False
    failed: bool = False
    stale: bool = False
    item_count: int = 0


class LoadCommentsUseCase(BaseUseCase):
    """Use case for loading the first page (or the thread) of the active mode."""

    def __init__(
        self,
        gateway: CommentGateway,
        pagination_service: PaginationService,
        thread_service: ThreadService,
        view_mode_service: ViewModeService,
        annotation_store: AnnotationStore,
        settings: Settings,
    ) -> None:
        """Initialize load comments use case.

        Args:
            gateway: Comment API gateway
            pagination_service: Pagination reducer
            thread_service: Thread normalization and commit
            view_mode_service: Source selection
            annotation_store: Session annotations, seeded from loaded comments
            settings: Page size and thread bounds
        """
        self.gateway = gateway
        self.pagination_service = pagination_service
        self.thread_service = thread_service
        self.view_mode_service = view_mode_service
        self.annotation_store = annotation_store
        self.settings = settings

    async def execute(
        self, section: CommentSection, request: LoadCommentsRequest
    ) -> LoadCommentsResponse:
        """Execute load flow.

        Steps:
        1. Ask the view-mode controller which source is enabled
        2. Snapshot the view state and issue the request
        3. Commit the response, unless the view changed in the meantime

        Transport failures are reported with ``failed=True`` and leave the
        loaded data unchanged; stale responses are discarded.

        Args:
            section: Comment section to load
            request: Load request

        Returns:
            What was loaded
        """
        snapshot = section.view
        source = self.view_mode_service.enabled_source(snapshot)
        if source is None:
            logfire.debug("No source enabled", mode=snapshot.mode.value)
            return LoadCommentsResponse(mode=None)

        with logfire.span("load_comments.execute", mode=source.value, target=str(section.target)):
            if source is ViewMode.THREAD:
                return await self._load_thread(section, snapshot, request)
            return await self._load_first_page(section, snapshot, source, request)

    async def _load_first_page(
        self,
        section: CommentSection,
        snapshot: ViewState,
        mode: ViewMode,
        request: LoadCommentsRequest,
    ) -> LoadCommentsResponse:
        accumulator = section.accumulator(mode)
        if accumulator.loaded and not request.force:
            return LoadCommentsResponse(
                mode=mode, loaded=True, item_count=len(accumulator.items)
            )
        if accumulator.page != 1:
            section.accumulators[mode] = self.pagination_service.reset()

        try:
            page = await fetch_page(
                self.gateway,
                section,
                snapshot,
                mode,
                1,
                self.settings.pagination.page_size,
            )
        except TransportError as e:
            recorded = self.pagination_service.commit_failure(section, snapshot, mode)
            logfire.error(
                "Failed to load comments", mode=mode.value, error=str(e), recorded=recorded
            )
            return LoadCommentsResponse(mode=mode, failed=True)

        try:
            merged = self.pagination_service.commit(section, snapshot, mode, 1, page)
        except StaleResponseError as e:
            logfire.info("Discarded response", mode=mode.value, reason=str(e))
            return LoadCommentsResponse(mode=mode, stale=True)

        if mode is ViewMode.ALL:
            self.annotation_store.seed(page.items)

        logfire.info(
            "Comments loaded",
            mode=mode.value,
            items=len(merged.items),
            total=merged.total,
            has_next=merged.has_next,
        )
        return LoadCommentsResponse(mode=mode, loaded=True, item_count=len(merged.items))

    async def _load_thread(
        self,
        section: CommentSection,
        snapshot: ViewState,
        request: LoadCommentsRequest,
    ) -> LoadCommentsResponse:
        if section.thread is not None and not request.force:
            return LoadCommentsResponse(mode=ViewMode.THREAD, loaded=True, item_count=1)

        section.thread_loading = True
        try:
            thread = await self.gateway.get_thread(
                snapshot.focused_comment_id,
                self.settings.thread.parent_levels,
                self.settings.thread.reply_depth,
            )
        except TransportError as e:
            recorded = self.thread_service.commit_failure(section, snapshot)
            logfire.error(
                "Failed to load thread",
                focal_id=snapshot.focused_comment_id,
                error=str(e),
                recorded=recorded,
            )
            return LoadCommentsResponse(mode=ViewMode.THREAD, failed=True)

        try:
            self.thread_service.commit(section, snapshot, thread)
        except StaleResponseError as e:
            logfire.info("Discarded response", mode=ViewMode.THREAD.value, reason=str(e))
            return LoadCommentsResponse(mode=ViewMode.THREAD, stale=True)

        seeded: list[Comment] = [*thread.parent_context, thread.focal]
        self.annotation_store.seed(seeded)
        return LoadCommentsResponse(mode=ViewMode.THREAD, loaded=True, item_count=1)
