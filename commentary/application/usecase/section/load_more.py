"""Load more use case."""

import logfire
from pydantic import BaseModel

from commentary.application.usecase.base import BaseUseCase
from commentary.config import Settings
from commentary.domain.error import StaleResponseError, TransportError
from commentary.domain.gateway.comment import CommentGateway
from commentary.domain.model.section import CommentSection
from commentary.domain.service import AnnotationStore, PaginationService, ScrollTrigger
from commentary.domain.value import ViewMode

from .load_comments import fetch_page


class LoadMoreRequest(BaseModel):
    """Load more request (the scroll sentinel became visible)."""

    pass


class LoadMoreResponse(BaseModel):
    """Load more response."""

    page: int | None = None  # None when the trigger did not fire
    failed: bool = False
    stale: bool = False
    has_more: bool = False


class LoadMoreUseCase(BaseUseCase):
    """Use case for infinite scroll: fetch and merge the next page."""

    def __init__(
        self,
        gateway: CommentGateway,
        scroll_trigger: ScrollTrigger,
        pagination_service: PaginationService,
        annotation_store: AnnotationStore,
        settings: Settings,
    ) -> None:
        """Initialize load more use case.

        Args:
            gateway: Comment API gateway
            scroll_trigger: Guarded page advance
            pagination_service: Pagination reducer
            annotation_store: Session annotations, seeded from loaded comments
            settings: Page size
        """
        self.gateway = gateway
        self.scroll_trigger = scroll_trigger
        self.pagination_service = pagination_service
        self.annotation_store = annotation_store
        self.settings = settings

    async def execute(
        self, section: CommentSection, request: LoadMoreRequest
    ) -> LoadMoreResponse:
        """Execute load more flow.

        The page counter is advanced synchronously, before the request is
        awaited, so repeated sentinel events during the request find
        ``is_loading_more`` set and do nothing.

        Args:
            section: Comment section to extend
            request: Load more request

        Returns:
            The requested page number, or None if nothing was requested
        """
        snapshot = section.view
        page_number = self.scroll_trigger.fire(section)
        if page_number is None:
            return LoadMoreResponse()

        mode = snapshot.mode
        with logfire.span("load_more.execute", mode=mode.value, page=page_number):
            try:
                page = await fetch_page(
                    self.gateway,
                    section,
                    snapshot,
                    mode,
                    page_number,
                    self.settings.pagination.page_size,
                )
            except TransportError as e:
                recorded = self.pagination_service.commit_failure(section, snapshot, mode)
                logfire.error(
                    "Failed to load more",
                    mode=mode.value,
                    page=page_number,
                    error=str(e),
                    recorded=recorded,
                )
                return LoadMoreResponse(page=page_number, failed=True)

            try:
                merged = self.pagination_service.commit(
                    section, snapshot, mode, page_number, page
                )
            except StaleResponseError as e:
                logfire.info("Discarded response", mode=mode.value, reason=str(e))
                return LoadMoreResponse(page=page_number, stale=True)

            if mode is ViewMode.ALL:
                self.annotation_store.seed(page.items)

            return LoadMoreResponse(page=page_number, has_more=merged.has_next)
