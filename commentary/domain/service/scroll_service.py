"""Infinite scroll trigger domain service."""

import logfire

from commentary.domain.model.section import PAGINATED_MODES, CommentSection

from .base import Service
from .pagination_service import PaginationService
from .view_mode_service import ViewModeService


class ScrollTrigger(Service):
    """Advances pagination when the end-of-list sentinel becomes visible.

    The accumulator's ``is_loading_more`` flag is the only re-entrancy
    guard: once a load-more is in flight, further visibility events are
    ignored until the page has been merged or the request failed.
    """

    def __init__(
        self,
        pagination_service: PaginationService,
        view_mode_service: ViewModeService,
    ) -> None:
        """Initialize scroll trigger.

        Args:
            pagination_service: Pagination reducer
            view_mode_service: Source selection
        """
        self.pagination_service = pagination_service
        self.view_mode_service = view_mode_service

    def should_fire(self, section: CommentSection) -> bool:
        """Whether a visible sentinel should request the next page."""
        mode = section.view.mode
        if mode not in PAGINATED_MODES:
            return False
        if self.view_mode_service.enabled_source(section.view) is not mode:
            return False
        return self.pagination_service.can_load_more(section.accumulator(mode))

    def fire(self, section: CommentSection) -> int | None:
        """Handle the sentinel becoming visible.

        Returns:
            The page number to request, or None if nothing should be loaded
        """
        if not self.should_fire(section):
            return None

        mode = section.view.mode
        advanced = self.pagination_service.begin_load_more(section.accumulator(mode))
        if advanced is None:
            return None

        section.accumulators[mode] = advanced
        logfire.info("Scroll sentinel advanced page", mode=mode.value, page=advanced.page)
        return advanced.page
