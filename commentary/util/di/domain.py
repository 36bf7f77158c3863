"""Domain layer DI providers."""

from dishka import Scope, provide

from commentary.config import Settings
from commentary.domain.service import (
    AnnotationStore,
    MutationService,
    PaginationService,
    ScrollTrigger,
    ThreadService,
    ViewModeService,
)
from commentary.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped: one request scope is one user
    session, so the annotation store (collapse, read-more and highlight
    state) never leaks between sessions.
    """

    scope = Scope.REQUEST

    @provide
    def get_pagination_service(self) -> PaginationService:
        """Provide pagination domain service."""
        return PaginationService()

    @provide
    def get_thread_service(self, settings: Settings) -> ThreadService:
        """Provide thread domain service."""
        return ThreadService(
            parent_levels=settings.thread.parent_levels,
            reply_depth=settings.thread.reply_depth,
        )

    @provide
    def get_view_mode_service(self, settings: Settings) -> ViewModeService:
        """Provide view mode domain service."""
        return ViewModeService(min_query_length=settings.search.min_query_length)

    @provide
    def get_scroll_trigger(
        self,
        pagination_service: PaginationService,
        view_mode_service: ViewModeService,
    ) -> ScrollTrigger:
        """Provide infinite scroll trigger."""
        return ScrollTrigger(
            pagination_service=pagination_service,
            view_mode_service=view_mode_service,
        )

    @provide
    def get_mutation_service(self) -> MutationService:
        """Provide optimistic mutation domain service."""
        return MutationService()

    @provide
    def get_annotation_store(self) -> AnnotationStore:
        """Provide the session's annotation store."""
        return AnnotationStore()
