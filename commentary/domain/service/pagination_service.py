"""Pagination accumulator domain service."""

import logfire

from commentary.domain.error import StaleResponseError
from commentary.domain.model.accumulator import Accumulator
from commentary.domain.model.page import Page
from commentary.domain.model.section import CommentSection
from commentary.domain.model.view_state import ViewState
from commentary.domain.value import ViewMode

from .base import Service


class PaginationService(Service):
    """Merges successive result pages into an accumulator.

    The reducers return a new accumulator and never modify the one passed
    in. Only the commit methods store their result on a section.
    """

    def reset(self) -> Accumulator:
        """Empty accumulator at page 1."""
        return Accumulator()

    def can_load_more(self, accumulator: Accumulator) -> bool:
        """Whether a load-more request may be issued now."""
        return (
            accumulator.loaded
            and accumulator.has_next
            and not accumulator.is_loading_more
        )

    def begin_load_more(self, accumulator: Accumulator) -> Accumulator | None:
        """Advance the page counter and mark a load-more as in flight.

        Args:
            accumulator: Current accumulator

        Returns:
            Accumulator with the next page requested, or None if a load-more
            is already in flight or there is nothing more to load
        """
        if not self.can_load_more(accumulator):
            logfire.debug(
                "Load more suppressed",
                page=accumulator.page,
                has_next=accumulator.has_next,
                is_loading_more=accumulator.is_loading_more,
                loaded=accumulator.loaded,
            )
            return None
        return accumulator.model_copy(
            update={"page": accumulator.page + 1, "is_loading_more": True}
        )

    def merge(self, accumulator: Accumulator, page_number: int, page: Page) -> Accumulator:
        """Merge one response page.

        Page 1 replaces the item list wholesale, so the same accumulator can
        be reused after a sort or filter change. Later pages append only ids
        not seen before, in the order received; existing items never move.

        Args:
            accumulator: Current accumulator
            page_number: Page the response was requested for
            page: Response page

        Returns:
            Accumulator with the page merged and ``is_loading_more`` cleared

        Raises:
            StaleResponseError: If the page number is not the one the
                accumulator is waiting for
        """
        if page_number != accumulator.page:
            raise StaleResponseError(
                "page",
                f"page {page_number} arrived while accumulator is at page {accumulator.page}",
            )

        if page_number == 1:
            items = list(page.items)
        else:
            seen = accumulator.item_ids()
            fresh = []
            for item in page.items:
                if item.id not in seen:
                    seen.add(item.id)
                    fresh.append(item)
            items = [*accumulator.items, *fresh]

        logfire.debug(
            "Page merged",
            page=page_number,
            received=len(page.items),
            total_items=len(items),
            has_next=page.has_next,
        )

        return accumulator.model_copy(
            update={
                "items": items,
                "total": page.total,
                "has_next": page.has_next,
                "is_loading_more": False,
                "loaded": True,
            }
        )

    def fail(self, accumulator: Accumulator) -> Accumulator:
        """Record a failed request so that it can be retried.

        Items are left unchanged. A failed load-more rolls its page counter
        back, so the retry requests the same page again.
        """
        if accumulator.is_loading_more:
            return accumulator.model_copy(
                update={"page": max(1, accumulator.page - 1), "is_loading_more": False}
            )
        return accumulator

    def commit(
        self,
        section: CommentSection,
        snapshot: ViewState,
        mode: ViewMode,
        page_number: int,
        page: Page,
    ) -> Accumulator:
        """Merge a response page into the section it was requested for.

        Args:
            section: Section that issued the request
            snapshot: View state the request was issued under
            mode: Paginated mode the page belongs to
            page_number: Page the response was requested for
            page: Response page

        Returns:
            The merged accumulator, now stored on the section

        Raises:
            StaleResponseError: If the view changed since the request, or the
                page is not the one the accumulator is waiting for
        """
        if section.view != snapshot:
            raise StaleResponseError(mode.value, "view state changed while in flight")

        merged = self.merge(section.accumulator(mode), page_number, page)
        section.accumulators[mode] = merged
        section.failed.discard(mode)
        return merged

    def commit_failure(
        self, section: CommentSection, snapshot: ViewState, mode: ViewMode
    ) -> bool:
        """Record a failed request on the section, unless it went stale.

        Returns:
            True if the failure was recorded
        """
        if section.view != snapshot:
            return False
        section.accumulators[mode] = self.fail(section.accumulator(mode))
        section.failed.add(mode)
        return True
