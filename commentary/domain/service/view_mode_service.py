"""View-mode controller domain service."""

import logfire

from commentary.domain.model.mutation import (
    Back,
    ChangeSearchType,
    ChangeSort,
    NavigationAction,
    Reset,
    ShowSearch,
    ShowThread,
)
from commentary.domain.model.section import CommentSection
from commentary.domain.model.view_state import ViewState
from commentary.domain.value import ViewMode

from .base import Service

DEFAULT_MIN_QUERY_LENGTH = 2


class ViewModeService(Service):
    """State machine selecting which data source a section shows.

    All is the default state and the re-entry point; no state is terminal.
    Any change of view parameters invalidates the loaded data of every mode,
    so responses from the previous parameters can no longer land anywhere.
    """

    def __init__(self, min_query_length: int = DEFAULT_MIN_QUERY_LENGTH) -> None:
        """Initialize view mode service.

        Args:
            min_query_length: Shortest stripped query that enables search
        """
        self.min_query_length = min_query_length

    def enabled_source(self, view: ViewState) -> ViewMode | None:
        """The single data source that may issue requests for this view.

        Returns:
            ALL in all mode; THREAD when a comment is focused; SEARCH when
            the query is long enough; None otherwise
        """
        if view.mode is ViewMode.ALL:
            return ViewMode.ALL
        if view.mode is ViewMode.THREAD:
            return ViewMode.THREAD if view.focused_comment_id is not None else None
        if len(view.search_query.strip()) >= self.min_query_length:
            return ViewMode.SEARCH
        return None

    def transition(
        self, view: ViewState, history: list[ViewState], action: NavigationAction
    ) -> tuple[ViewState, list[ViewState]]:
        """Compute the next view state and history for an action.

        Pure: the arguments are not modified.

        Returns:
            (next view, next history)
        """
        if isinstance(action, ShowThread):
            target = view.model_copy(
                update={"mode": ViewMode.THREAD, "focused_comment_id": action.comment_id}
            )
            return target, self._push(history, view, target)

        if isinstance(action, ShowSearch):
            update = {
                "mode": ViewMode.SEARCH,
                "focused_comment_id": None,
                "search_query": action.query.strip(),
            }
            if action.search_type is not None:
                update["search_type"] = action.search_type
            target = view.model_copy(update=update)
            return target, self._push(history, view, target)

        if isinstance(action, Back):
            if not history:
                return ViewState(sort=view.sort), []
            return history[-1], history[:-1]

        if isinstance(action, Reset):
            return ViewState(), []

        if isinstance(action, ChangeSort):
            return view.model_copy(update={"sort": action.sort}), list(history)

        if isinstance(action, ChangeSearchType):
            return view.model_copy(update={"search_type": action.search_type}), list(
                history
            )

        raise TypeError(f"Unknown navigation action: {action!r}")

    def navigate(self, section: CommentSection, action: NavigationAction) -> bool:
        """Apply a navigation action to a section.

        Resets every accumulator (page 1, empty) and the thread when the
        view parameters change. An action that leaves the view unchanged
        keeps the loaded data.

        Returns:
            True if the view changed
        """
        with logfire.span(
            "view_mode_service.navigate",
            action=action.kind,
            from_mode=section.view.mode.value,
        ):
            target, history = self.transition(section.view, section.history, action)
            section.history = history
            if target == section.view:
                logfire.debug("Navigation left view unchanged", action=action.kind)
                return False

            section.view = target
            section.invalidate()
            source = self.enabled_source(target)
            logfire.info(
                "View changed",
                mode=target.mode.value,
                focused_comment_id=target.focused_comment_id,
                search_query=target.search_query,
                sort=target.sort.value,
                enabled_source=source.value if source is not None else None,
            )
            return True

    @staticmethod
    def _push(
        history: list[ViewState], current: ViewState, target: ViewState
    ) -> list[ViewState]:
        if target == current:
            return list(history)
        return [*history, current]
