"""Comment section state container."""

from dataclasses import dataclass, field

from commentary.domain.model.accumulator import Accumulator
from commentary.domain.model.thread import ThreadView
from commentary.domain.model.view_state import ViewState
from commentary.domain.value import TargetRef, ViewMode

PAGINATED_MODES = (ViewMode.ALL, ViewMode.SEARCH)


def _fresh_accumulators() -> dict[ViewMode, Accumulator]:
    return {mode: Accumulator() for mode in PAGINATED_MODES}


@dataclass
class CommentSection:
    """Mutable owner of one comment section's in-memory dataset.

    The entities it points to are immutable; the section swaps them for new
    instances as pages arrive and mutations are applied. It is owned by a
    single logical thread of control, so no locking is done.

    Attributes:
        target: Content item whose comments are shown
        view: Current view state
        history: Prior view states, most recent last (for ``back``)
        accumulators: One accumulator per paginated mode
        thread: Loaded thread view (thread mode only)
        thread_loading: A thread request is outstanding
        failed: Modes whose last request failed with a transport error
    """

    target: TargetRef
    view: ViewState = field(default_factory=ViewState)
    history: list[ViewState] = field(default_factory=list)
    accumulators: dict[ViewMode, Accumulator] = field(default_factory=_fresh_accumulators)
    thread: ThreadView | None = None
    thread_loading: bool = False
    failed: set[ViewMode] = field(default_factory=set)

    def accumulator(self, mode: ViewMode) -> Accumulator:
        """Accumulator of a paginated mode.

        Raises:
            KeyError: For thread mode, which is not paginated
        """
        return self.accumulators[mode]

    def invalidate(self) -> None:
        """Drop all loaded data (page 1, empty) for every mode."""
        self.accumulators = _fresh_accumulators()
        self.thread = None
        self.thread_loading = False
        self.failed.clear()
