"""Domain model entities for comment sections."""

from commentary.domain.model.accumulator import Accumulator
from commentary.domain.model.annotation import Annotation
from commentary.domain.model.arena import CommentArena
from commentary.domain.model.comment import Comment, iter_tree
from commentary.domain.model.mutation import (
    MUTATION_PAYLOADS,
    Back,
    ChangeSearchType,
    ChangeSort,
    CreateMutation,
    DeleteMutation,
    NavigationAction,
    ReplyMutation,
    Reset,
    ShowSearch,
    ShowThread,
    UpdateMutation,
)
from commentary.domain.model.page import Page
from commentary.domain.model.search_result import SearchResult, ThreadItem
from commentary.domain.model.section import PAGINATED_MODES, CommentSection
from commentary.domain.model.thread import ThreadView
from commentary.domain.model.view_state import ViewState

__all__ = [
    "Accumulator",
    "Annotation",
    "Back",
    "ChangeSearchType",
    "ChangeSort",
    "Comment",
    "CommentArena",
    "CommentSection",
    "CreateMutation",
    "DeleteMutation",
    "MUTATION_PAYLOADS",
    "NavigationAction",
    "PAGINATED_MODES",
    "Page",
    "ReplyMutation",
    "Reset",
    "SearchResult",
    "ShowSearch",
    "ShowThread",
    "ThreadItem",
    "ThreadView",
    "UpdateMutation",
    "ViewState",
    "iter_tree",
]
