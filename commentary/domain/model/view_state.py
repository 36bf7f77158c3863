"""Navigable view state of a comment section."""

from commentary.domain.model.common import DomainModel
from commentary.domain.value import CommentId, CommentSort, SearchType, ViewMode


class ViewState(DomainModel):
    """Parameters selecting what a comment section displays.

    Exactly one mode is active. Instances are compared by value, which is
    what stale-response detection relies on: a response is applied only if
    the state it was requested under equals the current one.
    """

    mode: ViewMode = ViewMode.ALL
    focused_comment_id: CommentId | None = None
    search_query: str = ""
    search_type: SearchType = SearchType.ALL
    sort: CommentSort = CommentSort.NEWEST
