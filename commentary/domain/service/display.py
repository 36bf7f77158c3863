"""Render-level helpers.

Kept separate from the tree transforms: soft deletion marks a node, and
hiding childless tombstones is decided here, at render time.
"""

from collections.abc import Sequence

from commentary.domain.model.comment import Comment
from commentary.domain.model.search_result import ThreadItem
from commentary.domain.model.view_state import ViewState
from commentary.domain.value import EmptyState, ViewMode

DEFAULT_READ_MORE_THRESHOLD = 150


def is_visible(comment: Comment) -> bool:
    """A deleted comment is shown only while it still has replies."""
    return not (comment.is_deleted and not comment.has_children)


def filter_visible(roots: list[Comment]) -> list[Comment]:
    """Drop childless tombstones at every level of a forest.

    Pure. A node's visibility is judged on its own loaded children before
    filtering, so a tombstone whose only replies are hidden tombstones is
    still shown. Nodes whose subtree is unaffected keep their identity.
    """
    # Post-order: (node, expanded); built children collected per parent
    built: dict[int, Comment] = {}
    stack: list[tuple[Comment, bool]] = [(root, False) for root in roots]
    while stack:
        node, expanded = stack.pop()
        if not expanded and node.children:
            stack.append((node, True))
            stack.extend((child, False) for child in node.children)
            continue
        children = [built.pop(id(child)) for child in node.children if is_visible(child)]
        unchanged = len(children) == len(node.children) and all(
            new is old for new, old in zip(children, node.children)
        )
        built[id(node)] = node if unchanged else node.model_copy(update={"children": children})

    result = [built[id(root)] for root in roots if is_visible(root)]
    if len(result) == len(roots) and all(new is old for new, old in zip(result, roots)):
        return roots
    return result


def count_total_replies(comment: Comment) -> int:
    """Number of loaded replies at any depth below a comment."""
    total = 0
    stack = list(comment.children)
    while stack:
        node = stack.pop()
        total += 1
        stack.extend(node.children)
    return total


def reply_label(count: int) -> str:
    """Label shown next to a collapsed comment, e.g. ``[3 replies]``."""
    return f"[{count} {'reply' if count == 1 else 'replies'}]"


def needs_read_more(content: str, threshold: int = DEFAULT_READ_MORE_THRESHOLD) -> bool:
    """Whether content is long enough to be clamped behind "show more"."""
    return len(content) > threshold


def empty_state(
    view: ViewState,
    items: Sequence[ThreadItem],
    loading: bool,
    min_query_length: int = 2,
) -> EmptyState | None:
    """Classify why nothing is shown, or None if items exist or still loading."""
    if items:
        return None
    if view.mode is ViewMode.SEARCH:
        if len(view.search_query.strip()) < min_query_length:
            return EmptyState.QUERY_TOO_SHORT
        return None if loading else EmptyState.NO_RESULTS
    if loading:
        return None
    if view.mode is ViewMode.THREAD:
        return EmptyState.THREAD_NOT_FOUND
    return EmptyState.NO_COMMENTS
