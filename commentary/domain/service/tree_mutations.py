"""Pure, non-mutating transforms over a comment forest.

Each function takes a forest (``list[Comment]``) and returns a forest. The
input and its nodes are never modified. Only the rewritten node(s) and their
ancestors are copied; every other node is returned as the same object, so a
renderer can detect changes by reference. When the target id is absent the
original list object itself is returned.

Traversal visits every node whose id matches, but does not descend into a
node once it has matched. With unique ids this rewrites exactly one node.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from commentary.domain.model.comment import Comment
from commentary.domain.value import CommentId

Rewrite = Callable[[Comment], Comment]


@dataclass
class _Frame:
    """One level of the explicit traversal stack."""

    node: Comment | None  # None for the forest itself
    children: Sequence[Comment]
    index: int = 0
    results: list[Comment] = field(default_factory=list)
    changed: bool = False


def rewrite_forest(
    roots: list[Comment], target_id: CommentId, rewrite: Rewrite
) -> list[Comment]:
    """Apply ``rewrite`` to every node with ``target_id``.

    Args:
        roots: Forest to transform
        target_id: Id of the node(s) to rewrite
        rewrite: Produces the replacement for a matched node

    Returns:
        A new forest, or ``roots`` itself if nothing matched
    """
    frames = [_Frame(node=None, children=roots)]
    while True:
        frame = frames[-1]
        if frame.index < len(frame.children):
            child = frame.children[frame.index]
            frame.index += 1
            if child.id == target_id:
                replacement = rewrite(child)
                frame.results.append(replacement)
                frame.changed = frame.changed or replacement is not child
            elif child.children:
                frames.append(_Frame(node=child, children=child.children))
            else:
                frame.results.append(child)
            continue

        frames.pop()
        if frame.node is None:
            return frame.results if frame.changed else roots

        rebuilt = (
            frame.node.model_copy(update={"children": frame.results})
            if frame.changed
            else frame.node
        )
        parent = frames[-1]
        parent.results.append(rebuilt)
        parent.changed = parent.changed or frame.changed


def contains(roots: list[Comment], comment_id: CommentId) -> bool:
    """Whether a node with ``comment_id`` is anywhere in the forest."""
    stack = list(roots)
    while stack:
        node = stack.pop()
        if node.id == comment_id:
            return True
        stack.extend(node.children)
    return False


def insert_root(roots: list[Comment], comment: Comment) -> list[Comment]:
    """Prepend a new top-level comment.

    A comment whose id is already a root is not inserted twice.
    """
    if any(root.id == comment.id for root in roots):
        return roots
    return [comment, *roots]


def update_node(
    roots: list[Comment], comment_id: CommentId, patch: dict
) -> list[Comment]:
    """Merge ``patch`` over the fields of the matching node.

    Idempotent: applying the same patch twice yields an equal forest.
    ``children`` in the patch is ignored.
    """
    patch = {key: value for key, value in patch.items() if key != "children"}
    if not patch:
        return roots
    return rewrite_forest(
        roots, comment_id, lambda node: node.model_copy(update=patch)
    )


def soft_delete_node(roots: list[Comment], comment_id: CommentId) -> list[Comment]:
    """Turn the matching node into a tombstone.

    The node stays in place with ``is_deleted=True`` and its content, media
    and link cleared. Children and ``reply_count`` are preserved so replies
    remain reachable.
    """
    return rewrite_forest(
        roots,
        comment_id,
        lambda node: node.model_copy(
            update={"is_deleted": True, "content": "", "media": None, "link": None}
        ),
    )


def append_reply(
    roots: list[Comment], parent_id: CommentId, reply: Comment
) -> list[Comment]:
    """Prepend ``reply`` to the children of the matching node.

    The parent's ``reply_count`` grows by exactly one.
    """
    return rewrite_forest(
        roots,
        parent_id,
        lambda node: node.model_copy(
            update={
                "children": [reply, *node.children],
                "reply_count": node.reply_count + 1,
            }
        ),
    )
