"""Flat arena representation of a comment forest.

Nested ``Comment`` trees are convenient for rendering but deep reply chains
make recursive walks risky. The arena stores every node once, stripped of
its children, together with ordered child-id lists. Nested views are
materialized on demand with explicit stacks.
"""

from collections.abc import Iterable

from commentary.domain.model.comment import Comment, iter_tree
from commentary.domain.value import CommentId


class CommentArena:
    """Flat map from comment id to node plus parent/child structure."""

    def __init__(self) -> None:
        self._nodes: dict[CommentId, Comment] = {}
        self._children: dict[CommentId, list[CommentId]] = {}
        self._roots: list[CommentId] = []

    @classmethod
    def from_forest(cls, roots: Iterable[Comment]) -> "CommentArena":
        """Flatten a nested forest into an arena, keeping sibling order."""
        arena = cls()
        for comment in iter_tree(roots):
            arena.add(comment)
        return arena

    def __contains__(self, comment_id: object) -> bool:
        return comment_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def root_ids(self) -> list[CommentId]:
        """Top-level comment ids in insertion order."""
        return list(self._roots)

    def add(self, comment: Comment, prepend: bool = False) -> None:
        """Add a node (its nested children are ignored; add them separately).

        A node whose parent is not (yet) in the arena is linked once the
        parent arrives; until then it is reachable by id only. Nodes without
        a parent become roots.

        Args:
            comment: Node to store
            prepend: Insert before existing siblings instead of after
        """
        if comment.id in self._nodes:
            self._nodes[comment.id] = comment.model_copy(update={"children": []})
            return

        self._nodes[comment.id] = comment.model_copy(update={"children": []})
        self._children.setdefault(comment.id, [])

        if comment.parent_id is None:
            siblings = self._roots
        else:
            siblings = self._children.setdefault(comment.parent_id, [])

        if prepend:
            siblings.insert(0, comment.id)
        else:
            siblings.append(comment.id)

    def replace(self, comment: Comment) -> None:
        """Replace a stored node's fields, keeping its structural position."""
        if comment.id not in self._nodes:
            raise KeyError(comment.id)
        self._nodes[comment.id] = comment.model_copy(update={"children": []})

    def get(self, comment_id: CommentId) -> Comment | None:
        """Stored node without children, or None."""
        return self._nodes.get(comment_id)

    def child_ids(self, comment_id: CommentId) -> list[CommentId]:
        """Ordered ids of the loaded direct children of a node."""
        return [cid for cid in self._children.get(comment_id, []) if cid in self._nodes]

    def ancestors(self, comment_id: CommentId, limit: int | None = None) -> list[Comment]:
        """Ancestors of a node, nearest first, up to ``limit`` levels.

        Stops at the first ancestor that is not loaded.
        """
        result: list[Comment] = []
        node = self._nodes.get(comment_id)
        seen: set[CommentId] = set()
        while node is not None and node.parent_id is not None:
            if limit is not None and len(result) >= limit:
                break
            if node.parent_id in seen:  # Corrupt data: parent cycle
                break
            seen.add(node.parent_id)
            parent = self._nodes.get(node.parent_id)
            if parent is None:
                break
            result.append(parent)
            node = parent
        return result

    def descendant_count(self, comment_id: CommentId) -> int:
        """Number of loaded descendants below a node."""
        count = 0
        stack = list(self.child_ids(comment_id))
        while stack:
            current = stack.pop()
            count += 1
            stack.extend(self.child_ids(current))
        return count

    def materialize(self, comment_id: CommentId, max_depth: int | None = None) -> Comment:
        """Build a nested view of the subtree rooted at ``comment_id``.

        Children deeper than ``max_depth`` levels below the root are cut off;
        a node whose children were cut gets ``has_more_replies=True``.

        Raises:
            KeyError: If the id is not in the arena
        """
        if comment_id not in self._nodes:
            raise KeyError(comment_id)

        # Post-order over (id, level) pairs; children are built before parents
        built: dict[CommentId, Comment] = {}
        stack: list[tuple[CommentId, int, bool]] = [(comment_id, 0, False)]
        while stack:
            current, level, expanded = stack.pop()
            child_ids = self.child_ids(current)
            truncated = max_depth is not None and level >= max_depth
            if not expanded and not truncated and child_ids:
                stack.append((current, level, True))
                stack.extend((cid, level + 1, False) for cid in reversed(child_ids))
                continue

            node = self._nodes[current]
            if truncated:
                built[current] = node.model_copy(
                    update={
                        "children": [],
                        "has_more_replies": node.has_more_replies or bool(child_ids),
                    }
                )
            else:
                built[current] = node.model_copy(
                    update={"children": [built.pop(cid) for cid in child_ids]}
                )

        return built[comment_id]

    def to_forest(self, max_depth: int | None = None) -> list[Comment]:
        """Materialize every root, in order."""
        return [self.materialize(root_id, max_depth) for root_id in self._roots]
