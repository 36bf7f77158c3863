"""Thread view of a single focal comment."""

from pydantic import Field

from commentary.domain.model.comment import Comment
from commentary.domain.model.common import DomainModel


class ThreadView(DomainModel):
    """A focal comment with its bounded reply subtree and ancestor chain.

    ``parent_context`` is ordered root-first: index 0 is the most distant
    loaded ancestor, the last element is the focal comment's direct parent.
    """

    focal: Comment = Field(alias="focal_comment")
    parent_context: list[Comment] = Field(default_factory=list)
