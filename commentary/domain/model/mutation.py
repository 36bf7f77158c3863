"""Payloads of local optimistic mutations and navigation actions.

Both are tagged unions so that callers may pass plain dicts
(``{"id": 7, "content": "new"}``) and get them validated into the right
shape.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import Field

from commentary.domain.model.comment import Comment
from commentary.domain.model.common import DomainModel
from commentary.domain.value import (
    CommentId,
    CommentSort,
    Link,
    Media,
    MutationKind,
    SearchType,
)


class CreateMutation(DomainModel):
    """A new top-level comment returned by the server."""

    comment: Comment


class UpdateMutation(DomainModel):
    """Fields to merge over an existing comment.

    Only fields explicitly set are merged; ``children`` can never be patched.
    """

    id: CommentId
    content: str | None = None
    media: Media | None = None
    link: Link | None = None
    is_edited: bool | None = None
    like_count: int | None = Field(default=None, ge=0)
    dislike_count: int | None = Field(default=None, ge=0)
    default_collapsed: bool | None = None

    def patch(self) -> dict[str, Any]:
        """Explicitly set fields, excluding the target id.

        Values are kept as model instances (not dumped to dicts) so they can
        be merged with ``model_copy``. An explicit ``media=None`` or
        ``link=None`` removes the attachment.
        """
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if name != "id"
            and not (getattr(self, name) is None and name not in ("media", "link"))
        }


class DeleteMutation(DomainModel):
    """Soft deletion of a comment."""

    id: CommentId


class ReplyMutation(DomainModel):
    """A new reply to an existing comment."""

    parent_id: CommentId
    reply: Comment


MUTATION_PAYLOADS: dict[MutationKind, type[DomainModel]] = {
    MutationKind.CREATE: CreateMutation,
    MutationKind.UPDATE: UpdateMutation,
    MutationKind.DELETE: DeleteMutation,
    MutationKind.REPLY: ReplyMutation,
}


class ShowThread(DomainModel):
    """Focus a single comment ("show more replies" or a search hit)."""

    kind: Literal["show_thread"] = "show_thread"
    comment_id: CommentId


class ShowSearch(DomainModel):
    """Submit a search query."""

    kind: Literal["show_search"] = "show_search"
    query: str
    search_type: SearchType | None = None


class Back(DomainModel):
    """Return to the previous view state."""

    kind: Literal["back"] = "back"


class Reset(DomainModel):
    """Return to the default view (all comments, newest first)."""

    kind: Literal["reset"] = "reset"


class ChangeSort(DomainModel):
    """Change the sort order of the list or search results."""

    kind: Literal["change_sort"] = "change_sort"
    sort: CommentSort


class ChangeSearchType(DomainModel):
    """Change which field a search matches against."""

    kind: Literal["change_search_type"] = "change_search_type"
    search_type: SearchType


NavigationAction = Annotated[
    Union[ShowThread, ShowSearch, Back, Reset, ChangeSort, ChangeSearchType],
    Field(discriminator="kind"),
]
