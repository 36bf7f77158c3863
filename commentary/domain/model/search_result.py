"""Search result entity and the comment/search-result tagged union."""

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import Field

from commentary.domain.model.comment import Comment
from commentary.domain.model.common import DomainModel
from commentary.domain.value import AuthorInfo, CommentId, ContentRef


class SearchResult(DomainModel):
    """Flat projection of a comment returned by full-text search.

    Not a Comment subtype: it carries no replies and adds the search snippet
    and a reference to the content the comment was posted on.
    """

    kind: Literal["search_result"] = "search_result"
    id: CommentId
    parent_id: CommentId | None = None
    content: str = ""
    search_snippet: str | None = None
    author_info: AuthorInfo
    created_at: datetime = Field(default_factory=datetime.now)
    depth: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)
    reply_count: int = Field(default=0, ge=0)
    has_media: bool = False
    has_link: bool = False
    poll_content: ContentRef | None = None

    @property
    def display_text(self) -> str:
        """Snippet if the server highlighted one, otherwise the full content."""
        return self.search_snippet or self.content


# Items held by an accumulator: either variant, discriminated on ``kind``
ThreadItem = Annotated[Union[Comment, SearchResult], Field(discriminator="kind")]
