"""Pagination accumulator state."""

from pydantic import Field

from commentary.domain.model.common import DomainModel
from commentary.domain.model.search_result import ThreadItem


class Accumulator(DomainModel):
    """Items merged from successive pages of one paginated mode.

    ``page`` is the page counter driving the next request. It is advanced
    only by a guarded load-more, so page N+1 is never requested before
    page N has been merged.
    """

    page: int = Field(default=1, ge=1)
    items: list[ThreadItem] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    has_next: bool = True
    is_loading_more: bool = False
    loaded: bool = False  # First page has been merged

    def item_ids(self) -> set[int]:
        """Ids already present in the item list."""
        return {item.id for item in self.items}
