"""Paginated response returned by the comment gateway."""

from typing import Generic, TypeVar

from pydantic import Field

from commentary.domain.model.common import DomainModel

T = TypeVar("T")


class Page(DomainModel, Generic[T]):
    """One page of a list or search response."""

    items: list[T] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    has_next: bool = False
