"""Comment section loading use cases."""

from .load_comments import (
    LoadCommentsRequest,
    LoadCommentsResponse,
    LoadCommentsUseCase,
)
from .load_more import LoadMoreRequest, LoadMoreResponse, LoadMoreUseCase

__all__ = [
    "LoadCommentsRequest",
    "LoadCommentsResponse",
    "LoadCommentsUseCase",
    "LoadMoreRequest",
    "LoadMoreResponse",
    "LoadMoreUseCase",
]
