"""In-memory adapters for testing."""

from .gateway import InMemoryCommentGateway

__all__ = ["InMemoryCommentGateway"]
