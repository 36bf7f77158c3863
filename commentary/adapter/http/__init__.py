"""Platform comments API adapter."""

from .client import HttpCommentGateway

__all__ = ["HttpCommentGateway"]
