"""Gateway interfaces for the comment platform API.

Gateway interfaces are defined in the domain layer (dependency inversion).
Implementations live in the adapter layer.
"""

from commentary.domain.gateway.comment import CommentGateway

__all__ = ["CommentGateway"]
