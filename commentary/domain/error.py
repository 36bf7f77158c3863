"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error (e.g. empty comment content)."""

    pass


class TransportError(DomainError):
    """Raised by a gateway when a request to the platform API fails."""

    def __init__(self, operation: str, detail: str, status_code: int | None = None):
        self.operation = operation
        self.status_code = status_code
        super().__init__(f"{operation} failed: {detail}")


class ConsistencyError(DomainError):
    """Raised when a mutation targets a comment that is no longer loaded.

    Never escapes the mutation applier; the mutation becomes a no-op.
    """

    def __init__(self, comment_id: int):
        self.comment_id = comment_id
        super().__init__(f"Comment not present in tree: {comment_id}")


class StaleResponseError(DomainError):
    """Raised when a response arrives for an abandoned view state."""

    def __init__(self, source: str, reason: str):
        self.source = source
        super().__init__(f"Discarding stale {source} response: {reason}")
