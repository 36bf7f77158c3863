"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the comment section's behavior: reducers over
    immutable entities and the session's annotation state. They perform no
    I/O.
    """

    pass
