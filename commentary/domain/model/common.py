"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain models.

    Entities are immutable: every change produces a new instance via
    ``model_copy``, so unchanged nodes keep their identity and callers can
    detect changes by reference.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        arbitrary_types_allowed=True,  # Allow custom value objects
        populate_by_name=True,  # Accept field names as well as API aliases
        extra="ignore",
    )
