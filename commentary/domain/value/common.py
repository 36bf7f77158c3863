"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Base class for all value objects.

    Value objects are immutable and compared by value, not identity.
    Server payloads may carry fields we do not model; they are ignored.
    """

    model_config = ConfigDict(
        frozen=True,  # All value objects are immutable
        extra="ignore",
    )
