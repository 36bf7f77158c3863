"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any

from commentary.domain.model.section import CommentSection


class BaseUseCase(ABC):
    """Base use case for orchestrating gateway requests and domain services."""

    @abstractmethod
    async def execute(self, section: CommentSection, request: Any) -> Any:
        pass
