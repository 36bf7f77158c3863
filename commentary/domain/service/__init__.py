"""Domain services."""

from . import display, tree_mutations
from .annotation_store import AnnotationStore
from .base import Service
from .mutation_service import MutationService
from .pagination_service import PaginationService
from .scroll_service import ScrollTrigger
from .thread_service import ThreadService
from .view_mode_service import ViewModeService

__all__ = [
    "AnnotationStore",
    "MutationService",
    "PaginationService",
    "ScrollTrigger",
    "Service",
    "ThreadService",
    "ViewModeService",
    "display",
    "tree_mutations",
]
