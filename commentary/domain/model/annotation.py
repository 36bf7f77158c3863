"""Per-comment UI annotation."""

from commentary.domain.model.common import DomainModel


class Annotation(DomainModel):
    """UI state of one comment, independent of the tree it appears in."""

    collapsed: bool = False
    read_more_expanded: bool = False
