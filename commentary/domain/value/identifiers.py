"""Strongly typed identifiers for comment section entities.

The platform API uses integer primary keys. NewType keeps comment ids,
content ids and author ids from being mixed up.
"""

from typing import NewType

CommentId = NewType("CommentId", int)
ObjectId = NewType("ObjectId", int)
ProfileId = NewType("ProfileId", int)
