"""Create comment use case."""

import logfire
from pydantic import BaseModel

from commentary.application.usecase.base import BaseUseCase
from commentary.application.usecase.section import LoadCommentsRequest, LoadCommentsUseCase
from commentary.domain.gateway.comment import CommentGateway
from commentary.domain.model.comment import Comment
from commentary.domain.model.mutation import CreateMutation, ReplyMutation
from commentary.domain.model.section import CommentSection
from commentary.domain.service import MutationService
from commentary.domain.value import CommentId, Link, Media, MutationKind, MutationOutcome


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    content: str
    media: Media | None = None
    link: Link | None = None
    parent_id: CommentId | None = None  # Parent comment ID for replies


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: Comment
    outcome: MutationOutcome
    refetched: bool = False


class CreateCommentUseCase(BaseUseCase):
    """Use case for posting a comment on the section's content, or a reply."""

    def __init__(
        self,
        gateway: CommentGateway,
        mutation_service: MutationService,
        load_comments: LoadCommentsUseCase,
    ) -> None:
        """Initialize create comment use case.

        Args:
            gateway: Comment API gateway
            mutation_service: Local tree reconciliation
            load_comments: Used to refetch the thread in thread mode
        """
        self.gateway = gateway
        self.mutation_service = mutation_service
        self.load_comments = load_comments

    async def execute(
        self, section: CommentSection, request: CreateCommentRequest
    ) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Reject empty content before any request
        2. Create the comment via the gateway
        3. Reconcile the confirmed comment into the active mode (prepend as
           a root, or as the first reply of its parent)
        4. In thread mode, refetch the thread instead

        Args:
            section: Comment section the comment is posted in
            request: Create comment request

        Returns:
            Created comment and how it was applied locally

        Raises:
            ValidationError: If content is empty
            TransportError: If the request fails (local data is unchanged)
        """
        kind = MutationKind.CREATE if request.parent_id is None else MutationKind.REPLY
        self.mutation_service.require_content(kind, request.content)

        snapshot = section.view
        with logfire.span("create_comment.execute", kind=kind.value, parent_id=request.parent_id):
            comment = await self.gateway.create_comment(
                section.target,
                request.content,
                media=request.media,
                link=request.link,
                parent_id=request.parent_id,
            )

            if request.parent_id is None:
                payload = CreateMutation(comment=comment)
            else:
                payload = ReplyMutation(parent_id=request.parent_id, reply=comment)
            outcome = self.mutation_service.apply(section, kind, payload, snapshot=snapshot)

            refetched = False
            if outcome is MutationOutcome.REFETCH_REQUIRED:
                result = await self.load_comments.execute(
                    section, LoadCommentsRequest(force=True)
                )
                refetched = result.loaded

            return CreateCommentResponse(comment=comment, outcome=outcome, refetched=refetched)
