"""Update comment use case."""

import logfire
from pydantic import BaseModel

from commentary.application.usecase.base import BaseUseCase
from commentary.application.usecase.section import LoadCommentsRequest, LoadCommentsUseCase
from commentary.domain.gateway.comment import CommentGateway
from commentary.domain.model.comment import Comment
from commentary.domain.model.mutation import UpdateMutation
from commentary.domain.model.section import CommentSection
from commentary.domain.service import MutationService
from commentary.domain.value import CommentId, Link, Media, MutationKind, MutationOutcome


class UpdateCommentRequest(BaseModel):
    """Update comment request.

    Only fields explicitly set are sent; set ``media`` or ``link`` to None
    to remove the attachment.
    """

    comment_id: CommentId
    content: str | None = None
    media: Media | None = None
    link: Link | None = None


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment: Comment
    outcome: MutationOutcome
    refetched: bool = False


class UpdateCommentUseCase(BaseUseCase):
    """Use case for editing a comment."""

    def __init__(
        self,
        gateway: CommentGateway,
        mutation_service: MutationService,
        load_comments: LoadCommentsUseCase,
    ) -> None:
        """Initialize update comment use case.

        Args:
            gateway: Comment API gateway
            mutation_service: Local tree reconciliation
            load_comments: Used to refetch the thread in thread mode
        """
        self.gateway = gateway
        self.mutation_service = mutation_service
        self.load_comments = load_comments

    async def execute(
        self, section: CommentSection, request: UpdateCommentRequest
    ) -> UpdateCommentResponse:
        """Execute update comment flow.

        Args:
            section: Comment section showing the comment
            request: Update comment request

        Returns:
            Updated comment and how it was applied locally

        Raises:
            ValidationError: If the update sets empty content
            TransportError: If the request fails (local data is unchanged)
        """
        fields = request.model_dump(include=request.model_fields_set - {"comment_id"})
        mutation = self.mutation_service.parse(
            MutationKind.UPDATE, UpdateMutation(id=request.comment_id, **fields)
        )

        snapshot = section.view
        with logfire.span("update_comment.execute", comment_id=request.comment_id):
            updated = await self.gateway.update_comment(request.comment_id, mutation.patch())

            # Merge what the server stored, not what was sent
            confirmed = UpdateMutation(
                id=updated.id,
                content=updated.content,
                media=updated.media,
                link=updated.link,
                is_edited=updated.is_edited,
            )
            outcome = self.mutation_service.apply(
                section, MutationKind.UPDATE, confirmed, snapshot=snapshot
            )

            refetched = False
            if outcome is MutationOutcome.REFETCH_REQUIRED:
                result = await self.load_comments.execute(
                    section, LoadCommentsRequest(force=True)
                )
                refetched = result.loaded

            return UpdateCommentResponse(comment=updated, outcome=outcome, refetched=refetched)
