"""Delete comment use case."""

import logfire
from pydantic import BaseModel

from commentary.application.usecase.base import BaseUseCase
from commentary.application.usecase.section import LoadCommentsRequest, LoadCommentsUseCase
from commentary.domain.gateway.comment import CommentGateway
from commentary.domain.model.mutation import DeleteMutation
from commentary.domain.model.section import CommentSection
from commentary.domain.service import MutationService
from commentary.domain.value import CommentId, MutationKind, MutationOutcome


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: CommentId


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: CommentId
    outcome: MutationOutcome
    refetched: bool = False


class DeleteCommentUseCase(BaseUseCase):
    """Use case for soft-deleting a comment.

    The comment stays in the tree as a tombstone so its replies remain
    reachable.
    """

    def __init__(
        self,
        gateway: CommentGateway,
        mutation_service: MutationService,
        load_comments: LoadCommentsUseCase,
    ) -> None:
        """Initialize delete comment use case.

        Args:
            gateway: Comment API gateway
            mutation_service: Local tree reconciliation
            load_comments: Used to refetch the thread in thread mode
        """
        self.gateway = gateway
        self.mutation_service = mutation_service
        self.load_comments = load_comments

    async def execute(
        self, section: CommentSection, request: DeleteCommentRequest
    ) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            TransportError: If the request fails (local data is unchanged)
        """
        snapshot = section.view
        with logfire.span("delete_comment.execute", comment_id=request.comment_id):
            await self.gateway.delete_comment(request.comment_id)

            outcome = self.mutation_service.apply(
                section,
                MutationKind.DELETE,
                DeleteMutation(id=request.comment_id),
                snapshot=snapshot,
            )

            refetched = False
            if outcome is MutationOutcome.REFETCH_REQUIRED:
                result = await self.load_comments.execute(
                    section, LoadCommentsRequest(force=True)
                )
                refetched = result.loaded

            return DeleteCommentResponse(
                comment_id=request.comment_id, outcome=outcome, refetched=refetched
            )
