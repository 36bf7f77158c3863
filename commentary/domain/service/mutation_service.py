"""Optimistic mutation domain service."""

from typing import Any

import logfire
import pydantic

from commentary.domain.error import ConsistencyError, ValidationError
from commentary.domain.model.common import DomainModel
from commentary.domain.model.mutation import (
    MUTATION_PAYLOADS,
    CreateMutation,
    DeleteMutation,
    ReplyMutation,
    UpdateMutation,
)
from commentary.domain.model.section import CommentSection
from commentary.domain.model.view_state import ViewState
from commentary.domain.value import MutationKind, MutationOutcome, ViewMode

from . import tree_mutations
from .base import Service


class MutationService(Service):
    """Applies confirmed create/update/delete/reply results to a section.

    Issuing the network request is the caller's job; this service only
    reconciles its result into the in-memory tree. In all mode the tree is
    patched locally. In thread mode the caller must refetch the thread,
    since the bounded reply depth makes a local patch ambiguous. Search
    results are a flat projection and are not patched.
    """

    def parse(self, kind: MutationKind, payload: Any) -> DomainModel:
        """Validate a payload (model instance or dict) for a mutation kind.

        Raises:
            ValidationError: If the payload has the wrong shape or empty
                content
        """
        model = MUTATION_PAYLOADS[kind]
        if isinstance(payload, model):
            parsed = payload
        else:
            try:
                parsed = model.model_validate(payload)
            except pydantic.ValidationError as e:
                raise ValidationError(f"Invalid {kind.value} payload: {e}") from e

        self._check_content(kind, parsed)
        return parsed

    @staticmethod
    def require_content(kind: MutationKind, content: str | None) -> None:
        """Reject empty or whitespace-only comment content.

        Raises:
            ValidationError: If the content is blank
        """
        if not (content or "").strip():
            raise ValidationError(f"Comment cannot be empty ({kind.value})")

    def _check_content(self, kind: MutationKind, payload: DomainModel) -> None:
        if isinstance(payload, CreateMutation):
            self.require_content(kind, payload.comment.content)
        elif isinstance(payload, ReplyMutation):
            self.require_content(kind, payload.reply.content)
        elif isinstance(payload, UpdateMutation) and "content" in payload.patch():
            self.require_content(kind, payload.content)

    def apply(
        self,
        section: CommentSection,
        kind: MutationKind,
        payload: Any,
        snapshot: ViewState | None = None,
    ) -> MutationOutcome:
        """Apply a mutation to the section's active data.

        A target id that is no longer in the tree is not an error: the
        mutation is dropped and the discrepancy resolves on the next fetch.
        When ``snapshot`` is given and the view changed since it was taken,
        the mutation is skipped; the data it would patch was already dropped.

        Raises:
            ValidationError: Before any change, if the payload is invalid
        """
        parsed = self.parse(kind, payload)
        mode = section.view.mode

        with logfire.span("mutation_service.apply", kind=kind.value, mode=mode.value):
            if snapshot is not None and section.view != snapshot:
                logfire.info("View changed while mutation was in flight", kind=kind.value)
                return MutationOutcome.SKIPPED
            if mode is ViewMode.THREAD:
                logfire.info("Thread mode mutation requires refetch", kind=kind.value)
                return MutationOutcome.REFETCH_REQUIRED
            if mode is ViewMode.SEARCH:
                logfire.info("Search mode keeps no patchable tree", kind=kind.value)
                return MutationOutcome.SKIPPED

            accumulator = section.accumulator(ViewMode.ALL)
            roots = accumulator.items
            update: dict[str, Any] = {}

            if isinstance(parsed, CreateMutation):
                new_roots = tree_mutations.insert_root(roots, parsed.comment)
                if new_roots is roots:
                    logfire.info("Created comment already present", comment_id=parsed.comment.id)
                    return MutationOutcome.SKIPPED
                update["total"] = accumulator.total + 1
                target_id = parsed.comment.id
            elif isinstance(parsed, UpdateMutation):
                target_id = parsed.id
                new_roots = tree_mutations.update_node(roots, parsed.id, parsed.patch())
            elif isinstance(parsed, DeleteMutation):
                target_id = parsed.id
                new_roots = tree_mutations.soft_delete_node(roots, parsed.id)
            elif isinstance(parsed, ReplyMutation):
                target_id = parsed.parent_id
                new_roots = tree_mutations.append_reply(roots, parsed.parent_id, parsed.reply)
            else:
                raise TypeError(f"Unsupported mutation payload: {parsed!r}")

            if new_roots is roots:
                logfire.warn(
                    "Mutation target not in tree",
                    kind=kind.value,
                    error=str(ConsistencyError(target_id)),
                )
                return MutationOutcome.NOT_FOUND

            update["items"] = new_roots
            section.accumulators[ViewMode.ALL] = accumulator.model_copy(update=update)
            logfire.info("Mutation applied", kind=kind.value, comment_id=target_id)
            return MutationOutcome.APPLIED
