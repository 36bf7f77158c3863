"""Application layer DI providers."""

from dishka import Scope, provide

from commentary.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    UpdateCommentUseCase,
)
from commentary.application.usecase.section import LoadCommentsUseCase, LoadMoreUseCase
from commentary.application.viewmodel import CommentsViewModelFactory
from commentary.config import Settings
from commentary.domain.gateway import CommentGateway
from commentary.domain.service import (
    AnnotationStore,
    MutationService,
    PaginationService,
    ScrollTrigger,
    ThreadService,
    ViewModeService,
)
from commentary.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Section use cases
    @provide(scope=Scope.REQUEST)
    def get_load_comments_use_case(
        self,
        gateway: CommentGateway,
        pagination_service: PaginationService,
        thread_service: ThreadService,
        view_mode_service: ViewModeService,
        annotation_store: AnnotationStore,
        settings: Settings,
    ) -> LoadCommentsUseCase:
        """Provide load comments use case."""
        return LoadCommentsUseCase(
            gateway=gateway,
            pagination_service=pagination_service,
            thread_service=thread_service,
            view_mode_service=view_mode_service,
            annotation_store=annotation_store,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_load_more_use_case(
        self,
        gateway: CommentGateway,
        scroll_trigger: ScrollTrigger,
        pagination_service: PaginationService,
        annotation_store: AnnotationStore,
        settings: Settings,
    ) -> LoadMoreUseCase:
        """Provide load more use case."""
        return LoadMoreUseCase(
            gateway=gateway,
            scroll_trigger=scroll_trigger,
            pagination_service=pagination_service,
            annotation_store=annotation_store,
            settings=settings,
        )

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        gateway: CommentGateway,
        mutation_service: MutationService,
        load_comments: LoadCommentsUseCase,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            gateway=gateway,
            mutation_service=mutation_service,
            load_comments=load_comments,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self,
        gateway: CommentGateway,
        mutation_service: MutationService,
        load_comments: LoadCommentsUseCase,
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(
            gateway=gateway,
            mutation_service=mutation_service,
            load_comments=load_comments,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self,
        gateway: CommentGateway,
        mutation_service: MutationService,
        load_comments: LoadCommentsUseCase,
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            gateway=gateway,
            mutation_service=mutation_service,
            load_comments=load_comments,
        )

    # View-model
    @provide(scope=Scope.REQUEST)
    def get_view_model_factory(
        self,
        annotation_store: AnnotationStore,
        view_mode_service: ViewModeService,
        mutation_service: MutationService,
        load_comments: LoadCommentsUseCase,
        load_more: LoadMoreUseCase,
        create_comment: CreateCommentUseCase,
        update_comment: UpdateCommentUseCase,
        delete_comment: DeleteCommentUseCase,
        settings: Settings,
    ) -> CommentsViewModelFactory:
        """Provide the comments view-model factory of the session."""
        return CommentsViewModelFactory(
            annotation_store=annotation_store,
            view_mode_service=view_mode_service,
            mutation_service=mutation_service,
            load_comments=load_comments,
            load_more=load_more,
            create_comment=create_comment,
            update_comment=update_comment,
            delete_comment=delete_comment,
            settings=settings,
        )
