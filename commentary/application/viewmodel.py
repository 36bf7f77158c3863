"""Comments view-model.

The façade a presentation layer binds to. It owns one ``CommentSection``
and exposes read accessors for rendering, the navigation actions, and the
async operations that talk to the gateway. Navigation never loads by
itself: call ``load()`` after a navigation that returned True.
"""

from typing import Any

from pydantic import TypeAdapter

from commentary.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from commentary.application.usecase.section import (
    LoadCommentsRequest,
    LoadCommentsResponse,
    LoadCommentsUseCase,
    LoadMoreRequest,
    LoadMoreResponse,
    LoadMoreUseCase,
)
from commentary.config import Settings
from commentary.domain.model import (
    Back,
    ChangeSearchType,
    ChangeSort,
    Comment,
    CommentSection,
    NavigationAction,
    Reset,
    ShowSearch,
    ShowThread,
    ThreadItem,
    ViewState,
)
from commentary.domain.service import (
    AnnotationStore,
    MutationService,
    ViewModeService,
    display,
)
from commentary.domain.value import (
    CommentId,
    CommentSort,
    EmptyState,
    Link,
    Media,
    MutationKind,
    MutationOutcome,
    PaginationInfo,
    SearchType,
    TargetRef,
    ViewMode,
)

_navigation_adapter: TypeAdapter[NavigationAction] = TypeAdapter(NavigationAction)


class CommentsViewModel:
    """View-model of one comment section."""

    def __init__(
        self,
        section: CommentSection,
        annotation_store: AnnotationStore,
        view_mode_service: ViewModeService,
        mutation_service: MutationService,
        load_comments: LoadCommentsUseCase,
        load_more: LoadMoreUseCase,
        create_comment: CreateCommentUseCase,
        update_comment: UpdateCommentUseCase,
        delete_comment: DeleteCommentUseCase,
        settings: Settings,
    ) -> None:
        self.section = section
        self.annotations = annotation_store
        self.view_mode_service = view_mode_service
        self.mutation_service = mutation_service
        self._load_comments = load_comments
        self._load_more = load_more
        self._create_comment = create_comment
        self._update_comment = update_comment
        self._delete_comment = delete_comment
        self.settings = settings

    @property
    def target(self) -> TargetRef:
        return self.section.target

    @property
    def view(self) -> ViewState:
        return self.section.view

    @property
    def mode(self) -> ViewMode:
        return self.section.view.mode

    def _resolve_mode(self, mode: ViewMode | str | None) -> ViewMode:
        return ViewMode(mode) if mode is not None else self.mode

    # Read accessors

    def get_current_items(self, mode: ViewMode | str | None = None) -> list[ThreadItem]:
        """Items held for a mode, as merged (tombstones included).

        In thread mode this is the focal comment alone; its ancestors come
        from ``get_thread_context``.
        """
        mode = self._resolve_mode(mode)
        if mode is ViewMode.THREAD:
            thread = self.section.thread
            return [thread.focal] if thread is not None else []
        return list(self.section.accumulator(mode).items)

    def get_visible_items(self, mode: ViewMode | str | None = None) -> list[ThreadItem]:
        """Items to render: childless tombstones are removed at every level."""
        mode = self._resolve_mode(mode)
        items = self.get_current_items(mode)
        if mode is ViewMode.SEARCH:
            return items
        return display.filter_visible(items)

    def get_pagination(self, mode: ViewMode | str | None = None) -> PaginationInfo:
        """Pagination summary of a mode."""
        mode = self._resolve_mode(mode)
        if mode is ViewMode.THREAD:
            count = len(self.get_current_items(mode))
            return PaginationInfo(total=count, has_more=False, current_count=count)

        accumulator = self.section.accumulator(mode)
        return PaginationInfo(
            total=accumulator.total,
            has_more=accumulator.loaded and accumulator.has_next,
            current_count=len(accumulator.items),
        )

    def get_thread_context(self) -> list[Comment]:
        """Ancestors of the focal comment, root first ([] outside thread mode)."""
        if self.mode is not ViewMode.THREAD or self.section.thread is None:
            return []
        return list(self.section.thread.parent_context)

    def is_loading(self, mode: ViewMode | str | None = None) -> bool:
        """Whether the mode's initial data is still expected."""
        mode = self._resolve_mode(mode)
        if mode in self.section.failed:
            return False
        if self.view_mode_service.enabled_source(self.view) is not mode:
            return False
        if mode is ViewMode.THREAD:
            return self.section.thread is None or self.section.thread_loading
        return not self.section.accumulator(mode).loaded

    def is_loading_more(self) -> bool:
        """Whether a next page is being fetched for the active mode."""
        if self.mode is ViewMode.THREAD:
            return False
        return self.section.accumulator(self.mode).is_loading_more

    def has_failed(self, mode: ViewMode | str | None = None) -> bool:
        """Whether the last request of a mode failed."""
        return self._resolve_mode(mode) in self.section.failed

    def empty_state(self) -> EmptyState | None:
        """Why the active mode shows nothing, or None."""
        return display.empty_state(
            self.view,
            self.get_visible_items(),
            self.is_loading(),
            min_query_length=self.settings.search.min_query_length,
        )

    # Annotations

    def is_collapsed(self, comment_id: CommentId) -> bool:
        return self.annotations.is_collapsed(comment_id)

    def toggle_collapse(self, comment_id: CommentId) -> bool:
        return self.annotations.toggle_collapse(comment_id)

    def is_read_more_expanded(self, comment_id: CommentId) -> bool:
        return self.annotations.is_expanded(comment_id)

    def toggle_read_more(self, comment_id: CommentId) -> bool:
        return self.annotations.toggle_read_more(comment_id)

    def needs_read_more(self, comment: Comment) -> bool:
        """Whether the comment should be clamped behind "show more"."""
        return display.needs_read_more(
            comment.content, self.settings.display.read_more_threshold
        )

    def set_highlight(self, comment_id: CommentId | None) -> CommentId | None:
        return self.annotations.set_highlight(comment_id)

    def get_highlight(self) -> CommentId | None:
        return self.annotations.get_highlight()

    def collapsed_label(self, comment: Comment) -> str:
        """Label for a collapsed comment, counting replies at every depth."""
        return display.reply_label(display.count_total_replies(comment))

    # Local mutations

    def apply_mutation(self, kind: MutationKind | str, payload: Any) -> MutationOutcome:
        """Reconcile an already-confirmed mutation into the active mode.

        Raises:
            ValidationError: If the payload is invalid
        """
        return self.mutation_service.apply(self.section, MutationKind(kind), payload)

    # Navigation

    def navigate(self, action: NavigationAction | dict[str, Any]) -> bool:
        """Apply a navigation action.

        Returns:
            True if the view changed (loaded data was dropped)
        """
        if isinstance(action, dict):
            action = _navigation_adapter.validate_python(action)
        return self.view_mode_service.navigate(self.section, action)

    def show_thread(self, comment_id: CommentId) -> bool:
        return self.navigate(ShowThread(comment_id=comment_id))

    def show_search(self, query: str, search_type: SearchType | None = None) -> bool:
        return self.navigate(ShowSearch(query=query, search_type=search_type))

    def back(self) -> bool:
        return self.navigate(Back())

    def reset(self) -> bool:
        return self.navigate(Reset())

    def change_sort(self, sort: CommentSort) -> bool:
        return self.navigate(ChangeSort(sort=sort))

    def change_search_type(self, search_type: SearchType) -> bool:
        return self.navigate(ChangeSearchType(search_type=search_type))

    # Gateway operations

    async def load(self, force: bool = False) -> LoadCommentsResponse:
        """Load the first page (or the thread) of the active mode."""
        return await self._load_comments.execute(
            self.section, LoadCommentsRequest(force=force)
        )

    async def on_sentinel_visible(self) -> LoadMoreResponse:
        """The end-of-list sentinel scrolled into view."""
        return await self._load_more.execute(self.section, LoadMoreRequest())

    async def create_comment(
        self, content: str, media: Media | None = None, link: Link | None = None
    ) -> CreateCommentResponse:
        return await self._create_comment.execute(
            self.section, CreateCommentRequest(content=content, media=media, link=link)
        )

    async def reply(
        self,
        parent_id: CommentId,
        content: str,
        media: Media | None = None,
        link: Link | None = None,
    ) -> CreateCommentResponse:
        return await self._create_comment.execute(
            self.section,
            CreateCommentRequest(content=content, media=media, link=link, parent_id=parent_id),
        )

    async def update_comment(self, comment_id: CommentId, **fields: Any) -> UpdateCommentResponse:
        """Edit a comment; pass any of ``content``, ``media``, ``link``."""
        return await self._update_comment.execute(
            self.section, UpdateCommentRequest(comment_id=comment_id, **fields)
        )

    async def delete_comment(self, comment_id: CommentId) -> DeleteCommentResponse:
        return await self._delete_comment.execute(
            self.section, DeleteCommentRequest(comment_id=comment_id)
        )


class CommentsViewModelFactory:
    """Opens view-models that share one session's annotation store."""

    def __init__(
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
    ) -> None:
        self.annotation_store = annotation_store
        self.view_mode_service = view_mode_service
        self.mutation_service = mutation_service
        self.load_comments = load_comments
        self.load_more = load_more
        self.create_comment = create_comment
        self.update_comment = update_comment
        self.delete_comment = delete_comment
        self.settings = settings

    def open(self, target: TargetRef) -> CommentsViewModel:
        """Create a view-model for a content item's comment section.

        Opening a section (e.g. after the URL changed) always starts from
        the default view with nothing loaded.
        """
        return CommentsViewModel(
            section=CommentSection(target=target),
            annotation_store=self.annotation_store,
            view_mode_service=self.view_mode_service,
            mutation_service=self.mutation_service,
            load_comments=self.load_comments,
            load_more=self.load_more,
            create_comment=self.create_comment,
            update_comment=self.update_comment,
            delete_comment=self.delete_comment,
            settings=self.settings,
        )
