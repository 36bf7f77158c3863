"""HTTP comment gateway.

Talks to the platform comments API. Every response body is wrapped in a
``{"data": ...}`` envelope.
"""

from typing import Any

import httpx
import logfire
import pydantic

from commentary.domain.error import TransportError
from commentary.domain.gateway.comment import CommentGateway
from commentary.domain.model.comment import Comment
from commentary.domain.model.page import Page
from commentary.domain.model.search_result import SearchResult
from commentary.domain.model.thread import ThreadView
from commentary.domain.service.thread_service import ThreadService
from commentary.domain.value import (
    CommentId,
    CommentSort,
    Link,
    Media,
    SearchType,
    TargetRef,
)


class HttpCommentGateway(CommentGateway):
    """CommentGateway backed by the platform REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        thread_service: ThreadService,
        access_token: str | None = None,
    ) -> None:
        """Initialize HTTP gateway.

        Args:
            client: Shared async client, with ``base_url`` and timeout set
            thread_service: Normalizes thread responses
            access_token: Bearer token of the signed-in profile, if any
        """
        self.client = client
        self.thread_service = thread_service
        self.access_token = access_token

    def _headers(self) -> dict[str, str]:
        if self.access_token:
            return {"Authorization": f"Bearer {self.access_token}"}
        return {}

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and unwrap the ``data`` envelope.

        Raises:
            TransportError: On connection errors, non-2xx statuses and
                bodies without a ``data`` member
        """
        try:
            response = await self.client.request(
                method, url, params=params, json=json, headers=self._headers()
            )
        except httpx.HTTPError as e:
            logfire.error("Comments API HTTP error", operation=operation, error=str(e))
            raise TransportError(operation, f"HTTP error: {e}") from e

        if response.is_error:
            logfire.error(
                "Comments API request failed",
                operation=operation,
                status_code=response.status_code,
                error=response.text,
            )
            raise TransportError(
                operation,
                f"unexpected status {response.status_code}",
                status_code=response.status_code,
            )

        if response.status_code == 204 or not response.content:
            return None

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(operation, "response is not JSON", response.status_code) from e

        if not isinstance(body, dict) or "data" not in body:
            raise TransportError(operation, "response has no data envelope", response.status_code)
        return body["data"]

    @staticmethod
    def _parse(operation: str, model: Any, data: Any) -> Any:
        try:
            return model.model_validate(data)
        except pydantic.ValidationError as e:
            logfire.error("Comments API response invalid", operation=operation, error=str(e))
            raise TransportError(operation, f"invalid response: {e}") from e

    async def list_comments(
        self,
        target: TargetRef,
        sort: CommentSort,
        page: int,
        page_size: int,
    ) -> Page[Comment]:
        """GET /comments/{content_type}/{object_id}."""
        data = await self._request(
            "list_comments",
            "GET",
            f"/comments/{target.content_type.value}/{target.object_id}",
            params={"sort": sort.value, "page": page, "page_size": page_size},
        )
        return self._parse("list_comments", Page[Comment], data)

    async def search_comments(
        self,
        query: str,
        search_type: SearchType,
        scope: TargetRef | None,
        sort: CommentSort,
        page: int,
        page_size: int,
    ) -> Page[SearchResult]:
        """GET /comments/search."""
        params: dict[str, Any] = {
            "q": query,
            "search_type": search_type.value,
            "page": page,
            "page_size": page_size,
            "sort": sort.value,
        }
        if scope is not None:
            params["content_type"] = scope.content_type.value
            params["object_id"] = scope.object_id

        data = await self._request("search_comments", "GET", "/comments/search", params=params)
        return self._parse("search_comments", Page[SearchResult], data)

    async def get_thread(
        self,
        focal_id: CommentId,
        parent_levels: int,
        reply_depth: int,
    ) -> ThreadView:
        """GET /comments/{id}/thread."""
        data = await self._request(
            "get_thread",
            "GET",
            f"/comments/{focal_id}/thread",
            params={"parent_levels": parent_levels, "reply_depth": reply_depth},
        )
        thread = self._parse("get_thread", ThreadView, data)
        return self.thread_service.from_response(thread.focal, thread.parent_context)

    async def create_comment(
        self,
        target: TargetRef,
        content: str,
        media: Media | None = None,
        link: Link | None = None,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """POST /comments/{content_type}/{object_id}."""
        payload: dict[str, Any] = {"content": content}
        if parent_id is not None:
            payload["parent_id"] = parent_id
        if media is not None:
            payload["media"] = media.model_dump(mode="json")
        if link is not None:
            payload["link"] = link.model_dump(mode="json")

        data = await self._request(
            "create_comment",
            "POST",
            f"/comments/{target.content_type.value}/{target.object_id}",
            json=payload,
        )
        comment = self._parse("create_comment", Comment, data)
        logfire.info("Comment created", comment_id=comment.id, parent_id=parent_id)
        return comment

    async def update_comment(self, comment_id: CommentId, patch: dict[str, Any]) -> Comment:
        """PATCH /comments/{id}."""
        payload = {
            key: value.model_dump(mode="json") if isinstance(value, pydantic.BaseModel) else value
            for key, value in patch.items()
        }
        data = await self._request(
            "update_comment", "PATCH", f"/comments/{comment_id}", json=payload
        )
        comment = self._parse("update_comment", Comment, data)
        logfire.info("Comment updated", comment_id=comment_id, fields=sorted(patch))
        return comment

    async def delete_comment(self, comment_id: CommentId) -> None:
        """DELETE /comments/{id}."""
        await self._request("delete_comment", "DELETE", f"/comments/{comment_id}")
        logfire.info("Comment deleted", comment_id=comment_id)
