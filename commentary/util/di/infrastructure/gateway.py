"""Comment gateway infrastructure providers."""

from collections.abc import AsyncIterator

import httpx
import logfire
from dishka import Scope, provide

from commentary.adapter.http import HttpCommentGateway
from commentary.config import Settings
from commentary.domain.gateway import CommentGateway
from commentary.domain.service import ThreadService
from commentary.util.di.base import ProviderBase
from commentary.util.error import ConfigurationError


class GatewayProvider(ProviderBase):
    """Comment gateway component base."""

    __mock_component__ = "gateway"


class ProdGatewayProvider(GatewayProvider):
    """Production gateway provider talking to the platform API over HTTP."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_http_client(self, settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
        """Provide the shared HTTP client, closed with the container.

        Raises:
            ConfigurationError: If the API base URL is not configured
        """
        if not settings.api.base_url:
            raise ConfigurationError("API base URL must be configured")

        async with httpx.AsyncClient(
            base_url=settings.api.base_url,
            timeout=settings.api.timeout,
            headers={"Accept": "application/json"},
        ) as client:
            logfire.info("HTTP client opened", base_url=settings.api.base_url)
            yield client

    @provide(scope=Scope.REQUEST)
    def get_comment_gateway(
        self,
        client: httpx.AsyncClient,
        thread_service: ThreadService,
        settings: Settings,
    ) -> CommentGateway:
        """Provide HTTP comment gateway."""
        return HttpCommentGateway(
            client=client,
            thread_service=thread_service,
            access_token=settings.api.access_token,
        )
