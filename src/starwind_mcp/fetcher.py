"""HTTP fetcher for Starwind documentation and manifests.

All network I/O goes through a single Fetcher instance shared across tool
calls. The Fetcher receives an httpx.AsyncClient via constructor injection;
the lifespan owns the client lifecycle. There is no retry: a failed fetch
surfaces immediately so resolvers can apply their fallback policy.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx
import structlog

from starwind_mcp.errors import ErrorCode, StarwindError

if TYPE_CHECKING:
    from starwind_mcp.config import FetcherSettings

log = structlog.get_logger()


def build_http_client(settings: FetcherSettings) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    return httpx.AsyncClient(
        follow_redirects=True,
        max_redirects=settings.max_redirects,
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers={"User-Agent": settings.user_agent},
        limits=httpx.Limits(
            max_connections=10,
            max_keepalive_connections=5,
        ),
    )


class Fetcher:
    """Fetches remote text and JSON, mapping failures to StarwindError."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch_text(self, url: str) -> str:
        """Fetch a URL and return its body as text.

        Raises StarwindError with ``PAGE_NOT_FOUND`` on HTTP 404 and
        ``UPSTREAM_FETCH_FAILED`` on any other non-2xx status or network error.
        """
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise StarwindError(
                code=ErrorCode.UPSTREAM_FETCH_FAILED,
                message=f"Network error fetching {url}: {exc}",
                suggestion="starwind.dev may be temporarily unavailable. Try again later.",
                recoverable=True,
            ) from exc

        if not response.is_success:
            if response.status_code == 404:
                raise StarwindError(
                    code=ErrorCode.PAGE_NOT_FOUND,
                    message=f"HTTP 404 fetching {url}",
                    suggestion="The requested document does not exist at this URL.",
                    recoverable=False,
                )
            raise StarwindError(
                code=ErrorCode.UPSTREAM_FETCH_FAILED,
                message=f"HTTP {response.status_code} fetching {url}",
                suggestion="starwind.dev may be temporarily unavailable. Try again later.",
                recoverable=True,
            )

        log.info(
            "fetch_complete",
            url=url,
            status_code=response.status_code,
            content_length=len(response.text),
        )
        return response.text

    async def fetch_json(self, url: str) -> Any:
        """Fetch a URL and decode its body as JSON."""
        text = await self.fetch_text(url)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise StarwindError(
                code=ErrorCode.UPSTREAM_FETCH_FAILED,
                message=f"Invalid JSON from {url}: {exc}",
                suggestion="The remote document may be temporarily malformed. Try again later.",
                recoverable=True,
            ) from exc
