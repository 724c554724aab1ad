"""Markup fetcher: the single outbound GET for the audited page."""

import httpx
import structlog

from ..config import settings
from ..errors import FetchError, UnsupportedContentError, ValidationError
from ..models import FetchResult
from .urls import HOST_NOT_ALLOWED_MESSAGE, is_blocked_host

logger = structlog.get_logger()

ACCEPT_HEADER = "text/html,application/xhtml+xml"


class MarkupFetcher:
    """
    Retrieves raw HTML for a page.

    Redirects are followed and the final URL is reported, since that is the
    address every later stage (including PageSpeed) works with. Only
    ``text/html`` responses are accepted and the body is truncated to
    ``max_body_bytes``.
    """

    def __init__(
        self,
        timeout: float | None = None,
        max_body_bytes: int | None = None,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout or settings.fetch_timeout
        self.max_body_bytes = max_body_bytes or settings.max_body_bytes
        self.user_agent = user_agent or settings.user_agent
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def start(self) -> None:
        """Initialize HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                headers={"User-Agent": self.user_agent, "Accept": ACCEPT_HEADER},
                event_hooks={"request": [self._check_host]},
                transport=self._transport,
            )

    async def _check_host(self, request: httpx.Request) -> None:
        """Refuse requests, including redirect hops, aimed at local hosts."""
        if is_blocked_host(request.url.host):
            logger.warning("Blocked request to local host", url=str(request.url))
            raise ValidationError(HOST_NOT_ALLOWED_MESSAGE)

    async def stop(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "MarkupFetcher":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()

    async def fetch(self, url: str) -> FetchResult:
        """
        Fetch a page and return its markup.

        Args:
            url: Canonical absolute URL.

        Returns:
            FetchResult with the (possibly truncated) markup, the final URL
            after redirects and the HTTP status.

        Raises:
            UnsupportedContentError: if the response is not HTML.
            ValidationError: if a redirect leads to a local host.
            FetchError: on transport failures.
        """
        await self.start()

        try:
            async with self._client.stream("GET", url) as response:
                content_type = response.headers.get("content-type", "")
                if "text/html" not in content_type.lower():
                    logger.info("Rejected non-HTML response", url=url, content_type=content_type)
                    raise UnsupportedContentError(content_type)

                body = await self._read_limited(response)
                html = body.decode(response.encoding or "utf-8", errors="replace")
                final_url = str(response.url)
                status_code = response.status_code

        except httpx.RequestError as e:
            logger.warning("Page fetch failed", url=url, error=str(e) or type(e).__name__)
            raise FetchError(url, str(e) or type(e).__name__) from e

        logger.info(
            "Fetched page",
            url=url,
            final_url=final_url,
            status_code=status_code,
            size=len(body),
        )
        return FetchResult(
            html=html,
            final_url=final_url,
            status_code=status_code,
            content_type=content_type,
        )

    async def _read_limited(self, response: httpx.Response) -> bytes:
        """Read the body up to ``max_body_bytes`` and drop the rest."""
        chunks: list[bytes] = []
        size = 0

        async for chunk in response.aiter_bytes():
            remaining = self.max_body_bytes - size
            if len(chunk) > remaining:
                chunks.append(chunk[:remaining])
                size += remaining
                logger.debug("Truncated page body", url=str(response.url), limit=self.max_body_bytes)
                break
            chunks.append(chunk)
            size += len(chunk)

        return b"".join(chunks)
