"""PageSpeed Insights API client."""

import re
from typing import Any

import httpx
import structlog

from ..config import settings
from ..errors import PageSpeedError
from ..models import (
    PageSpeedDegraded,
    PageSpeedMetrics,
    PageSpeedOk,
    PageSpeedOutcome,
    PageSpeedResult,
    PageSpeedScores,
)

logger = structlog.get_logger()

PAGESPEED_API_URL = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"

CATEGORIES = ("performance", "seo", "best-practices", "accessibility")

# (primary audit id, fallbacks...)
LCP_AUDITS = ("largest-contentful-paint",)
CLS_AUDITS = ("cumulative-layout-shift",)
INP_AUDITS = ("interaction-to-next-paint", "experimental-interaction-to-next-paint")

# Failures worth one retry without the key
AUTH_ERROR_PATTERN = re.compile(
    r"api[ _]?key|invalid[ _]key|forbidden|unauthori[sz]ed|permission denied|\b40[13]\b",
    re.IGNORECASE,
)


def _category_score(categories: dict, category_id: str) -> int | None:
    score = (categories.get(category_id) or {}).get("score")
    if not isinstance(score, (int, float)):
        return None
    return round(score * 100)


def _audit_value(audits: dict, audit_ids: tuple[str, ...]) -> float | None:
    for audit_id in audit_ids:
        value = (audits.get(audit_id) or {}).get("numericValue")
        if isinstance(value, (int, float)):
            return value
    return None


def parse_pagespeed_response(payload: dict[str, Any], strategy: str = "mobile") -> PageSpeedResult:
    """Extract category scores and lab metrics from an API response."""
    lighthouse = payload.get("lighthouseResult") or {}
    categories = lighthouse.get("categories") or {}
    audits = lighthouse.get("audits") or {}

    scores = PageSpeedScores(
        performance=_category_score(categories, "performance"),
        seo=_category_score(categories, "seo"),
        best_practices=_category_score(categories, "best-practices"),
        accessibility=_category_score(categories, "accessibility"),
    )

    lcp = _audit_value(audits, LCP_AUDITS)
    cls = _audit_value(audits, CLS_AUDITS)
    inp = _audit_value(audits, INP_AUDITS)
    byte_weight = _audit_value(audits, ("total-byte-weight",))

    request_count = None
    network_items = ((audits.get("network-requests") or {}).get("details") or {}).get("items")
    if isinstance(network_items, list):
        request_count = len(network_items)

    metrics = PageSpeedMetrics(
        lcp_ms=round(lcp) if lcp is not None else None,
        cls=round(cls, 4) if cls is not None else None,
        inp_ms=round(inp) if inp is not None else None,
        total_byte_weight=round(byte_weight) if byte_weight is not None else None,
        request_count=request_count,
    )

    return PageSpeedResult(
        scores=scores,
        metrics=metrics,
        strategy=strategy,
        fetch_time=lighthouse.get("fetchTime"),
    )


class PageSpeedClient:
    """
    Client for the PageSpeed Insights v5 API.

    The API key is injected at construction. When a keyed request is
    rejected for authentication reasons the client retries once without the
    key, falling back to the public rate-limited quota. No other failure is
    retried, and the retry is immediate.
    """

    def __init__(
        self,
        api_key: str | None = None,
        strategy: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.strategy = strategy or settings.pagespeed_strategy
        self.timeout = timeout or settings.pagespeed_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def start(self) -> None:
        """Initialize the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=10.0),
                transport=self._transport,
            )

    async def stop(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "PageSpeedClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()

    def _build_params(self, url: str, api_key: str | None) -> list[tuple[str, str]]:
        params = [("url", url), ("strategy", self.strategy)]
        params.extend(("category", category) for category in CATEGORIES)
        if api_key:
            params.append(("key", api_key))
        return params

    async def _request(self, url: str, api_key: str | None) -> dict[str, Any]:
        """Make one API call and return the decoded JSON."""
        if self._client is None:
            await self.start()

        try:
            response = await self._client.get(PAGESPEED_API_URL, params=self._build_params(url, api_key))
        except httpx.RequestError as e:
            raise PageSpeedError(f"PageSpeed request failed: {str(e) or type(e).__name__}") from e

        if response.status_code != 200:
            try:
                detail = response.json().get("error", {}).get("message", response.text[:200])
            except (ValueError, AttributeError):
                detail = response.text[:200]
            raise PageSpeedError(f"PageSpeed API error (HTTP {response.status_code}): {detail}")

        try:
            payload = response.json()
        except ValueError as e:
            raise PageSpeedError("PageSpeed API returned invalid JSON") from e
        if not isinstance(payload, dict):
            raise PageSpeedError("PageSpeed API returned an unexpected payload")
        return payload

    async def fetch(self, url: str) -> PageSpeedResult:
        """
        Run PageSpeed for a URL, with the keyless fallback.

        Raises:
            PageSpeedError: when the final attempt fails.
        """
        try:
            payload = await self._request(url, self.api_key)
        except PageSpeedError as e:
            if not self.api_key or not AUTH_ERROR_PATTERN.search(str(e)):
                raise
            logger.warning("PageSpeed key rejected, retrying without key", url=url, error=str(e))
            payload = await self._request(url, None)

        return parse_pagespeed_response(payload, self.strategy)

    async def run(self, url: str) -> PageSpeedOutcome:
        """Run PageSpeed and wrap failures as a degraded outcome."""
        try:
            result = await self.fetch(url)
        except PageSpeedError as e:
            logger.warning("PageSpeed unavailable", url=url, error=str(e))
            return PageSpeedDegraded(error=str(e))

        logger.info(
            "PageSpeed complete",
            url=url,
            performance=result.scores.performance,
            seo=result.scores.seo,
        )
        return PageSpeedOk(result=result)
