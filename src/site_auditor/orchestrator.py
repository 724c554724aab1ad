"""Main orchestrator that coordinates fetching, extraction, PageSpeed and scoring."""

import asyncio

import structlog

from .analyzers import IssueAnalyzer, IssueSet, aggregate_scores, select_quick_wins
from .config import Settings, settings as default_settings
from .errors import FetchError
from .extractors import extract_findings
from .fetching import MarkupFetcher, normalize_url
from .models import AnalysisReport, FetchResult, PageFindings, PageSpeedDegraded, PageSpeedOutcome
from .pagespeed import PageSpeedClient

logger = structlog.get_logger()

PAGESPEED_DISABLED = "PageSpeed disabled"


class AuditOrchestrator:
    """Orchestrates the single-page audit workflow.

    The PageSpeed run only needs the final URL, so it starts as soon as the
    fetch has resolved redirects and overlaps with extraction.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        fetcher: MarkupFetcher | None = None,
        pagespeed_client: PageSpeedClient | None = None,
    ):
        self.settings = settings or default_settings
        self.fetcher = fetcher or MarkupFetcher(
            timeout=self.settings.fetch_timeout,
            max_body_bytes=self.settings.max_body_bytes,
            user_agent=self.settings.user_agent,
        )
        self.pagespeed_client = pagespeed_client
        if self.pagespeed_client is None and self.settings.pagespeed_enabled:
            self.pagespeed_client = PageSpeedClient(
                api_key=self.settings.pagespeed_api_key,
                strategy=self.settings.pagespeed_strategy,
                timeout=self.settings.pagespeed_timeout,
            )
        self.issue_analyzer = IssueAnalyzer()

    async def run(self, raw_input: str) -> AnalysisReport:
        """
        Audit one page.

        Raises:
            ValidationError: if the input is not an allowed URL.
            UnsupportedContentError: if the page is not HTML.
            FetchError: only when ``fetch_errors_fatal`` is set.
        """
        url = normalize_url(raw_input)
        logger.info("Starting audit", url=url)

        errors: list[str] = []
        pagespeed_task: asyncio.Task | None = None

        try:
            fetched = await self._fetch(url, errors)

            if self.pagespeed_client is not None:
                pagespeed_task = asyncio.create_task(self.pagespeed_client.run(fetched.final_url))

            # Parsing is CPU-bound; keep the loop free for the PageSpeed request
            findings, issue_set = await asyncio.to_thread(self._analyze, fetched)

            if pagespeed_task is not None:
                pagespeed: PageSpeedOutcome = await pagespeed_task
            else:
                pagespeed = PageSpeedDegraded(error=PAGESPEED_DISABLED)

        finally:
            if pagespeed_task is not None and not pagespeed_task.done():
                pagespeed_task.cancel()
                await asyncio.gather(pagespeed_task, return_exceptions=True)
            await self._cleanup()

        if isinstance(pagespeed, PageSpeedDegraded):
            errors.append(f"Speed data unavailable: {pagespeed.error}")

        issues = issue_set.sorted()
        scores = aggregate_scores(
            seo_issues=issue_set.seo,
            trust_issues=issue_set.trust,
            ux_issues=issue_set.ux,
            pagespeed=pagespeed,
        )

        report = AnalysisReport(
            input=raw_input,
            final_url=fetched.final_url,
            http_status=fetched.status_code,
            platform=findings.platform,
            scores=scores,
            pagespeed=pagespeed,
            seo=findings.seo,
            trust=findings.trust,
            ux=findings.ux,
            signals=findings.signals,
            issues=issues,
            quick_wins=select_quick_wins(issues, self.settings.quick_wins_limit),
            errors=errors,
        )

        logger.info(
            "Audit completed",
            url=report.final_url,
            total=scores.total,
            issues=len(issues),
        )
        return report

    async def _fetch(self, url: str, errors: list[str]) -> FetchResult:
        """Fetch the page, degrading to empty markup on network errors."""
        try:
            return await self.fetcher.fetch(url)
        except FetchError as e:
            if self.settings.fetch_errors_fatal:
                raise
            errors.append(str(e))
            return FetchResult(html="", final_url=url, status_code=None)

    def _analyze(self, fetched: FetchResult) -> tuple[PageFindings, IssueSet]:
        """Extract findings and derive issues. Runs in a worker thread."""
        if not fetched.html:
            findings = PageFindings.empty()
        else:
            findings = extract_findings(fetched.html, lenient_trust=self.settings.lenient_trust_detection)
        return findings, self.issue_analyzer.analyze(findings)

    async def _cleanup(self) -> None:
        """Clean up resources."""
        await self.fetcher.stop()
        if self.pagespeed_client:
            await self.pagespeed_client.stop()


async def analyze_site(raw_input: str, settings: Settings | None = None) -> AnalysisReport:
    """Audit one page with a fresh orchestrator."""
    return await AuditOrchestrator(settings=settings).run(raw_input)
