"""Storage manager for audit reports."""

import json
from datetime import datetime
from pathlib import Path
from urllib.parse import urlparse

import aiofiles
import structlog

from ..config import settings
from ..models import AnalysisReport, PageSpeedDegraded

logger = structlog.get_logger()


class StorageManager:
    """Writes audit reports to disk, one folder per audit."""

    def __init__(self, base_url: str, reports_dir: Path | None = None):
        self.base_url = base_url
        self.domain = urlparse(base_url).netloc or base_url

        # Create a unique folder for each audit
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        folder_name = f"{self._sanitize_domain(self.domain)}_{timestamp}"

        self.reports_dir = (reports_dir or settings.reports_dir) / folder_name
        self.reports_dir.mkdir(parents=True, exist_ok=True)

    def _sanitize_domain(self, domain: str) -> str:
        """Convert domain to safe folder name."""
        return domain.replace(":", "_").replace("/", "_").replace(".", "_")

    def get_reports_dir(self) -> Path:
        """Get the reports directory path."""
        return self.reports_dir

    async def save_analysis_report(self, report: AnalysisReport) -> Path:
        """Save the report as JSON plus a plain-text summary."""
        filepath = self.reports_dir / "analysis_report.json"

        async with aiofiles.open(filepath, "w", encoding="utf-8") as f:
            await f.write(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))

        summary_path = self.reports_dir / "summary.txt"
        await self._save_human_readable_summary(report, summary_path)

        logger.info("Saved analysis report", path=str(filepath))
        return filepath

    async def _save_human_readable_summary(self, report: AnalysisReport, filepath: Path) -> None:
        """Save a human-readable summary of the audit."""
        scores = report.scores
        lines = [
            "=" * 80,
            "SITE AUDIT REPORT",
            "=" * 80,
            "",
            f"Input: {report.input}",
            f"Final URL: {report.final_url}",
            f"HTTP Status: {report.http_status if report.http_status is not None else 'n/a'}",
            f"Platform: {report.platform}",
            f"Analyzed At: {report.analyzed_at.isoformat()}",
            "",
            "SCORES",
            "-" * 40,
            f"Total: {scores.total}",
            f"Performance: {scores.performance if scores.performance is not None else 'n/a'}",
            f"SEO: {scores.seo}",
            f"UX: {scores.ux}",
            f"Trust: {scores.trust}",
            "",
        ]

        if isinstance(report.pagespeed, PageSpeedDegraded):
            lines.extend([f"PageSpeed: unavailable ({report.pagespeed.error})", ""])

        if report.quick_wins:
            lines.extend(["QUICK WINS", "-" * 40])
            for i, fix in enumerate(report.quick_wins, 1):
                lines.append(f"{i}. {fix}")
            lines.append("")

        if report.issues:
            lines.extend(["ISSUES", "-" * 40])
            for issue in report.issues:
                lines.append(f"[{issue.severity.value.upper()}] {issue.key}: {issue.fix}")
            lines.append("")

        if report.errors:
            lines.extend(["ERRORS", "-" * 40])
            lines.extend(f"- {error}" for error in report.errors)
            lines.append("")

        async with aiofiles.open(filepath, "w", encoding="utf-8") as f:
            await f.write("\n".join(lines))
