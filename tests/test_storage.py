"""Tests for report storage."""

import json

import pytest

from site_auditor.models import (
    AnalysisReport,
    Issue,
    PageSpeedDegraded,
    Scores,
    SeoFindings,
    Severity,
    SignalFindings,
    TrustFindings,
    UxFindings,
)
from site_auditor.storage import StorageManager


@pytest.fixture
def report():
    issue = Issue("seo.h1.missing", Severity.HIGH, "Add a clear H1 stating the value proposition.", "seo")
    return AnalysisReport(
        input="example.com",
        final_url="https://example.com/",
        http_status=200,
        platform="Shopify",
        scores=Scores(total=70, seo=85, ux=100, trust=100),
        pagespeed=PageSpeedDegraded(error="PageSpeed API error (HTTP 429): Quota exceeded"),
        seo=SeoFindings(title="Example shop"),
        trust=TrustFindings(contact=True),
        ux=UxFindings(has_primary_cta=True, cta_texts=["Shop now"]),
        signals=SignalFindings(),
        issues=[issue],
        quick_wins=[issue.fix],
    )


class TestStorageManager:
    """Test cases for StorageManager."""

    def test_creates_folder_per_domain(self, tmp_path):
        storage = StorageManager("https://shop.example.com/", tmp_path)

        assert storage.get_reports_dir().exists()
        assert storage.get_reports_dir().name.startswith("shop_example_com_")

    @pytest.mark.asyncio
    async def test_save_report(self, tmp_path, report):
        storage = StorageManager(report.final_url, tmp_path)
        path = await storage.save_analysis_report(report)

        saved = json.loads(path.read_text(encoding="utf-8"))
        assert saved == report.to_dict()

        summary = (storage.get_reports_dir() / "summary.txt").read_text(encoding="utf-8")
        assert "Total: 70" in summary
        assert "Performance: n/a" in summary
        assert "[HIGH] seo.h1.missing" in summary
        assert "Quota exceeded" in summary
