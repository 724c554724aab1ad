"""Tests for data models and settings."""

from site_auditor.config import Settings
from site_auditor.models import (
    PageFindings,
    PageSpeedOk,
    PageSpeedResult,
    SeoFindings,
    Severity,
    SignalFindings,
    UNKNOWN_PLATFORM,
)


class TestSeverity:
    """Test cases for Severity."""

    def test_ordering(self):
        ranks = [s.rank for s in (Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW)]
        assert ranks == [0, 1, 2, 3]

    def test_penalties(self):
        assert [s.penalty for s in Severity] == [25, 15, 8, 3]

    def test_values(self):
        assert Severity("medium") is Severity.MEDIUM


class TestFindings:
    """Test cases for findings containers."""

    def test_empty_findings(self):
        findings = PageFindings.empty()

        assert findings.platform == UNKNOWN_PLATFORM
        assert findings.seo.h1_count == 0
        assert not findings.trust.contact
        assert not findings.ux.has_primary_cta
        assert findings.signals.json_ld_types == []

    def test_opengraph_complete(self):
        assert not SeoFindings(og_title="a", og_image="c").opengraph_complete
        assert SeoFindings(og_title="a", og_description="b", og_image="c").opengraph_complete

    def test_pwa_ready(self):
        assert not SignalFindings(has_manifest=True).pwa_ready
        assert SignalFindings(has_manifest=True, has_service_worker=True).pwa_ready

    def test_pagespeed_ok_defaults(self):
        outcome = PageSpeedOk(PageSpeedResult())

        assert outcome.result.strategy == "mobile"
        assert outcome.result.scores.performance is None


class TestSettings:
    """Test cases for Settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PAGESPEED_API_KEY", raising=False)
        monkeypatch.delenv("AUDITOR_PAGESPEED_API_KEY", raising=False)
        config = Settings(_env_file=None)

        assert config.pagespeed_api_key is None
        assert config.pagespeed_enabled is True
        assert config.quick_wins_limit == 7
        assert config.user_agent.startswith("SiteAuditorBot/")

    def test_api_key_from_plain_env(self, monkeypatch):
        monkeypatch.delenv("AUDITOR_PAGESPEED_API_KEY", raising=False)
        monkeypatch.setenv("PAGESPEED_API_KEY", "abc123")

        assert Settings(_env_file=None).pagespeed_api_key == "abc123"

    def test_prefixed_env(self, monkeypatch):
        monkeypatch.setenv("AUDITOR_FETCH_TIMEOUT", "5")
        monkeypatch.setenv("AUDITOR_LENIENT_TRUST_DETECTION", "true")
        config = Settings(_env_file=None)

        assert config.fetch_timeout == 5.0
        assert config.lenient_trust_detection is True
