"""Tests for issue synthesis."""

import pytest

from site_auditor.analyzers import IssueAnalyzer, sort_issues
from site_auditor.extractors import extract_findings
from site_auditor.models import (
    Issue,
    PageFindings,
    SeoFindings,
    Severity,
    TrustFindings,
    UxFindings,
)


def _keys(issues):
    return [issue.key for issue in issues]


class TestSeoRules:
    """Test cases for the SEO rule table."""

    def test_title_missing_skips_length_rule(self):
        issues = IssueAnalyzer().analyze_seo(SeoFindings(title=""))

        assert "seo.title.missing" in _keys(issues)
        assert "seo.title.length" not in _keys(issues)

    @pytest.mark.parametrize("length,flagged", [(24, True), (25, False), (65, False), (66, True)])
    def test_title_length_bounds(self, length, flagged):
        issues = IssueAnalyzer().analyze_seo(SeoFindings(title="x" * length))
        assert ("seo.title.length" in _keys(issues)) is flagged

    @pytest.mark.parametrize("length,flagged", [(69, True), (70, False), (170, False), (171, True)])
    def test_description_length_bounds(self, length, flagged):
        issues = IssueAnalyzer().analyze_seo(SeoFindings(meta_description="x" * length))
        assert ("seo.metadesc.length" in _keys(issues)) is flagged

    def test_length_fix_mentions_current_length(self):
        issues = IssueAnalyzer().analyze_seo(SeoFindings(title="Short"))
        length_issue = next(i for i in issues if i.key == "seo.title.length")

        assert length_issue.severity is Severity.MEDIUM
        assert "currently 5" in length_issue.fix

    def test_h1_rules(self):
        missing = IssueAnalyzer().analyze_seo(SeoFindings(h1_count=0))
        multiple = IssueAnalyzer().analyze_seo(SeoFindings(h1_count=3))

        assert "seo.h1.missing" in _keys(missing)
        assert "seo.h1.multiple" not in _keys(missing)
        assert "seo.h1.multiple" in _keys(multiple)
        assert "seo.h1.missing" not in _keys(multiple)

    def test_noindex_is_critical(self):
        issues = IssueAnalyzer().analyze_seo(SeoFindings(robots="NoIndex, nofollow"))
        noindex = next(i for i in issues if i.key == "seo.noindex")
        assert noindex.severity is Severity.CRITICAL

    def test_partial_opengraph(self):
        issues = IssueAnalyzer().analyze_seo(SeoFindings(og_title="a", og_description="b"))
        assert "seo.opengraph.incomplete" in _keys(issues)


class TestTrustAndUxRules:
    """Test cases for trust and UX rules."""

    def test_trust_severities(self):
        issues = IssueAnalyzer().analyze_trust(TrustFindings())
        severities = {issue.key: issue.severity for issue in issues}

        assert severities == {
            "trust.contact.missing": Severity.HIGH,
            "trust.shipping.missing": Severity.HIGH,
            "trust.returns.missing": Severity.HIGH,
            "trust.privacy.missing": Severity.MEDIUM,
            "trust.terms.missing": Severity.LOW,
        }

    def test_faq_has_no_rule(self):
        issues = IssueAnalyzer().analyze_trust(TrustFindings(faq=False))
        assert "trust.faq.missing" not in _keys(issues)

    def test_present_pages_produce_no_issues(self):
        trust = TrustFindings(contact=True, shipping=True, returns=True, privacy=True, terms=True, faq=True)
        assert IssueAnalyzer().analyze_trust(trust) == []

    def test_cta_rule(self):
        assert _keys(IssueAnalyzer().analyze_ux(UxFindings())) == ["ux.cta.unclear"]
        assert IssueAnalyzer().analyze_ux(UxFindings(has_primary_cta=True)) == []


class TestIssueAnalyzer:
    """Test cases for the full rule table over page findings."""

    def test_bare_page(self, bare_html):
        issue_set = IssueAnalyzer().analyze(extract_findings(bare_html))

        assert _keys(issue_set.seo) == [
            "seo.title.missing",
            "seo.metadesc.missing",
            "seo.canonical.missing",
            "seo.opengraph.incomplete",
        ]
        assert _keys(issue_set.trust) == [
            "trust.contact.missing",
            "trust.shipping.missing",
            "trust.returns.missing",
            "trust.privacy.missing",
            "trust.terms.missing",
        ]
        assert _keys(issue_set.ux) == ["ux.cta.unclear"]

    def test_complete_page_has_no_issues(self, complete_html):
        issue_set = IssueAnalyzer().analyze(extract_findings(complete_html))
        assert issue_set.sorted() == []

    def test_sorted_by_severity_then_discovery(self, bare_html):
        issues = IssueAnalyzer().analyze(extract_findings(bare_html)).sorted()

        assert _keys(issues) == [
            "seo.title.missing",
            "seo.metadesc.missing",
            "trust.contact.missing",
            "trust.shipping.missing",
            "trust.returns.missing",
            "trust.privacy.missing",
            "ux.cta.unclear",
            "seo.canonical.missing",
            "seo.opengraph.incomplete",
            "trust.terms.missing",
        ]
        ranks = [issue.severity.rank for issue in issues]
        assert ranks == sorted(ranks)

    def test_empty_findings(self):
        """Test that an unfetched page still evaluates every rule."""
        issue_set = IssueAnalyzer().analyze(PageFindings.empty())

        assert "seo.h1.missing" in _keys(issue_set.seo)
        assert len(issue_set.trust) == 5
        assert len(issue_set.ux) == 1


class TestSortIssues:
    """Test cases for sort_issues."""

    def test_stable_for_ties(self):
        issues = [
            Issue("b.low", Severity.LOW, "fix b", "seo"),
            Issue("a.high", Severity.HIGH, "fix a", "seo"),
            Issue("c.low", Severity.LOW, "fix c", "trust"),
            Issue("d.critical", Severity.CRITICAL, "fix d", "seo"),
        ]
        assert _keys(sort_issues(issues)) == ["d.critical", "a.high", "b.low", "c.low"]
