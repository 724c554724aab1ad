"""Data models for the site auditor."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

UNKNOWN_PLATFORM = "Unknown/Custom"


class Severity(Enum):
    """Issue severity, ordered from most to least urgent."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    @property
    def penalty(self) -> int:
        """Points subtracted from a dimension score per issue."""
        return _SEVERITY_PENALTY[self]


_SEVERITY_RANK = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.LOW: 3,
}

_SEVERITY_PENALTY = {
    Severity.CRITICAL: 25,
    Severity.HIGH: 15,
    Severity.MEDIUM: 8,
    Severity.LOW: 3,
}


@dataclass
class FetchResult:
    """Outcome of retrieving the audited page."""

    html: str
    final_url: str
    status_code: int | None = None
    content_type: str | None = None


@dataclass
class SeoFindings:
    """On-page SEO metadata."""

    title: str = ""
    meta_description: str = ""
    h1_count: int = 0
    h1_text: str = ""
    canonical: str = ""
    robots: str = ""
    og_title: str = ""
    og_description: str = ""
    og_image: str = ""

    @property
    def opengraph_complete(self) -> bool:
        return bool(self.og_title and self.og_description and self.og_image)


@dataclass
class TrustFindings:
    """Presence flags for policy and support pages."""

    contact: bool = False
    shipping: bool = False
    returns: bool = False
    privacy: bool = False
    terms: bool = False
    faq: bool = False


@dataclass
class UxFindings:
    """Call-to-action heuristic."""

    has_primary_cta: bool = False
    cta_texts: list[str] = field(default_factory=list)


@dataclass
class SignalFindings:
    """Secondary signals: structured data, tracking and PWA markers."""

    json_ld_blocks: int = 0
    json_ld_types: list[str] = field(default_factory=list)
    tracking: list[str] = field(default_factory=list)
    has_manifest: bool = False
    has_service_worker: bool = False

    @property
    def pwa_ready(self) -> bool:
        return self.has_manifest and self.has_service_worker


@dataclass
class PageFindings:
    """Everything the extractors found on one page."""

    platform: str = UNKNOWN_PLATFORM
    seo: SeoFindings = field(default_factory=SeoFindings)
    trust: TrustFindings = field(default_factory=TrustFindings)
    ux: UxFindings = field(default_factory=UxFindings)
    signals: SignalFindings = field(default_factory=SignalFindings)

    @classmethod
    def empty(cls) -> "PageFindings":
        """Findings for a page that could not be fetched."""
        return cls()


@dataclass(frozen=True)
class Issue:
    """An actionable finding with severity and remediation text."""

    key: str
    severity: Severity
    fix: str
    category: str

    def to_dict(self) -> dict:
        return {"key": self.key, "severity": self.severity.value, "fix": self.fix}


@dataclass
class PageSpeedScores:
    """Lighthouse category scores, 0-100."""

    performance: int | None = None
    seo: int | None = None
    best_practices: int | None = None
    accessibility: int | None = None


@dataclass
class PageSpeedMetrics:
    """Core Web Vitals and page weight statistics from the lab run."""

    lcp_ms: float | None = None
    cls: float | None = None
    inp_ms: float | None = None
    total_byte_weight: int | None = None
    request_count: int | None = None


@dataclass
class PageSpeedResult:
    """Normalized PageSpeed Insights outcome."""

    scores: PageSpeedScores = field(default_factory=PageSpeedScores)
    metrics: PageSpeedMetrics = field(default_factory=PageSpeedMetrics)
    strategy: str = "mobile"
    fetch_time: str | None = None


@dataclass(frozen=True)
class PageSpeedOk:
    """PageSpeed audit completed."""

    result: PageSpeedResult


@dataclass(frozen=True)
class PageSpeedDegraded:
    """PageSpeed audit unavailable; the report proceeds without it."""

    error: str


PageSpeedOutcome = PageSpeedOk | PageSpeedDegraded


@dataclass
class Scores:
    """Composite scores, each clamped to [0, 100]."""

    total: int
    seo: int
    ux: int
    trust: int
    performance: int | None = None


@dataclass
class AnalysisReport:
    """Complete audit report for one page."""

    input: str
    final_url: str
    http_status: int | None
    platform: str
    scores: Scores
    pagespeed: PageSpeedOutcome
    seo: SeoFindings
    trust: TrustFindings
    ux: UxFindings
    signals: SignalFindings
    issues: list[Issue] = field(default_factory=list)
    quick_wins: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    analyzed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        """Serialize to the JSON shape consumed by report viewers."""
        return {
            "input": self.input,
            "finalUrl": self.final_url,
            "httpStatus": self.http_status,
            "platform": self.platform,
            "scores": {
                "total": self.scores.total,
                "performance": self.scores.performance,
                "seo": self.scores.seo,
                "ux": self.scores.ux,
                "trust": self.scores.trust,
            },
            "pagespeed": _pagespeed_to_dict(self.pagespeed),
            "seo": {
                "title": self.seo.title,
                "metaDesc": self.seo.meta_description,
                "h1": self.seo.h1_text,
                "h1Count": self.seo.h1_count,
                "canonical": self.seo.canonical,
                "robots": self.seo.robots,
                "openGraph": {
                    "ogTitle": self.seo.og_title,
                    "ogDesc": self.seo.og_description,
                    "ogImage": self.seo.og_image,
                },
            },
            "trust": {
                "contact": self.trust.contact,
                "shipping": self.trust.shipping,
                "returns": self.trust.returns,
                "privacy": self.trust.privacy,
                "terms": self.trust.terms,
                "faq": self.trust.faq,
            },
            "ux": {
                "hasPrimaryCta": self.ux.has_primary_cta,
                "ctaTexts": self.ux.cta_texts,
            },
            "signals": {
                "jsonLdBlocks": self.signals.json_ld_blocks,
                "jsonLdTypes": self.signals.json_ld_types,
                "tracking": self.signals.tracking,
                "pwaReady": self.signals.pwa_ready,
            },
            "issues": [issue.to_dict() for issue in self.issues],
            "quickWins": self.quick_wins,
            "errors": self.errors,
            "analyzedAt": self.analyzed_at.isoformat(),
        }


def _pagespeed_to_dict(outcome: PageSpeedOutcome) -> dict:
    if isinstance(outcome, PageSpeedDegraded):
        return {
            "scores": {
                "performance": None,
                "seo": None,
                "bestPractices": None,
                "accessibility": None,
            },
            "metrics": {
                "lcpMs": None,
                "cls": None,
                "inpMs": None,
                "totalByteWeight": None,
                "requestCount": None,
            },
            "strategy": None,
            "fetchTime": None,
            "error": outcome.error,
        }

    result = outcome.result
    return {
        "scores": {
            "performance": result.scores.performance,
            "seo": result.scores.seo,
            "bestPractices": result.scores.best_practices,
            "accessibility": result.scores.accessibility,
        },
        "metrics": {
            "lcpMs": result.metrics.lcp_ms,
            "cls": result.metrics.cls,
            "inpMs": result.metrics.inp_ms,
            "totalByteWeight": result.metrics.total_byte_weight,
            "requestCount": result.metrics.request_count,
        },
        "strategy": result.strategy,
        "fetchTime": result.fetch_time,
    }
