"""Issue synthesis: turns extractor findings into prioritized issues."""

from dataclasses import dataclass, field
from typing import Callable

import structlog

from ..models import Issue, PageFindings, SeoFindings, Severity, TrustFindings, UxFindings

logger = structlog.get_logger()

TITLE_LENGTH_RANGE = (25, 65)
DESCRIPTION_LENGTH_RANGE = (70, 170)


@dataclass(frozen=True)
class Rule:
    """One check in the rule table."""

    key: str
    severity: Severity
    applies: Callable
    fix: Callable | str

    def evaluate(self, findings) -> Issue | None:
        if not self.applies(findings):
            return None
        fix = self.fix(findings) if callable(self.fix) else self.fix
        return Issue(key=self.key, severity=self.severity, fix=fix, category=self.key.split(".")[0])


def _out_of_range(text: str, bounds: tuple[int, int]) -> bool:
    return bool(text) and not bounds[0] <= len(text) <= bounds[1]


SEO_RULES: list[Rule] = [
    Rule(
        "seo.title.missing",
        Severity.HIGH,
        lambda seo: not seo.title,
        "Add a unique <title> to the page.",
    ),
    Rule(
        "seo.title.length",
        Severity.MEDIUM,
        lambda seo: _out_of_range(seo.title, TITLE_LENGTH_RANGE),
        lambda seo: (
            f"Rewrite the title to {TITLE_LENGTH_RANGE[0]}-{TITLE_LENGTH_RANGE[1]} characters "
            f"(currently {len(seo.title)})."
        ),
    ),
    Rule(
        "seo.metadesc.missing",
        Severity.HIGH,
        lambda seo: not seo.meta_description,
        "Add a meta description to improve click-through rate from search results.",
    ),
    Rule(
        "seo.metadesc.length",
        Severity.MEDIUM,
        lambda seo: _out_of_range(seo.meta_description, DESCRIPTION_LENGTH_RANGE),
        lambda seo: (
            f"Rewrite the meta description to {DESCRIPTION_LENGTH_RANGE[0]}-"
            f"{DESCRIPTION_LENGTH_RANGE[1]} characters (currently {len(seo.meta_description)})."
        ),
    ),
    Rule(
        "seo.h1.missing",
        Severity.HIGH,
        lambda seo: seo.h1_count == 0,
        "Add a clear H1 stating the value proposition.",
    ),
    Rule(
        "seo.h1.multiple",
        Severity.LOW,
        lambda seo: seo.h1_count > 1,
        lambda seo: f"Keep a single main H1 per page (found {seo.h1_count}).",
    ),
    Rule(
        "seo.canonical.missing",
        Severity.LOW,
        lambda seo: not seo.canonical,
        "Set a canonical URL to avoid duplicate content.",
    ),
    Rule(
        "seo.noindex",
        Severity.CRITICAL,
        lambda seo: "noindex" in seo.robots.lower(),
        "Remove noindex from the robots meta tag unless the page must stay out of search.",
    ),
    Rule(
        "seo.opengraph.incomplete",
        Severity.LOW,
        lambda seo: not seo.opengraph_complete,
        "Complete OpenGraph tags (og:title, og:description, og:image) for social previews.",
    ),
]

# FAQ presence is reported but has no rule.
TRUST_RULES: dict[str, tuple[Severity, str]] = {
    "contact": (Severity.HIGH, "Make contact and support details visible in the header or footer."),
    "shipping": (Severity.HIGH, "Add a shipping page and link it from the footer."),
    "returns": (Severity.HIGH, "Add a returns and exchanges page and link it near product CTAs."),
    "privacy": (Severity.MEDIUM, "Link the privacy and cookie policy from the footer."),
    "terms": (Severity.LOW, "Add terms and conditions and link them from the footer."),
}

UX_RULES: list[Rule] = [
    Rule(
        "ux.cta.unclear",
        Severity.MEDIUM,
        lambda ux: not ux.has_primary_cta,
        "Add a clear primary call to action above the fold (e.g. 'Shop the collection').",
    ),
]


def _trust_rules() -> list[Rule]:
    return [
        Rule(
            f"trust.{category}.missing",
            severity,
            lambda trust, category=category: not getattr(trust, category),
            fix,
        )
        for category, (severity, fix) in TRUST_RULES.items()
    ]


def sort_issues(issues: list[Issue]) -> list[Issue]:
    """Order by severity; ``sorted`` is stable so ties keep discovery order."""
    return sorted(issues, key=lambda issue: issue.severity.rank)


@dataclass
class IssueSet:
    """Issues grouped by dimension, each list in rule order."""

    seo: list[Issue] = field(default_factory=list)
    trust: list[Issue] = field(default_factory=list)
    ux: list[Issue] = field(default_factory=list)

    def sorted(self) -> list[Issue]:
        return sort_issues(self.seo + self.trust + self.ux)


class IssueAnalyzer:
    """Applies the rule table to page findings."""

    def __init__(self):
        self.seo_rules = SEO_RULES
        self.trust_rules = _trust_rules()
        self.ux_rules = UX_RULES

    @staticmethod
    def _apply(rules: list[Rule], findings) -> list[Issue]:
        issues = []
        for rule in rules:
            issue = rule.evaluate(findings)
            if issue is not None:
                issues.append(issue)
        return issues

    def analyze_seo(self, seo: SeoFindings) -> list[Issue]:
        return self._apply(self.seo_rules, seo)

    def analyze_trust(self, trust: TrustFindings) -> list[Issue]:
        return self._apply(self.trust_rules, trust)

    def analyze_ux(self, ux: UxFindings) -> list[Issue]:
        return self._apply(self.ux_rules, ux)

    def analyze(self, findings: PageFindings) -> IssueSet:
        """
        Evaluate every rule against the findings.

        Rules are independent; each produces at most one issue.

        Args:
            findings: Extractor output for one page.

        Returns:
            IssueSet with SEO, trust and UX issues kept apart for scoring.
        """
        issue_set = IssueSet(
            seo=self.analyze_seo(findings.seo),
            trust=self.analyze_trust(findings.trust),
            ux=self.analyze_ux(findings.ux),
        )
        logger.debug(
            "Issues synthesized",
            seo=len(issue_set.seo),
            trust=len(issue_set.trust),
            ux=len(issue_set.ux),
        )
        return issue_set
