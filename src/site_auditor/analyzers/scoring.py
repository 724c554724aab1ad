"""Score aggregation and quick-win selection."""

import math

from ..models import Issue, PageSpeedDegraded, PageSpeedOk, PageSpeedOutcome, Scores, Severity

# Weights when PageSpeed data is available
WEIGHTS_WITH_PERFORMANCE = {"performance": 0.35, "ux": 0.30, "seo": 0.20, "trust": 0.15}
# Performance's share redistributed when PageSpeed is unavailable
WEIGHTS_WITHOUT_PERFORMANCE = {"seo": 0.40, "ux": 0.35, "trust": 0.25}

QUICK_WIN_SEVERITIES = {Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM}
DEFAULT_QUICK_WINS_LIMIT = 7


def clamp(value: float, low: int = 0, high: int = 100) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def penalty_score(issues: list[Issue]) -> int:
    """100 minus the severity penalty of every issue, clamped to [0, 100]."""
    return int(clamp(100 - sum(issue.severity.penalty for issue in issues)))


def weighted_total(seo: int, ux: int, trust: int, performance: int | None = None) -> int:
    if performance is not None:
        values = {"performance": performance, "ux": ux, "seo": seo, "trust": trust}
        weights = WEIGHTS_WITH_PERFORMANCE
    else:
        values = {"seo": seo, "ux": ux, "trust": trust}
        weights = WEIGHTS_WITHOUT_PERFORMANCE

    total = sum(weights[name] * values[name] for name in weights)
    return int(clamp(round_half_up(total)))


def aggregate_scores(
    seo_issues: list[Issue],
    trust_issues: list[Issue],
    ux_issues: list[Issue],
    pagespeed: PageSpeedOutcome,
) -> Scores:
    """
    Combine per-dimension scores into the weighted total.

    The SEO score comes from Lighthouse when the PageSpeed run produced one,
    otherwise from the penalty formula over the SEO issues.
    """
    performance = None
    lighthouse_seo = None
    if isinstance(pagespeed, PageSpeedOk):
        performance = pagespeed.result.scores.performance
        lighthouse_seo = pagespeed.result.scores.seo
    elif not isinstance(pagespeed, PageSpeedDegraded):
        raise TypeError(f"Unexpected PageSpeed outcome: {pagespeed!r}")

    seo = int(clamp(lighthouse_seo)) if lighthouse_seo is not None else penalty_score(seo_issues)
    ux = penalty_score(ux_issues)
    trust = penalty_score(trust_issues)
    if performance is not None:
        performance = int(clamp(performance))

    return Scores(
        total=weighted_total(seo=seo, ux=ux, trust=trust, performance=performance),
        seo=seo,
        ux=ux,
        trust=trust,
        performance=performance,
    )


def select_quick_wins(issues: list[Issue], limit: int = DEFAULT_QUICK_WINS_LIMIT) -> list[str]:
    """Remediation text of the most urgent non-low issues, in the given order."""
    return [issue.fix for issue in issues if issue.severity in QUICK_WIN_SEVERITIES][:limit]
