"""Analyzers module for turning findings into issues and scores."""

from .issue_analyzer import IssueAnalyzer, IssueSet, sort_issues
from .scoring import aggregate_scores, penalty_score, select_quick_wins, weighted_total

__all__ = [
    "IssueAnalyzer",
    "IssueSet",
    "aggregate_scores",
    "penalty_score",
    "select_quick_wins",
    "sort_issues",
    "weighted_total",
]
