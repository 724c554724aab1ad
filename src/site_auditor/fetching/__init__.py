"""Fetching module: URL normalization and page retrieval."""

from .fetcher import MarkupFetcher
from .urls import normalize_url

__all__ = ["MarkupFetcher", "normalize_url"]
