"""Parsed HTML document shared by all extractors."""

from functools import cached_property

import structlog
from bs4 import BeautifulSoup, Comment, Tag
from bs4.builder import ParserRejectedMarkup

logger = structlog.get_logger()

_INVISIBLE_TAGS = {"script", "style", "noscript", "template"}


def normalize_whitespace(text: str | None) -> str:
    """Collapse runs of whitespace into single spaces."""
    return " ".join((text or "").split())


def attr_tokens(tag: Tag, name: str) -> list[str]:
    """Return a (possibly multi-valued) attribute as lowercase tokens."""
    value = tag.get(name)
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split()
    return [token.lower() for token in value]


class PageDocument:
    """
    HTML parsed once into a tag tree.

    Parsing uses the stdlib-backed ``html.parser`` builder, which tolerates
    unclosed and misnested tags. Markup the parser rejects outright yields an
    empty document instead of an error.
    """

    def __init__(self, html: str):
        self.html = html or ""
        try:
            self.soup = BeautifulSoup(self.html, "html.parser")
        except ParserRejectedMarkup as e:
            logger.debug("Markup rejected by parser", error=str(e))
            self.soup = BeautifulSoup("", "html.parser")

    @cached_property
    def lowered(self) -> str:
        """Raw markup, lowercased, for substring fingerprints."""
        return self.html.lower()

    @cached_property
    def visible_text(self) -> str:
        """Lowercased text outside scripts, styles and comments."""
        parts = []
        for string in self.soup.find_all(string=True):
            if isinstance(string, Comment):
                continue
            if string.parent is not None and string.parent.name in _INVISIBLE_TAGS:
                continue
            parts.append(string)
        return normalize_whitespace(" ".join(parts)).lower()

    def meta_content(self, key: str) -> str:
        """Content of the first ``<meta>`` whose name or property equals ``key``."""
        key = key.lower()
        for meta in self.soup.find_all("meta"):
            names = {(meta.get(attr) or "").strip().lower() for attr in ("name", "property")}
            if key in names:
                return normalize_whitespace(meta.get("content"))
        return ""

    def links_with_rel(self, rel: str) -> list[Tag]:
        """All ``<link>`` tags whose rel attribute contains ``rel``."""
        return [link for link in self.soup.find_all("link") if rel in attr_tokens(link, "rel")]
