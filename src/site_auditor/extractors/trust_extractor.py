"""Trust page detection."""

from dataclasses import fields

from ..models import TrustFindings
from .base import BaseExtractor
from .document import PageDocument, normalize_whitespace
from .keywords import TRUST_KEYWORDS


class TrustExtractor(BaseExtractor):
    """
    Detects links to policy and support pages.

    A category is present when any anchor's href or label contains one of
    its keywords. In lenient mode the visible page text counts too, which
    catches footers that name the policies without linking them.
    """

    def __init__(self, lenient: bool = False, keywords: dict[str, tuple[str, ...]] | None = None):
        self.lenient = lenient
        self.keywords = keywords or TRUST_KEYWORDS

    def _anchor_texts(self, document: PageDocument) -> list[str]:
        texts = []
        for anchor in document.soup.find_all("a", href=True):
            href = anchor["href"].strip().lower()
            if not href:
                continue
            texts.append(href)
            texts.append(normalize_whitespace(anchor.get_text()).lower())
        return texts

    def extract(self, document: PageDocument) -> TrustFindings:
        haystacks = self._anchor_texts(document)
        if self.lenient:
            haystacks.append(document.visible_text)

        flags = {}
        for category in fields(TrustFindings):
            keywords = self.keywords.get(category.name, ())
            flags[category.name] = any(self._contains_any(text, keywords) for text in haystacks)
        return TrustFindings(**flags)
