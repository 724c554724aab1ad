"""Call-to-action detection."""

from ..models import UxFindings
from .base import BaseExtractor
from .document import PageDocument, attr_tokens, normalize_whitespace
from .keywords import CTA_KEYWORDS

MAX_CTA_TEXTS = 10


class UxExtractor(BaseExtractor):
    """Looks for a primary call to action among links and buttons."""

    def __init__(self, keywords: tuple[str, ...] | None = None):
        self.keywords = keywords or CTA_KEYWORDS

    def _labels(self, document: PageDocument) -> list[str]:
        labels = [normalize_whitespace(el.get_text()) for el in document.soup.find_all(["a", "button"])]
        for field in document.soup.find_all("input"):
            if set(attr_tokens(field, "type")) & {"submit", "button"}:
                labels.append(normalize_whitespace(field.get("value")))
        return [label for label in labels if label]

    def extract(self, document: PageDocument) -> UxFindings:
        matches: list[str] = []
        for label in self._labels(document):
            if self._contains_any(label.lower(), self.keywords) and label not in matches:
                matches.append(label)

        return UxFindings(has_primary_cta=bool(matches), cta_texts=matches[:MAX_CTA_TEXTS])
