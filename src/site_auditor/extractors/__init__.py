"""Extractors module for heuristic analysis of fetched markup."""

from ..models import PageFindings
from .base import BaseExtractor
from .document import PageDocument
from .platform_extractor import PlatformExtractor
from .seo_extractor import SeoExtractor
from .signals_extractor import SignalsExtractor
from .trust_extractor import TrustExtractor
from .ux_extractor import UxExtractor


def extract_findings(html: str, lenient_trust: bool = False) -> PageFindings:
    """Parse markup once and run every extractor over it."""
    document = PageDocument(html)
    return PageFindings(
        platform=PlatformExtractor().extract(document),
        seo=SeoExtractor().extract(document),
        trust=TrustExtractor(lenient=lenient_trust).extract(document),
        ux=UxExtractor().extract(document),
        signals=SignalsExtractor().extract(document),
    )


__all__ = [
    "BaseExtractor",
    "PageDocument",
    "PlatformExtractor",
    "SeoExtractor",
    "SignalsExtractor",
    "TrustExtractor",
    "UxExtractor",
    "extract_findings",
]
