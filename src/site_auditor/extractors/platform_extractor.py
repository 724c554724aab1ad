"""Platform fingerprinting."""

from ..models import UNKNOWN_PLATFORM
from .base import BaseExtractor
from .document import PageDocument
from .keywords import PLATFORM_FINGERPRINTS


class PlatformExtractor(BaseExtractor):
    """Guesses the site platform from markers in the raw markup."""

    def __init__(self, fingerprints: list[tuple[str, tuple[str, ...]]] | None = None):
        self.fingerprints = fingerprints or PLATFORM_FINGERPRINTS

    def extract(self, document: PageDocument) -> str:
        for platform, markers in self.fingerprints:
            if self._contains_any(document.lowered, markers):
                return platform
        return UNKNOWN_PLATFORM
