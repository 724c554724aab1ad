"""Base extractor interface."""

from abc import ABC, abstractmethod
from typing import Any

from .document import PageDocument


class BaseExtractor(ABC):
    """Abstract base class for all extractors."""

    @abstractmethod
    def extract(self, document: PageDocument) -> Any:
        """
        Extract one group of findings from a parsed page.

        Args:
            document: The parsed page.

        Returns:
            The findings for this extractor. Missing tags produce empty or
            false values, never an exception.
        """
        pass

    @staticmethod
    def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
        return any(keyword in text for keyword in keywords)
