"""Structured data, tracking and PWA markers."""

import json
from typing import Any

import structlog

from ..models import SignalFindings
from .base import BaseExtractor
from .document import PageDocument, attr_tokens
from .keywords import PWA_ICON_RELS, SERVICE_WORKER_MARKERS, TRACKING_MARKERS

logger = structlog.get_logger()

MAX_JSON_LD_TYPES = 20


def collect_json_ld_types(node: Any, found: list[str], limit: int = MAX_JSON_LD_TYPES) -> None:
    """
    Walk parsed JSON-LD and append every ``@type`` value not seen yet.

    The walk is depth-first in document order and stops as soon as ``found``
    holds ``limit`` types.
    """
    seen = set(found)
    stack = [node]
    while stack and len(found) < limit:
        current = stack.pop()
        if isinstance(current, dict):
            declared = current.get("@type")
            if isinstance(declared, str):
                declared = [declared]
            if isinstance(declared, list):
                for value in declared:
                    if isinstance(value, str) and value and value not in seen:
                        seen.add(value)
                        found.append(value)
                        if len(found) >= limit:
                            return
            stack.extend(reversed(list(current.values())))
        elif isinstance(current, list):
            stack.extend(reversed(current))


class SignalsExtractor(BaseExtractor):
    """Detects JSON-LD blocks, analytics tags and PWA eligibility."""

    def _json_ld(self, document: PageDocument) -> tuple[int, list[str]]:
        blocks = 0
        types: list[str] = []

        for script in document.soup.find_all("script"):
            if (script.get("type") or "").strip().lower() != "application/ld+json":
                continue
            raw = script.string or script.get_text()
            try:
                data = json.loads(raw)
            except (ValueError, RecursionError) as e:
                logger.debug("Skipping malformed JSON-LD block", error=str(e))
                continue
            blocks += 1
            if len(types) < MAX_JSON_LD_TYPES:
                collect_json_ld_types(data, types)

        return blocks, types

    def _tracking(self, document: PageDocument) -> list[str]:
        return [
            vendor
            for vendor, markers in TRACKING_MARKERS
            if self._contains_any(document.lowered, markers)
        ]

    def extract(self, document: PageDocument) -> SignalFindings:
        blocks, types = self._json_ld(document)

        has_manifest = any(
            set(attr_tokens(link, "rel")) & set(PWA_ICON_RELS)
            for link in document.soup.find_all("link")
        )

        return SignalFindings(
            json_ld_blocks=blocks,
            json_ld_types=types,
            tracking=self._tracking(document),
            has_manifest=has_manifest,
            has_service_worker=self._contains_any(document.lowered, SERVICE_WORKER_MARKERS),
        )
