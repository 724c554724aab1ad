"""Single-page website auditor: SEO, trust pages, UX heuristics and PageSpeed."""

__version__ = "0.3.0"
