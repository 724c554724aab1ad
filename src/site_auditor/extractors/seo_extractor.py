"""On-page SEO metadata extractor."""

from ..models import SeoFindings
from .base import BaseExtractor
from .document import PageDocument, normalize_whitespace


class SeoExtractor(BaseExtractor):
    """Extracts title, description, headings, canonical, robots and OpenGraph."""

    def extract(self, document: PageDocument) -> SeoFindings:
        soup = document.soup

        title_tag = soup.find("title")
        title = normalize_whitespace(title_tag.get_text()) if title_tag else ""

        h1_tags = soup.find_all("h1")
        h1_text = normalize_whitespace(h1_tags[0].get_text()) if h1_tags else ""

        canonical = ""
        for link in document.links_with_rel("canonical"):
            canonical = (link.get("href") or "").strip()
            if canonical:
                break

        return SeoFindings(
            title=title,
            meta_description=document.meta_content("description"),
            h1_count=len(h1_tags),
            h1_text=h1_text,
            canonical=canonical,
            robots=document.meta_content("robots"),
            og_title=document.meta_content("og:title"),
            og_description=document.meta_content("og:description"),
            og_image=document.meta_content("og:image"),
        )
