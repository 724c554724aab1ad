"""Tests for URL normalization."""

import pytest

from site_auditor.errors import ValidationError
from site_auditor.fetching import normalize_url


class TestNormalizeUrl:
    """Test cases for normalize_url."""

    def test_prepends_https(self):
        """Test that bare domains get an https scheme."""
        assert normalize_url("example.com") == "https://example.com/"
        assert normalize_url("shop.example.com/products?id=1") == "https://shop.example.com/products?id=1"

    def test_keeps_existing_scheme(self):
        """Test that http and https inputs keep their scheme."""
        assert normalize_url("http://example.com/about") == "http://example.com/about"
        assert normalize_url("HTTPS://Example.COM") == "https://example.com/"

    def test_trims_whitespace(self):
        assert normalize_url("  example.com \n") == "https://example.com/"

    @pytest.mark.parametrize(
        "raw",
        ["example.com", "https://Example.com/a?b=c#frag", "http://example.com:8080/x", "bücher.de"],
    )
    def test_idempotent(self, raw):
        """Test that normalizing twice changes nothing."""
        once = normalize_url(raw)
        assert normalize_url(once) == once

    def test_drops_fragment(self):
        assert normalize_url("https://example.com/page#top") == "https://example.com/page"

    def test_encodes_international_domains(self):
        assert normalize_url("bücher.de") == "https://xn--bcher-kva.de/"

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_empty_input(self, raw):
        with pytest.raises(ValidationError):
            normalize_url(raw)

    @pytest.mark.parametrize(
        "raw",
        ["https://", "exa mple.com", "https://example.com:99999", "https://foo..com", "http://[zz::1]/"],
    )
    def test_invalid_url(self, raw):
        """Test that unparsable inputs are rejected with an example."""
        with pytest.raises(ValidationError, match="example: https://example.com"):
            normalize_url(raw)

    @pytest.mark.parametrize(
        "raw",
        [
            "localhost",
            "http://localhost:3000/admin",
            "127.0.0.1",
            "https://127.0.0.1/?q=1",
            "0.0.0.0/health",
            "http://[::1]/",
            "169.254.169.254/latest/meta-data",
        ],
    )
    def test_disallowed_hosts(self, raw):
        """Test that local hosts are rejected regardless of path or query."""
        with pytest.raises(ValidationError, match="host not allowed"):
            normalize_url(raw)
