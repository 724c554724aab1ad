"""Shared fixtures: sample pages and canned PageSpeed payloads."""

import pytest

GOOD_TITLE = "T" * 45
GOOD_DESCRIPTION = "D" * 120


@pytest.fixture
def bare_html():
    """Empty title, no description, one H1, nothing else."""
    return """
    <html>
        <head><title></title></head>
        <body><h1>Welcome</h1><p>Hello there.</p></body>
    </html>
    """


@pytest.fixture
def complete_html():
    """A page that passes every rule."""
    return f"""
    <html>
        <head>
            <title>{GOOD_TITLE}</title>
            <meta name="description" content="{GOOD_DESCRIPTION}">
            <link rel="canonical" href="https://shop.example.com/">
            <meta property="og:title" content="Shop">
            <meta property="og:description" content="Handmade goods">
            <meta property="og:image" content="https://shop.example.com/og.png">
        </head>
        <body>
            <h1>Handmade leather goods</h1>
            <a href="/collections/all">Shop now</a>
            <footer>
                <a href="/pages/contact">Contact us</a>
                <a href="/policies/shipping-policy">Shipping</a>
                <a href="/policies/refund-policy">Returns</a>
                <a href="/policies/privacy-policy">Privacy</a>
                <a href="/policies/terms-of-service">Terms of service</a>
                <a href="/pages/faq">FAQ</a>
            </footer>
        </body>
    </html>
    """


@pytest.fixture
def pagespeed_payload():
    return {
        "lighthouseResult": {
            "fetchTime": "2026-10-18T10:00:00.000Z",
            "categories": {
                "performance": {"score": 0.8},
                "seo": {"score": 0.9},
                "best-practices": {"score": 0.96},
                "accessibility": {"score": 0.874},
            },
            "audits": {
                "largest-contentful-paint": {"numericValue": 2512.7},
                "cumulative-layout-shift": {"numericValue": 0.0312345},
                "interaction-to-next-paint": {"numericValue": 180.2},
                "total-byte-weight": {"numericValue": 1048576},
                "network-requests": {"details": {"items": [{}, {}, {}]}},
            },
        }
    }
