"""Lookup tables for the heuristic extractors.

Everything here is lowercase and matched by substring. Adding a category,
vendor or locale only means adding an entry.
"""

# First match wins, so more specific fingerprints come first.
PLATFORM_FINGERPRINTS: list[tuple[str, tuple[str, ...]]] = [
    ("Shopify", ("cdn.shopify.com", "x-shopify", "shopify.theme")),
    ("WooCommerce/WordPress", ("woocommerce", "wp-content")),
    ("Magento", ("magento", "mage/cookies")),
    ("PrestaShop", ("prestashop",)),
    ("BigCommerce", ("bigcommerce",)),
    ("Wix", ("static.wixstatic.com", "wix-warmup-data")),
    ("Squarespace", ("static1.squarespace.com", "squarespace-cdn")),
]

# Italian stems first, English equivalents after.
TRUST_KEYWORDS: dict[str, tuple[str, ...]] = {
    "contact": ("contatt", "assistenza", "contact", "support", "help"),
    "shipping": ("sped", "consegna", "shipping", "delivery"),
    "returns": ("reso", "resi", "cambi", "return", "refund"),
    "privacy": ("privacy", "gdpr", "cookie"),
    "terms": ("termini", "condizioni", "terms", "conditions"),
    "faq": ("faq", "domande", "questions"),
}

CTA_KEYWORDS: tuple[str, ...] = (
    "acquista",
    "compra",
    "scopri",
    "aggiungi",
    "shop",
    "buy",
    "add to cart",
    "discover",
    "order now",
    "get started",
)

TRACKING_MARKERS: list[tuple[str, tuple[str, ...]]] = [
    ("Google Analytics", ("google-analytics.com", "googletagmanager.com/gtag/js", "gtag(")),
    ("Google Tag Manager", ("googletagmanager.com/gtm.js", "googletagmanager.com/ns.html")),
    ("Meta Pixel", ("connect.facebook.net", "fbq(")),
    ("TikTok Pixel", ("analytics.tiktok.com", "ttq.load")),
    ("Hotjar", ("static.hotjar.com",)),
    ("Microsoft Clarity", ("clarity.ms",)),
    ("LinkedIn Insight", ("snap.licdn.com",)),
    ("Pinterest Tag", ("s.pinimg.com/ct/", "pintrk(")),
]

PWA_ICON_RELS: tuple[str, ...] = ("manifest", "apple-touch-icon")

SERVICE_WORKER_MARKERS: tuple[str, ...] = ("serviceworker.register",)
