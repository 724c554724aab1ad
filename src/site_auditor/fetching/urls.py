"""URL validation and canonicalization."""

import ipaddress
import re
from urllib.parse import urlsplit, urlunsplit

from ..errors import ValidationError

INVALID_URL_MESSAGE = "invalid URL, example: https://example.com"
HOST_NOT_ALLOWED_MESSAGE = "host not allowed"

# Local services must never be reachable through the fetcher
BLOCKED_HOSTS = {"localhost", "127.0.0.1", "0.0.0.0", "::1"}

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_HOSTNAME_RE = re.compile(r"^[a-z0-9_]([a-z0-9_-]*[a-z0-9_])?(\.[a-z0-9_]([a-z0-9_-]*[a-z0-9_])?)*\.?$")


def is_blocked_host(host: str) -> bool:
    """Whether ``host`` is a local address the fetcher must not reach."""
    host = host.lower().strip("[]")
    if host in BLOCKED_HOSTS:
        return True
    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        return False
    return ip.is_loopback or ip.is_link_local or ip.is_unspecified


def _canonical_host(hostname: str) -> str:
    """Lowercase and IDNA-encode a hostname, rejecting illegal characters."""
    if ":" in hostname:
        # IPv6 literal
        try:
            return str(ipaddress.IPv6Address(hostname))
        except ValueError:
            raise ValidationError(INVALID_URL_MESSAGE) from None

    try:
        host = hostname.encode("idna").decode("ascii").lower()
    except UnicodeError:
        raise ValidationError(INVALID_URL_MESSAGE) from None

    if not _HOSTNAME_RE.match(host):
        raise ValidationError(INVALID_URL_MESSAGE)
    return host


def normalize_url(raw: str) -> str:
    """
    Validate user input and return a canonical absolute URL.

    Inputs without a scheme get ``https://``. The result has a lowercase
    scheme and host, a non-empty path and no fragment, so normalizing twice
    yields the same string.

    Raises:
        ValidationError: on empty input, unparsable URLs or local hosts.
    """
    candidate = (raw or "").strip()
    if not candidate:
        raise ValidationError("URL is required")

    if not _SCHEME_RE.match(candidate):
        candidate = f"https://{candidate}"

    try:
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError:
        raise ValidationError(INVALID_URL_MESSAGE) from None

    if not parts.hostname:
        raise ValidationError(INVALID_URL_MESSAGE)

    host = _canonical_host(parts.hostname)
    if is_blocked_host(host):
        raise ValidationError(HOST_NOT_ALLOWED_MESSAGE)

    netloc = f"[{host}]" if ":" in host else host
    if port is not None:
        netloc = f"{netloc}:{port}"
    if parts.username:
        userinfo = parts.username
        if parts.password:
            userinfo = f"{userinfo}:{parts.password}"
        netloc = f"{userinfo}@{netloc}"

    return urlunsplit((parts.scheme.lower(), netloc, parts.path or "/", parts.query, ""))
