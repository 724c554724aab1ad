"""PageSpeed Insights integration."""

from .client import PageSpeedClient, parse_pagespeed_response

__all__ = ["PageSpeedClient", "parse_pagespeed_response"]
