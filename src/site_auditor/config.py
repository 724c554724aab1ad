"""Configuration settings for the site auditor."""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

from . import __version__


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # PageSpeed settings
    pagespeed_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("AUDITOR_PAGESPEED_API_KEY", "PAGESPEED_API_KEY"),
        description="Google PageSpeed Insights API key (keyless requests are rate limited)",
    )
    pagespeed_enabled: bool = Field(default=True, description="Query PageSpeed Insights")
    pagespeed_strategy: str = Field(default="mobile", description="Lighthouse strategy")
    pagespeed_timeout: float = Field(
        default=60.0,
        description="PageSpeed request timeout in seconds (runs a full Lighthouse pass)",
    )

    # Fetcher settings
    fetch_timeout: float = Field(default=15.0, description="Page fetch timeout in seconds")
    max_body_bytes: int = Field(
        default=2 * 1024 * 1024,
        description="Markup beyond this many bytes is discarded",
    )
    user_agent: str = Field(
        default=f"SiteAuditorBot/{__version__} (+https://github.com/site-auditor)",
        description="User agent sent with the page fetch",
    )
    fetch_errors_fatal: bool = Field(
        default=False,
        description="Abort the audit on network errors instead of degrading the report",
    )

    # Analysis settings
    lenient_trust_detection: bool = Field(
        default=False,
        description="Also match trust keywords against visible page text",
    )
    quick_wins_limit: int = Field(default=7, description="Maximum number of quick wins")

    # Storage settings
    reports_dir: Path = Field(default=Path("./reports"), description="Reports directory")

    model_config = {"env_prefix": "AUDITOR_", "env_file": ".env", "extra": "ignore"}


settings = Settings()
