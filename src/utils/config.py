"""Configuration management system using Pydantic v2 and YAML.

This module provides type-safe configuration loading with validation
for the local help directory scraper.
"""

import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .exceptions import ConfigFileNotFoundError


# Results URL captured from the directory for one ZIP/area. Only the page
# query parameter and the fragment are rewritten while crawling.
DEFAULT_BASE_URL = (
    "https://www.healthcare.gov/find-local-help/results"
    "?q=ORANGE+PARK%2C+FL+32073&lat=30.17055&lng=-81.7348&city=ORANGE+PARK"
    "&state=FL&zip_code=32073&mp=FFM&page=1&coverage=individual"
    "&types=agent&types=multistate&name=#1"
)

WaitUntil = Literal["commit", "domcontentloaded", "load", "networkidle"]


class SelectorConfig(BaseModel):
    """CSS selectors for the directory results page.

    Kept together so a markup change on the remote site only needs an
    update here (or in the YAML file).
    """

    results_container: str = Field(default="#filter-results-container", description="Results wrapper marker")
    list_items: str = Field(
        default=(
            "#filter-results-container > div:nth-child(3) > div:nth-child(2) > div > div"
            " > div.ds-l-row > div > ol li"
        ),
        description="One element per directory entry",
    )
    name: str = Field(default="h3, h2, [data-cy='result-name']", description="Heading holding the entry name")
    screen_reader_only: str = Field(
        default=".ds-u-visibility--screen-reader, .sr-only",
        description="Decorative text stripped before reading visible text",
    )
    address: str = Field(default="address, [itemprop='address']", description="Multi-line address block")
    phone: str = Field(default="a[href^='tel:']", description="Telephone anchor")
    phone_fallback: str = Field(default="[data-cy='phone']", description="Plain-text phone element")
    email: str = Field(default="a[href^='mailto:']", description="Mail anchor")
    website: str = Field(default="a[href^='http']", description="First HTTP(S) anchor")
    years_region: str = Field(
        default="[data-cy='years-of-service'], .ds-u-font-size--sm, p",
        description="Free-text regions searched for '<N> year'",
    )
    badge: str = Field(default=".ds-c-badge", description="Role badges")
    row: str = Field(default="tr, .ds-l-row, dl", description="Key/value rows (labeled fields and hours)")
    bold_label: str = Field(
        default="b, strong, .ds-text--bold, .ds-u-font-weight--bold",
        description="Marks a row's label cell as bold (th cells always count)",
    )


class CrawlerConfig(BaseModel):
    """Configuration for one paginated crawl."""

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Results URL used as the page template")
    page_param: str = Field(default="page", description="Query parameter holding the page number")
    start_page: Optional[int] = Field(default=None, ge=1, description="First page; derived from base_url if unset")
    max_pages: Optional[int] = Field(default=None, ge=1, description="Page budget; unbounded if unset")
    pacing_ms: int = Field(default=200, ge=0, description="Fixed pause after each navigation")
    container_timeout_ms: int = Field(default=30000, ge=0, description="Best-effort wait for the results container")
    items_timeout_ms: int = Field(default=30000, ge=0, description="Mandatory wait for the first list item")
    navigation_wait_until: WaitUntil = Field(default="domcontentloaded", description="Navigation settle policy")
    selectors: SelectorConfig = Field(default_factory=SelectorConfig)

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure base URL uses an HTTP scheme."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError("base_url must start with http:// or https://")
        return v


class BrowserConfig(BaseModel):
    """Configuration for the Playwright browser session."""

    headless: bool = Field(default=True, description="Run browser in headless mode")
    viewport_width: int = Field(default=1366, ge=320)
    viewport_height: int = Field(default=900, ge=240)
    default_timeout_ms: int = Field(default=60000, ge=1000, description="Default Playwright operation timeout")


class OutputConfig(BaseModel):
    """Configuration for JSON output files."""

    output_dir: str = Field(default="./output/json", description="Directory for per-page and combined JSON")
    zip_param: str = Field(default="zip_code", description="Query parameter used to label output files")


class AppConfig(BaseModel):
    """Root configuration model containing all sub-configurations."""

    crawler: CrawlerConfig = Field(default_factory=CrawlerConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Choose from: {valid_levels}")
        return v_upper

    @classmethod
    def from_yaml(cls, path: Path | str) -> "AppConfig":
        """Load configuration from a YAML file without touching the cache."""
        return load_config(path)


# Singleton pattern for configuration
_config: Optional[AppConfig] = None


def load_config(config_path: Optional[Path | str] = None) -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to configuration file. Defaults to the
                    LOCALHELP_CONFIG env var, then config/config.yaml
                    relative to project root

    Returns:
        Validated AppConfig instance

    Raises:
        ConfigFileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If configuration is invalid
    """
    if config_path is None:
        env_config_path = os.environ.get('LOCALHELP_CONFIG')
        if env_config_path:
            config_path = Path(env_config_path)
        else:
            project_root = Path(__file__).parent.parent.parent
            config_path = project_root / "config" / "config.yaml"
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        example_path = config_path.parent / "config.example.yaml"
        raise ConfigFileNotFoundError(
            f"Configuration file not found: {config_path}. "
            f"Copy {example_path} to {config_path} or set LOCALHELP_CONFIG.",
            path=str(config_path),
        )

    with open(config_path, 'r', encoding='utf-8') as f:
        config_dict = yaml.safe_load(f) or {}

    return AppConfig.model_validate(config_dict)


def get_config(config_path: Optional[Path | str] = None, reload: bool = False) -> AppConfig:
    """Get configuration instance (singleton pattern).

    Args:
        config_path: Path to configuration file (only used on first call or if reload=True)
        reload: Force reload of configuration

    Returns:
        Cached or newly loaded AppConfig instance
    """
    global _config

    if _config is None or reload:
        _config = load_config(config_path)

    return _config


def reset_config() -> None:
    """Reset cached configuration (useful for testing)."""
    global _config
    _config = None
