"""Configuration schema using Pydantic."""

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class Base(BaseModel):
    """Base model accepting both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ServerConfig(Base):
    """HTTP server settings."""

    host: str = "0.0.0.0"
    port: int = 8787


class BrowserConfig(Base):
    """Browser session settings.

    When ``ws_endpoint`` or ``cdp_url`` is set the session attaches to a
    remote browser instead of launching a local one.
    """

    default_browser: Literal["chromium", "firefox"] = "chromium"
    headless: bool = True
    ws_endpoint: str = ""
    cdp_url: str = ""
    user_agent: str = DEFAULT_USER_AGENT
    navigation_timeout_ms: int = 30000
    wait_until: Literal["domcontentloaded", "load", "networkidle"] = "networkidle"
    ready_timeout_ms: int = 10000
    install_timeout_s: int = 600


class SearchConfig(Base):
    """Target search engine settings."""

    base_url: str = "https://www.google.com/search"
    language: str = "en"


class LimitsConfig(Base):
    """Extraction heuristics. Image sizes are natural pixels."""

    inline_images: int = 20
    images: int = 50
    min_image_size: int = 100
    scroll_cycles: int = 3
    scroll_delay_ms: int = 1000


class LoggingConfig(Base):
    """Logging sink settings."""

    level: str = "INFO"
    serialize: bool = False


class Config(BaseSettings):
    """Root configuration for serpscope."""

    server: ServerConfig = ServerConfig()
    browser: BrowserConfig = BrowserConfig()
    search: SearchConfig = SearchConfig()
    limits: LimitsConfig = LimitsConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="SERPSCOPE_",
        env_nested_delimiter="__",
    )
