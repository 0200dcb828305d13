"""Shared browser session built on Playwright."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from loguru import logger

from serpscope.config.schema import BrowserConfig
from serpscope.errors import ExtractionError

_MISSING_BROWSER_PATTERNS = (
    "executable doesn't exist",
    "please run the following command",
    "browser has not been found",
)


def is_missing_browser_error(exc: Exception) -> bool:
    """Detect Playwright launch failures caused by missing browser binaries."""
    text = str(exc).lower()
    return any(p in text for p in _MISSING_BROWSER_PATTERNS)


class BrowserSession:
    """
    One browser per process, launched on first use.

    Every request opens its own page through :meth:`page` and the page is
    closed when the ``async with`` block exits, whether it succeeded or not.
    The browser lives until :meth:`close`. A browser that crashed or whose
    remote endpoint dropped is replaced on the next request.
    """

    def __init__(self, config: BrowserConfig | None = None):
        self.config = config or BrowserConfig()
        self._playwright: Any = None
        self._browser: Any = None
        self._lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return self._browser is not None

    def _is_connected(self) -> bool:
        return self._browser is not None and self._browser.is_connected()

    async def _ensure_browser(self) -> Any:
        if self._is_connected():
            return self._browser

        async with self._lock:
            if not self._is_connected():
                if self._browser is not None:
                    logger.warning("{} browser disconnected, relaunching", self.config.default_browser)
                    await self._discard()
                self._browser = await self._launch()
        return self._browser

    async def _discard(self) -> None:
        playwright = self._playwright
        self._browser = None
        self._playwright = None
        if playwright is None:
            return
        try:
            await playwright.stop()
        except Exception as e:
            logger.debug("Stopping stale Playwright driver failed: {}", e)

    async def _launch(self) -> Any:
        from playwright.async_api import async_playwright

        playwright = await async_playwright().start()
        browser_type = getattr(playwright, self.config.default_browser)
        try:
            if self.config.ws_endpoint:
                logger.info("Connecting to remote {} at {}", self.config.default_browser, self.config.ws_endpoint)
                browser = await browser_type.connect(self.config.ws_endpoint)
            elif self.config.cdp_url:
                logger.info("Connecting to remote chromium over CDP at {}", self.config.cdp_url)
                browser = await playwright.chromium.connect_over_cdp(self.config.cdp_url)
            else:
                logger.info(
                    "Launching local {} (headless={})",
                    self.config.default_browser,
                    self.config.headless,
                )
                browser = await browser_type.launch(headless=self.config.headless)
        except Exception as e:
            await playwright.stop()
            if is_missing_browser_error(e):
                raise ExtractionError(
                    f"{self.config.default_browser} is not installed; "
                    "run `serpscope install-browsers`"
                ) from e
            raise

        self._playwright = playwright
        return browser

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Any]:
        """Open a fresh page carrying the configured user agent."""
        browser = await self._ensure_browser()
        page = await browser.new_page(user_agent=self.config.user_agent)
        try:
            yield page
        finally:
            await page.close()

    async def close(self) -> None:
        """Close the browser and stop Playwright; safe to call when never opened."""
        browser, playwright = self._browser, self._playwright
        self._browser = None
        self._playwright = None
        try:
            if browser is not None:
                await browser.close()
        finally:
            if playwright is not None:
                await playwright.stop()
        if browser is not None:
            logger.info("Browser session closed")
