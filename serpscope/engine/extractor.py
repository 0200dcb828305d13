"""Search engine operations: navigate, wait, snapshot, close, extract."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, urlencode

from loguru import logger

from serpscope.config.schema import BrowserConfig, LimitsConfig, SearchConfig
from serpscope.engine.browser.session import BrowserSession
from serpscope.engine.models import SearchMode, SearchRequest, success_envelope
from serpscope.engine.rules import extract_images, extract_news, extract_videos, extract_web
from serpscope.engine.rules import images as image_rules
from serpscope.engine.rules import news as news_rules
from serpscope.engine.rules import videos as video_rules
from serpscope.engine.rules import web as web_rules
from serpscope.engine.snapshot import SCROLL_SCRIPT, SNAPSHOT_SCRIPT, DomSnapshot
from serpscope.errors import ExtractionError


@dataclass(slots=True, frozen=True)
class ModeProfile:
    """How one search mode is rendered and read."""

    mode: SearchMode
    vertical: str | None
    ready_selector: str
    extract: Callable[..., Any]
    scroll_before_wait: bool = False


MODE_PROFILES: dict[SearchMode, ModeProfile] = {
    SearchMode.WEB: ModeProfile(
        mode=SearchMode.WEB,
        vertical=None,
        ready_selector=web_rules.READY_SELECTOR,
        extract=extract_web,
    ),
    SearchMode.IMAGES: ModeProfile(
        mode=SearchMode.IMAGES,
        vertical="isch",
        ready_selector=image_rules.READY_SELECTOR,
        extract=extract_images,
        scroll_before_wait=True,
    ),
    SearchMode.VIDEOS: ModeProfile(
        mode=SearchMode.VIDEOS,
        vertical="vid",
        ready_selector=video_rules.READY_SELECTOR,
        extract=extract_videos,
    ),
    SearchMode.NEWS: ModeProfile(
        mode=SearchMode.NEWS,
        vertical="nws",
        ready_selector=news_rules.READY_SELECTOR,
        extract=extract_news,
    ),
}


class SearchEngine:
    """Runs one extraction per call against a shared browser session."""

    def __init__(
        self,
        session: BrowserSession,
        *,
        browser_config: BrowserConfig | None = None,
        search_config: SearchConfig | None = None,
        limits: LimitsConfig | None = None,
    ):
        self.session = session
        self.browser_config = browser_config or BrowserConfig()
        self.search_config = search_config or SearchConfig()
        self.limits = limits or LimitsConfig()

    async def search(self, query: str) -> dict[str, Any]:
        return await self.run(SearchRequest(query=query, mode=SearchMode.WEB))

    async def images(self, query: str) -> dict[str, Any]:
        return await self.run(SearchRequest(query=query, mode=SearchMode.IMAGES))

    async def videos(self, query: str) -> dict[str, Any]:
        return await self.run(SearchRequest(query=query, mode=SearchMode.VIDEOS))

    async def news(self, query: str) -> dict[str, Any]:
        return await self.run(SearchRequest(query=query, mode=SearchMode.NEWS))

    def build_url(self, query: str, mode: SearchMode) -> str:
        """Results page URL for ``query`` in ``mode``."""
        profile = MODE_PROFILES[mode]
        params: dict[str, str] = {"q": query}
        if profile.vertical:
            params["tbm"] = profile.vertical
        if self.search_config.language:
            params["hl"] = self.search_config.language
        return f"{self.search_config.base_url}?{urlencode(params, quote_via=quote)}"

    async def run(self, request: SearchRequest) -> dict[str, Any]:
        """
        Render the results page for ``request`` and extract its record.

        Returns the success envelope. Any failure while opening the page,
        navigating, waiting or evaluating is raised as ``ExtractionError``
        with the underlying message; the page is closed before that.
        """
        if not request.query:
            raise ValueError("query must not be empty")

        profile = MODE_PROFILES[request.mode]
        url = self.build_url(request.query, request.mode)
        started_at = time.monotonic()
        logger.info("Extracting {} results for {!r}", request.mode.value, request.query)

        try:
            snapshot = await self._render(profile, url)
            result = profile.extract(snapshot, query=request.query, limits=self.limits)
        except ExtractionError as e:
            logger.error("{} extraction failed for {!r}: {}", request.mode.value, request.query, e)
            raise
        except Exception as e:
            logger.error("{} extraction failed for {!r}: {}", request.mode.value, request.query, e)
            raise ExtractionError(str(e) or type(e).__name__) from e

        logger.debug(
            "{} extraction for {!r} finished in {}ms",
            request.mode.value,
            request.query,
            int((time.monotonic() - started_at) * 1000),
        )
        return success_envelope(result)

    async def _render(self, profile: ModeProfile, url: str) -> DomSnapshot:
        async with self.session.page() as page:
            await page.goto(
                url,
                wait_until=self.browser_config.wait_until,
                timeout=self.browser_config.navigation_timeout_ms,
            )
            if profile.scroll_before_wait:
                await self._scroll(page)
            await page.wait_for_selector(
                profile.ready_selector,
                state="attached",
                timeout=self.browser_config.ready_timeout_ms,
            )
            payload = await page.evaluate(SNAPSHOT_SCRIPT)
        return DomSnapshot.from_evaluate(payload)

    async def _scroll(self, page: Any) -> None:
        """Scroll one viewport at a time so lazy-loaded images render."""
        for _ in range(self.limits.scroll_cycles):
            await page.evaluate(SCROLL_SCRIPT)
            await page.wait_for_timeout(self.limits.scroll_delay_ms)
