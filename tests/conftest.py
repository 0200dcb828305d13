from pathlib import Path

import pytest

from serpscope.config.schema import BrowserConfig
from serpscope.engine.browser.session import BrowserSession
from serpscope.engine.snapshot import SCROLL_SCRIPT

FIXTURES = Path(__file__).parent / "fixtures"
SEARCH_URL = "https://www.google.com/search?q=openai&hl=en"


class FakePage:
    """Stand-in for a Playwright page that records every call."""

    def __init__(
        self,
        html: str = "<html><body></body></html>",
        *,
        url: str = SEARCH_URL,
        fail_on: str | None = None,
    ):
        self.html = html
        self.url = url
        self.fail_on = fail_on
        self.calls: list[tuple] = []
        self.close_count = 0

    def _maybe_fail(self, step: str) -> None:
        if self.fail_on == step:
            raise RuntimeError(f"{step} failed: Timeout 30000ms exceeded")

    async def goto(self, url, wait_until=None, timeout=None):
        self.calls.append(("goto", url, wait_until, timeout))
        self._maybe_fail("goto")

    async def wait_for_selector(self, selector, state=None, timeout=None):
        self.calls.append(("wait_for_selector", selector, state, timeout))
        self._maybe_fail("wait_for_selector")

    async def wait_for_timeout(self, timeout):
        self.calls.append(("wait_for_timeout", timeout))

    async def evaluate(self, script):
        if script == SCROLL_SCRIPT:
            self.calls.append(("scroll",))
            return None
        self.calls.append(("snapshot",))
        self._maybe_fail("evaluate")
        return {"url": self.url, "html": self.html}

    async def close(self):
        self.close_count += 1


class FakeBrowser:
    def __init__(self, page: FakePage):
        self.page = page
        self.new_page_kwargs: list[dict] = []
        self.closed = False
        self.connected = True

    def is_connected(self) -> bool:
        return self.connected

    async def new_page(self, **kwargs):
        self.new_page_kwargs.append(kwargs)
        return self.page

    async def close(self):
        self.closed = True


def load_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture
def fixture_html():
    return load_fixture


@pytest.fixture
def make_session(monkeypatch):
    """Build a BrowserSession whose browser hands out ``page``."""

    def _make(page: FakePage, config: BrowserConfig | None = None) -> BrowserSession:
        session = BrowserSession(config or BrowserConfig())
        browser = FakeBrowser(page)

        async def fake_launch():
            return browser

        monkeypatch.setattr(session, "_launch", fake_launch)
        session.fake_browser = browser
        return session

    return _make


@pytest.fixture
def make_page():
    return FakePage


@pytest.fixture
def make_browser():
    return FakeBrowser
