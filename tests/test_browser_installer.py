import asyncio

import pytest

from serpscope.config.schema import BrowserConfig
from serpscope.engine.browser import installer
from serpscope.engine.browser.installer import install_browser
from serpscope.engine.browser.session import is_missing_browser_error


class FakeProcess:
    def __init__(self, returncode: int, output: bytes = b""):
        self.returncode = returncode
        self._output = output
        self.killed = False
        self.waited = False

    async def communicate(self):
        return self._output, None

    async def wait(self):
        self.waited = True
        return self.returncode

    def kill(self) -> None:
        self.killed = True


def test_missing_browser_error_detection() -> None:
    assert is_missing_browser_error(RuntimeError("Executable doesn't exist at /ms-playwright/chromium"))
    assert is_missing_browser_error(RuntimeError("Please run the following command to download new browsers"))
    assert not is_missing_browser_error(RuntimeError("net::ERR_NAME_NOT_RESOLVED"))


@pytest.mark.asyncio
async def test_install_runs_playwright_for_configured_browser(monkeypatch) -> None:
    captured: dict = {}

    async def fake_exec(*args, **kwargs):
        captured["args"] = args
        return FakeProcess(0, output=b"Downloading Firefox 121.0\n\nFirefox 121.0 downloaded\n")

    monkeypatch.setattr(installer.asyncio, "create_subprocess_exec", fake_exec)

    result = await install_browser(BrowserConfig(default_browser="firefox"))

    assert result.ok is True
    assert result.browser == "firefox"
    assert captured["args"][1:] == ("-m", "playwright", "install", "firefox")
    assert result.details == "Downloading Firefox 121.0\nFirefox 121.0 downloaded"


@pytest.mark.asyncio
async def test_install_reports_failure_output(monkeypatch) -> None:
    async def fake_exec(*args, **kwargs):
        return FakeProcess(1, output=b"host system is missing dependencies")

    monkeypatch.setattr(installer.asyncio, "create_subprocess_exec", fake_exec)

    result = await install_browser(BrowserConfig())

    assert result.ok is False
    assert "missing dependencies" in result.details


@pytest.mark.asyncio
async def test_install_keeps_only_the_output_tail(monkeypatch) -> None:
    lines = "\n".join(f"progress {i}%" for i in range(50)).encode()

    async def fake_exec(*args, **kwargs):
        return FakeProcess(0, output=lines)

    monkeypatch.setattr(installer.asyncio, "create_subprocess_exec", fake_exec)

    result = await install_browser(BrowserConfig())

    details = result.details.splitlines()
    assert details[0] == "... (30 earlier lines)"
    assert details[-1] == "progress 49%"
    assert len(details) == 21


@pytest.mark.asyncio
async def test_install_times_out(monkeypatch) -> None:
    process = FakeProcess(0)

    async def slow_communicate():
        await asyncio.sleep(1)
        return b"", None

    process.communicate = slow_communicate

    async def fake_exec(*args, **kwargs):
        return process

    monkeypatch.setattr(installer.asyncio, "create_subprocess_exec", fake_exec)

    result = await install_browser(BrowserConfig(install_timeout_s=0))

    assert result.ok is False
    assert "timed out" in result.details
    assert process.killed is True
    assert process.waited is True


@pytest.mark.asyncio
async def test_install_skipped_for_remote_browser(monkeypatch) -> None:
    async def fail_exec(*args, **kwargs):
        raise AssertionError("subprocess must not run")

    monkeypatch.setattr(installer.asyncio, "create_subprocess_exec", fail_exec)

    result = await install_browser(BrowserConfig(cdp_url="http://browser:9222"))

    assert result.ok is True
    assert "Remote browser" in result.details
