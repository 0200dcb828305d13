"""Installs the Playwright browser named in :class:`BrowserConfig`."""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass

from loguru import logger

from serpscope.config.schema import BrowserConfig

_INSTALL_LOCK = asyncio.Lock()
_OUTPUT_TAIL_LINES = 20


@dataclass(slots=True, frozen=True)
class InstallResult:
    browser: str
    ok: bool
    details: str


def install_command(browser: str) -> list[str]:
    return [sys.executable, "-m", "playwright", "install", browser]


async def install_browser(config: BrowserConfig) -> InstallResult:
    """
    Download the browser binaries the session will launch.

    Nothing is installed when the session attaches to a remote browser. The
    subprocess is killed once ``config.install_timeout_s`` elapses. Concurrent
    calls are serialized.
    """
    browser = config.default_browser
    if config.ws_endpoint or config.cdp_url:
        return InstallResult(browser, True, "Remote browser configured; nothing to install")

    command = install_command(browser)
    async with _INSTALL_LOCK:
        logger.info("Installing Playwright {} (timeout {}s)", browser, config.install_timeout_s)
        process = await asyncio.create_subprocess_exec(
            *command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
        try:
            output, _ = await asyncio.wait_for(process.communicate(), timeout=config.install_timeout_s)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            logger.error("Playwright {} install timed out", browser)
            return InstallResult(browser, False, f"Playwright install timed out after {config.install_timeout_s}s")

    details = _tail(output.decode("utf-8", errors="replace"))
    if process.returncode != 0:
        logger.error("Playwright {} install exited with code {}", browser, process.returncode)
        return InstallResult(browser, False, details or f"playwright install exited with code {process.returncode}")

    logger.info("Playwright {} installed", browser)
    return InstallResult(browser, True, details or f"Playwright {browser} installed")


def _tail(text: str) -> str:
    lines = [line for line in text.strip().splitlines() if line.strip()]
    if len(lines) <= _OUTPUT_TAIL_LINES:
        return "\n".join(lines)
    skipped = len(lines) - _OUTPUT_TAIL_LINES
    return "\n".join([f"... ({skipped} earlier lines)"] + lines[-_OUTPUT_TAIL_LINES:])
