"""Browser session management."""

from serpscope.engine.browser.installer import InstallResult, install_browser
from serpscope.engine.browser.session import BrowserSession, is_missing_browser_error

__all__ = ["BrowserSession", "InstallResult", "install_browser", "is_missing_browser_error"]
