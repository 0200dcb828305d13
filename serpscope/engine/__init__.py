"""Extraction engine: renders search pages and reads them into records."""

from serpscope.engine.browser import BrowserSession
from serpscope.engine.extractor import MODE_PROFILES, ModeProfile, SearchEngine
from serpscope.engine.models import SearchMode, SearchRequest

__all__ = ["BrowserSession", "MODE_PROFILES", "ModeProfile", "SearchEngine", "SearchMode", "SearchRequest"]
