"""Helpers shared by the per-mode extraction rules."""

from __future__ import annotations

from bs4 import Tag

from serpscope.engine.selectors import SelectorChain
from serpscope.engine.snapshot import VALUE_ATTR

SEARCH_BOX = SelectorChain.of('input[name="q"]', 'textarea[name="q"]')


def page_query(root: Tag, fallback: str) -> str:
    """Query shown in the results page search box, else ``fallback``."""
    box = SEARCH_BOX.first(root)
    if box is not None:
        value = box.get(VALUE_ATTR) or box.get("value") or box.get_text()
        if value and str(value).strip():
            return str(value).strip()
    return fallback
