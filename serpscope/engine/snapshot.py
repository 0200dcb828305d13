"""DOM snapshot taken from the live page in a single evaluate pass.

Properties that only exist on live nodes (resolved ``href``/``src``, natural
image dimensions, the current value of form fields) are copied into
``data-serpscope-*`` attributes before the markup is serialized, so the
extraction rules can run against plain HTML.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from bs4 import BeautifulSoup

HREF_ATTR = "data-serpscope-href"
SRC_ATTR = "data-serpscope-src"
WIDTH_ATTR = "data-serpscope-width"
HEIGHT_ATTR = "data-serpscope-height"
VALUE_ATTR = "data-serpscope-value"

SNAPSHOT_SCRIPT = f"""
() => {{
  for (const a of document.querySelectorAll("a[href]")) {{
    a.setAttribute("{HREF_ATTR}", a.href);
  }}
  for (const img of document.querySelectorAll("img")) {{
    img.setAttribute("{SRC_ATTR}", img.currentSrc || img.src || "");
    img.setAttribute("{WIDTH_ATTR}", String(img.naturalWidth || 0));
    img.setAttribute("{HEIGHT_ATTR}", String(img.naturalHeight || 0));
  }}
  for (const field of document.querySelectorAll("input, textarea")) {{
    field.setAttribute("{VALUE_ATTR}", field.value || "");
  }}
  return {{ url: location.href, html: document.documentElement.outerHTML }};
}}
"""

SCROLL_SCRIPT = "() => window.scrollBy(0, window.innerHeight)"


@dataclass(slots=True, frozen=True)
class DomSnapshot:
    """Serialized document plus the URL it was rendered from."""

    url: str
    html: str

    @classmethod
    def from_evaluate(cls, payload: Any) -> "DomSnapshot":
        if not isinstance(payload, dict):
            raise TypeError(f"unexpected snapshot payload: {type(payload).__name__}")
        return cls(url=str(payload.get("url") or ""), html=str(payload.get("html") or ""))

    def parse(self) -> BeautifulSoup:
        return BeautifulSoup(self.html, "html.parser")
