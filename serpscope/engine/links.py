"""Link and image attribute normalization for snapshot nodes."""

from __future__ import annotations

from urllib.parse import parse_qs, urljoin, urlparse

from bs4 import Tag

from serpscope.engine.snapshot import HEIGHT_ATTR, HREF_ATTR, SRC_ATTR, WIDTH_ATTR

_REDIRECT_PATHS = {"/url", "/interstitial"}
_REDIRECT_PARAMS = ("q", "url")


def resolve_href(anchor: Tag | None, base_url: str) -> str:
    """Absolute URL an anchor points to, as the browser resolved it."""
    if anchor is None:
        return ""
    resolved = anchor.get(HREF_ATTR)
    if resolved:
        return str(resolved)
    raw = anchor.get("href")
    if not raw:
        return ""
    return urljoin(base_url, str(raw))


def resolve_src(img: Tag | None, base_url: str) -> str:
    if img is None:
        return ""
    resolved = img.get(SRC_ATTR)
    if resolved:
        return str(resolved)
    raw = img.get("src")
    if not raw:
        return ""
    if str(raw).startswith("data:"):
        return str(raw)
    return urljoin(base_url, str(raw))


def canonical_url(url: str) -> str:
    """
    Normalize a result link.

    Search-engine redirect wrappers (``/url?q=<target>``) are unwrapped to
    their target. Anything that is not an absolute http(s) URL yields ``""``.
    """
    if not url:
        return ""
    parsed = urlparse(url)
    if parsed.path in _REDIRECT_PATHS:
        params = parse_qs(parsed.query)
        for name in _REDIRECT_PARAMS:
            target = params.get(name, [""])[0]
            if target.startswith(("http://", "https://")):
                parsed = urlparse(target)
                url = target
                break
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        return ""
    return url


def natural_size(img: Tag | None) -> tuple[int, int]:
    """Natural (intrinsic) pixel size recorded for an image, 0 when unknown."""
    if img is None:
        return 0, 0
    return _int_attr(img, WIDTH_ATTR), _int_attr(img, HEIGHT_ATTR)


def closest_anchor(node: Tag | None) -> Tag | None:
    """The node itself when it is an anchor, else its nearest anchor ancestor."""
    if node is None:
        return None
    if node.name == "a":
        return node
    return node.find_parent("a")


def _int_attr(node: Tag, name: str) -> int:
    value = node.get(name)
    try:
        return int(str(value)) if value is not None else 0
    except ValueError:
        return 0
