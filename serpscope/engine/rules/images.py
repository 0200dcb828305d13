"""Extraction rules for the images page."""

from __future__ import annotations

from serpscope.config.schema import LimitsConfig
from serpscope.engine.links import closest_anchor, natural_size, resolve_href, resolve_src
from serpscope.engine.models import ImageItem, ImageSearchResult
from serpscope.engine.rules.common import page_query
from serpscope.engine.selectors import SelectorChain
from serpscope.engine.snapshot import DomSnapshot

READY_SELECTOR = "img"

IMAGE = SelectorChain.of("img")


def extract_images(snapshot: DomSnapshot, *, query: str, limits: LimitsConfig) -> ImageSearchResult:
    """
    Collect result images, skipping icons and UI chrome.

    Only images whose natural width and height both exceed
    ``limits.min_image_size`` are kept. ``total_images`` reports every kept
    candidate; the returned list is capped at ``limits.images``.
    """
    root = snapshot.parse()
    base = snapshot.url

    candidates: list[ImageItem] = []
    for img in IMAGE.all(root):
        width, height = natural_size(img)
        if width <= limits.min_image_size or height <= limits.min_image_size:
            continue
        src = resolve_src(img, base)
        candidates.append(
            ImageItem(
                src=src,
                thumbnail=src,
                alt=str(img.get("alt") or ""),
                width=width,
                height=height,
                link=resolve_href(closest_anchor(img), base),
            )
        )

    return ImageSearchResult(
        query=page_query(root, query),
        total_images=len(candidates),
        images=tuple(candidates[: limits.images]),
    )
