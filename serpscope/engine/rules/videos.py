"""Extraction rules for the videos page."""

from __future__ import annotations

from serpscope.config.schema import LimitsConfig
from serpscope.engine.links import canonical_url, resolve_href, resolve_src
from serpscope.engine.models import VideoItem, VideoSearchResult
from serpscope.engine.rules.common import page_query
from serpscope.engine.selectors import SelectorChain
from serpscope.engine.snapshot import DomSnapshot

READY_SELECTOR = ".g"

VIDEO_BLOCK = SelectorChain.of(".g")
TITLE = SelectorChain.of("h3")
LINK = SelectorChain.of("a[href]")
THUMBNAIL = SelectorChain.of("img")
SOURCE = SelectorChain.of(".UPmit")
DURATION = SelectorChain.of(".J1mWY")
UPLOAD_DATE = SelectorChain.of(".P7xzyf")
DESCRIPTION = SelectorChain.of(".VwiC3b")


def extract_videos(snapshot: DomSnapshot, *, query: str, limits: LimitsConfig) -> VideoSearchResult:
    root = snapshot.parse()
    base = snapshot.url

    videos: list[VideoItem] = []
    for block in VIDEO_BLOCK.all(root):
        title = TITLE.text(block)
        url = canonical_url(resolve_href(LINK.first(block), base))
        if not title or not url:
            continue
        thumbnail = resolve_src(THUMBNAIL.first(block), base)
        videos.append(
            VideoItem(
                title=title,
                url=url,
                thumbnail=thumbnail or None,
                source=SOURCE.text(block),
                duration=DURATION.text(block) or None,
                upload_date=UPLOAD_DATE.text(block),
                description=DESCRIPTION.text(block),
            )
        )

    return VideoSearchResult(query=page_query(root, query), videos=tuple(videos))
