"""Extraction rules for the web (all results) page."""

from __future__ import annotations

from bs4 import Tag

from serpscope.config.schema import LimitsConfig
from serpscope.engine.links import (
    canonical_url,
    closest_anchor,
    natural_size,
    resolve_href,
    resolve_src,
)
from serpscope.engine.models import (
    FeaturedSnippet,
    InlineImage,
    InlineNews,
    InlineVideo,
    KnowledgeFact,
    KnowledgePanel,
    OrganicResult,
    RelatedQuestion,
    RelatedSearch,
    SiteLink,
    WebSearchResult,
)
from serpscope.engine.rules.common import page_query
from serpscope.engine.selectors import SelectorChain, clean_text
from serpscope.engine.snapshot import DomSnapshot

READY_SELECTOR = "#search"

RESULT_STATS = SelectorChain.of("#result-stats")

ORGANIC_BLOCK = SelectorChain.of(".g", ".Gx5Zad")
ORGANIC_TITLE = SelectorChain.of("h3", ".LC20lb")
ORGANIC_LINK = SelectorChain.of("a[href]")
ORGANIC_DISPLAY_URL = SelectorChain.of("cite")
ORGANIC_SNIPPET = SelectorChain.of(".VwiC3b", ".yXK7lf", ".s")
ORGANIC_FAVICON = SelectorChain.of("img[src*='favicon']")

FEATURED_BLOCK = SelectorChain.of(".xpdopen", ".kp-blk", ".IZ6rdc")
FEATURED_TITLE = SelectorChain.of("h3", ".LC20lb")
FEATURED_TEXT = SelectorChain.of(".hgKElc", ".X5LH0c")
FEATURED_LINK = SelectorChain.of("a[href]")

PANEL_BLOCK = SelectorChain.of(".kp-wholepage", ".knowledge-panel")
PANEL_TITLE = SelectorChain.of(".qrShPb", "h2")
PANEL_SUBTITLE = SelectorChain.of(".wwUB2c")
PANEL_DESCRIPTION = SelectorChain.of(".kno-rdesc span")
PANEL_IMAGE = SelectorChain.of("g-img img", ".kno-ibrg img")
PANEL_FACT = SelectorChain.of(".rVusze", ".wDYxhc")
FACT_LABEL = SelectorChain.of(".w8qArf")
FACT_VALUE = SelectorChain.of(".kno-fv")

QUESTION_BLOCK = SelectorChain.of(".related-question-pair", ".JolIg")
QUESTION_TEXT = SelectorChain.of(".CSkcDe", "span")

RELATED_SEARCH = SelectorChain.of(".k8XOCe", ".s75CSd")

INLINE_IMAGE = SelectorChain.of("g-img img", ".ivg-i img")

VIDEO_BLOCK = SelectorChain.of(".RzdJxc", ".VibNM")
VIDEO_TITLE = SelectorChain.of("h3")
VIDEO_LINK = SelectorChain.of("a[href]")
VIDEO_THUMBNAIL = SelectorChain.of("img")
VIDEO_DURATION = SelectorChain.of(".J1mWY")
VIDEO_SOURCE = SelectorChain.of(".Zg1NU")

NEWS_BLOCK = SelectorChain.of(".SoaBEf", ".WlydOe")
NEWS_TITLE = SelectorChain.of(".mCBkyc", ".n0jPhd")
NEWS_LINK = SelectorChain.of("a[href]")
NEWS_SOURCE = SelectorChain.of(".NUnG9d span", ".CEMjEf")
NEWS_TIME = SelectorChain.of(".OSrXXb", ".WG9SHc span")
NEWS_SNIPPET = SelectorChain.of(".GI74Re", ".Y3v8qd")

SITE_LINK_BLOCK = SelectorChain.of(".usJj9c")
SITE_LINK_TITLE = SelectorChain.of("h3")
SITE_LINK_LINK = SelectorChain.of("a[href]")
SITE_LINK_SNIPPET = SelectorChain.of(".s")


def extract_web(snapshot: DomSnapshot, *, query: str, limits: LimitsConfig) -> WebSearchResult:
    """Build the web result record from one page snapshot."""
    root = snapshot.parse()
    base = snapshot.url

    search_info: dict[str, str] = {}
    stats = RESULT_STATS.text(root)
    if stats:
        search_info["text"] = stats

    return WebSearchResult(
        query=page_query(root, query),
        search_info=search_info,
        organic_results=tuple(_organic_results(root, base)),
        featured_snippet=_featured_snippet(root, base),
        knowledge_panel=_knowledge_panel(root, base),
        people_also_ask=tuple(_people_also_ask(root)),
        related_searches=tuple(_related_searches(root, base)),
        images=tuple(_inline_images(root, base, limits.inline_images)),
        videos=tuple(_inline_videos(root, base)),
        news=tuple(_inline_news(root, base)),
        site_links=tuple(_site_links(root, base)),
    )


def _organic_results(root: Tag, base: str) -> list[OrganicResult]:
    results: list[OrganicResult] = []
    for block in ORGANIC_BLOCK.all(root):
        title = ORGANIC_TITLE.text(block)
        url = canonical_url(resolve_href(ORGANIC_LINK.first(block), base))
        if not title or not url:
            continue
        favicon = resolve_src(ORGANIC_FAVICON.first(block), base)
        results.append(
            OrganicResult(
                title=title,
                url=url,
                display_url=ORGANIC_DISPLAY_URL.text(block),
                snippet=ORGANIC_SNIPPET.text(block),
                favicon=favicon or None,
            )
        )
    return results


def _featured_snippet(root: Tag, base: str) -> FeaturedSnippet | None:
    block = FEATURED_BLOCK.first(root)
    if block is None:
        return None
    return FeaturedSnippet(
        title=FEATURED_TITLE.text(block),
        text=FEATURED_TEXT.text(block),
        url=resolve_href(FEATURED_LINK.first(block), base),
    )


def _knowledge_panel(root: Tag, base: str) -> KnowledgePanel | None:
    block = PANEL_BLOCK.first(root)
    if block is None:
        return None

    facts: list[KnowledgeFact] = []
    for fact in PANEL_FACT.all(block):
        label = FACT_LABEL.text(fact)
        value = FACT_VALUE.text(fact)
        if label and value:
            facts.append(KnowledgeFact(label=label, value=value))

    image = resolve_src(PANEL_IMAGE.first(block), base)
    return KnowledgePanel(
        title=PANEL_TITLE.text(block),
        subtitle=PANEL_SUBTITLE.text(block),
        description=PANEL_DESCRIPTION.text(block),
        image=image or None,
        facts=tuple(facts),
    )


def _people_also_ask(root: Tag) -> list[RelatedQuestion]:
    questions: list[RelatedQuestion] = []
    for block in QUESTION_BLOCK.all(root):
        question = clean_text(QUESTION_TEXT.first_with_text(block))
        if question:
            questions.append(RelatedQuestion(question=question))
    return questions


def _related_searches(root: Tag, base: str) -> list[RelatedSearch]:
    searches: list[RelatedSearch] = []
    for chip in RELATED_SEARCH.all(root):
        text = clean_text(chip)
        url = resolve_href(closest_anchor(chip), base)
        if text and url:
            searches.append(RelatedSearch(text=text, url=url))
    return searches


def _inline_images(root: Tag, base: str, cap: int) -> list[InlineImage]:
    images: list[InlineImage] = []
    for img in INLINE_IMAGE.all(root)[:cap]:
        width, height = natural_size(img)
        images.append(
            InlineImage(
                src=resolve_src(img, base),
                alt=str(img.get("alt") or ""),
                width=width or None,
                height=height or None,
            )
        )
    return images


def _inline_videos(root: Tag, base: str) -> list[InlineVideo]:
    videos: list[InlineVideo] = []
    for block in VIDEO_BLOCK.all(root):
        title = VIDEO_TITLE.text(block)
        url = canonical_url(resolve_href(VIDEO_LINK.first(block), base))
        if not title or not url:
            continue
        thumbnail = resolve_src(VIDEO_THUMBNAIL.first(block), base)
        videos.append(
            InlineVideo(
                title=title,
                url=url,
                thumbnail=thumbnail or None,
                duration=VIDEO_DURATION.text(block) or None,
                source=VIDEO_SOURCE.text(block),
            )
        )
    return videos


def _inline_news(root: Tag, base: str) -> list[InlineNews]:
    news: list[InlineNews] = []
    for block in NEWS_BLOCK.all(root):
        title = NEWS_TITLE.text(block)
        url = canonical_url(resolve_href(NEWS_LINK.first(block), base))
        if not title or not url:
            continue
        news.append(
            InlineNews(
                title=title,
                url=url,
                source=NEWS_SOURCE.text(block),
                time=NEWS_TIME.text(block),
                snippet=NEWS_SNIPPET.text(block),
            )
        )
    return news


def _site_links(root: Tag, base: str) -> list[SiteLink]:
    links: list[SiteLink] = []
    for block in SITE_LINK_BLOCK.all(root):
        title = SITE_LINK_TITLE.text(block)
        url = canonical_url(resolve_href(SITE_LINK_LINK.first(block), base))
        if not title or not url:
            continue
        links.append(SiteLink(title=title, url=url, snippet=SITE_LINK_SNIPPET.text(block)))
    return links
