"""Extraction rules for the news page.

Article blocks come in several layouts depending on the A/B bucket the
request lands in, so the block chain lists every known variant.
"""

from __future__ import annotations

from serpscope.config.schema import LimitsConfig
from serpscope.engine.links import canonical_url, resolve_href, resolve_src
from serpscope.engine.models import NewsArticle, NewsSearchResult
from serpscope.engine.rules.common import page_query
from serpscope.engine.selectors import SelectorChain
from serpscope.engine.snapshot import DomSnapshot

READY_SELECTOR = ".SoaBEf, .WlydOe"

ARTICLE_BLOCK = SelectorChain.of(".SoaBEf", ".WlydOe", ".Gx5Zad")
TITLE = SelectorChain.of(".mCBkyc", ".n0jPhd", "h3")
LINK = SelectorChain.of("a[href]")
SOURCE = SelectorChain.of(".NUnG9d span", ".CEMjEf", "cite")
PUBLISHED = SelectorChain.of(".OSrXXb", ".WG9SHc span", ".f")
SNIPPET = SelectorChain.of(".GI74Re", ".Y3v8qd", ".st")
THUMBNAIL = SelectorChain.of("img")


def extract_news(snapshot: DomSnapshot, *, query: str, limits: LimitsConfig) -> NewsSearchResult:
    root = snapshot.parse()
    base = snapshot.url

    articles: list[NewsArticle] = []
    for block in ARTICLE_BLOCK.all(root):
        title = TITLE.text(block)
        url = canonical_url(resolve_href(LINK.first(block), base))
        if not title or not url:
            continue
        thumbnail = resolve_src(THUMBNAIL.first(block), base)
        articles.append(
            NewsArticle(
                title=title,
                url=url,
                source=SOURCE.text(block),
                published_time=PUBLISHED.text(block),
                snippet=SNIPPET.text(block),
                thumbnail=thumbnail or None,
            )
        )

    return NewsSearchResult(query=page_query(root, query), articles=tuple(articles))
