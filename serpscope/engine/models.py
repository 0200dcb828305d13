"""Result records produced by the extraction engine."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SearchMode(str, Enum):
    """Search vertical served by one endpoint."""

    WEB = "web"
    IMAGES = "images"
    VIDEOS = "videos"
    NEWS = "news"


@dataclass(slots=True, frozen=True)
class SearchRequest:
    query: str
    mode: SearchMode


@dataclass(slots=True, frozen=True)
class OrganicResult:
    title: str
    url: str
    display_url: str = ""
    snippet: str = ""
    favicon: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "displayUrl": self.display_url,
            "snippet": self.snippet,
            "favicon": self.favicon,
        }


@dataclass(slots=True, frozen=True)
class FeaturedSnippet:
    title: str = ""
    text: str = ""
    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "text": self.text, "url": self.url}


@dataclass(slots=True, frozen=True)
class KnowledgeFact:
    label: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "value": self.value}


@dataclass(slots=True, frozen=True)
class KnowledgePanel:
    """Entity card shown beside the results."""

    title: str = ""
    subtitle: str = ""
    description: str = ""
    image: str | None = None
    facts: tuple[KnowledgeFact, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "description": self.description,
            "image": self.image,
            "facts": [fact.to_dict() for fact in self.facts],
        }


@dataclass(slots=True, frozen=True)
class RelatedQuestion:
    question: str

    def to_dict(self) -> dict[str, Any]:
        return {"question": self.question}


@dataclass(slots=True, frozen=True)
class RelatedSearch:
    text: str
    url: str

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "url": self.url}


@dataclass(slots=True, frozen=True)
class InlineImage:
    src: str
    alt: str = ""
    width: int | None = None
    height: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "src": self.src,
            "alt": self.alt,
            "width": self.width,
            "height": self.height,
        }


@dataclass(slots=True, frozen=True)
class InlineVideo:
    title: str
    url: str
    thumbnail: str | None = None
    duration: str | None = None
    source: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "thumbnail": self.thumbnail,
            "duration": self.duration,
            "source": self.source,
        }


@dataclass(slots=True, frozen=True)
class InlineNews:
    title: str
    url: str
    source: str = ""
    time: str = ""
    snippet: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "source": self.source,
            "time": self.time,
            "snippet": self.snippet,
        }


@dataclass(slots=True, frozen=True)
class SiteLink:
    title: str
    url: str
    snippet: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "url": self.url, "snippet": self.snippet}


@dataclass(slots=True, frozen=True)
class WebSearchResult:
    """Everything extracted from one web results page."""

    query: str
    search_info: dict[str, str] = field(default_factory=dict)
    organic_results: tuple[OrganicResult, ...] = ()
    featured_snippet: FeaturedSnippet | None = None
    knowledge_panel: KnowledgePanel | None = None
    people_also_ask: tuple[RelatedQuestion, ...] = ()
    related_searches: tuple[RelatedSearch, ...] = ()
    images: tuple[InlineImage, ...] = ()
    videos: tuple[InlineVideo, ...] = ()
    news: tuple[InlineNews, ...] = ()
    site_links: tuple[SiteLink, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "searchInfo": dict(self.search_info),
            "organicResults": [item.to_dict() for item in self.organic_results],
            "featuredSnippet": self.featured_snippet.to_dict() if self.featured_snippet else None,
            "knowledgePanel": self.knowledge_panel.to_dict() if self.knowledge_panel else None,
            "peopleAlsoAsk": [item.to_dict() for item in self.people_also_ask],
            "relatedSearches": [item.to_dict() for item in self.related_searches],
            "images": [item.to_dict() for item in self.images],
            "videos": [item.to_dict() for item in self.videos],
            "news": [item.to_dict() for item in self.news],
            "siteLinks": [item.to_dict() for item in self.site_links],
        }


@dataclass(slots=True, frozen=True)
class ImageItem:
    src: str
    thumbnail: str
    alt: str
    width: int
    height: int
    link: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "src": self.src,
            "thumbnail": self.thumbnail,
            "alt": self.alt,
            "width": self.width,
            "height": self.height,
            "link": self.link,
        }


@dataclass(slots=True, frozen=True)
class ImageSearchResult:
    """Images page result; ``total_images`` counts candidates before the cap."""

    query: str
    total_images: int
    images: tuple[ImageItem, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "totalImages": self.total_images,
            "images": [item.to_dict() for item in self.images],
        }


@dataclass(slots=True, frozen=True)
class VideoItem:
    title: str
    url: str
    thumbnail: str | None = None
    source: str = ""
    duration: str | None = None
    upload_date: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "thumbnail": self.thumbnail,
            "source": self.source,
            "duration": self.duration,
            "uploadDate": self.upload_date,
            "description": self.description,
        }


@dataclass(slots=True, frozen=True)
class VideoSearchResult:
    query: str
    videos: tuple[VideoItem, ...] = ()

    @property
    def total_videos(self) -> int:
        return len(self.videos)

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "totalVideos": self.total_videos,
            "videos": [item.to_dict() for item in self.videos],
        }


@dataclass(slots=True, frozen=True)
class NewsArticle:
    title: str
    url: str
    source: str = ""
    published_time: str = ""
    snippet: str = ""
    thumbnail: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "source": self.source,
            "publishedTime": self.published_time,
            "snippet": self.snippet,
            "thumbnail": self.thumbnail,
        }


@dataclass(slots=True, frozen=True)
class NewsSearchResult:
    query: str
    articles: tuple[NewsArticle, ...] = ()

    @property
    def total_articles(self) -> int:
        return len(self.articles)

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "totalArticles": self.total_articles,
            "articles": [item.to_dict() for item in self.articles],
        }


def utc_timestamp(now: dt.datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    moment = (now or dt.datetime.now(dt.timezone.utc)).astimezone(dt.timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def success_envelope(data: Any, *, now: dt.datetime | None = None) -> dict[str, Any]:
    """Wrap an extraction result for transport."""
    return {
        "success": True,
        "timestamp": utc_timestamp(now),
        "data": data.to_dict(),
    }


def error_envelope(message: str) -> dict[str, Any]:
    return {"error": message}
