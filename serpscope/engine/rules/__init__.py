"""Per-mode extraction rules."""

from serpscope.engine.rules.images import extract_images
from serpscope.engine.rules.news import extract_news
from serpscope.engine.rules.videos import extract_videos
from serpscope.engine.rules.web import extract_web

__all__ = ["extract_web", "extract_images", "extract_videos", "extract_news"]
