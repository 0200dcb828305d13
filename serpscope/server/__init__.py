"""HTTP surface for serpscope."""

from serpscope.server.app import create_app

__all__ = ["create_app"]
