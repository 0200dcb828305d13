"""Prioritized CSS selector chains over a parsed DOM snapshot.

Search result markup changes without notice, so each field is described by
several selector strategies. For a single field the strategies are tried in
order and the first one that matches wins; for repeated blocks the
alternatives are matched as one group so the output keeps document order.
"""

from __future__ import annotations

from dataclasses import dataclass

from bs4 import Tag


def clean_text(node: Tag | None) -> str:
    """Return the trimmed text content of a node, or an empty string."""
    if node is None:
        return ""
    return node.get_text().strip()


@dataclass(slots=True, frozen=True)
class SelectorChain:
    """Ordered CSS selector strategies for one field or block kind."""

    selectors: tuple[str, ...]

    @classmethod
    def of(cls, *selectors: str) -> "SelectorChain":
        if not selectors:
            raise ValueError("SelectorChain requires at least one selector")
        return cls(tuple(selectors))

    @property
    def group(self) -> str:
        """All strategies as one comma-separated selector group."""
        return ", ".join(self.selectors)

    def first(self, root: Tag) -> Tag | None:
        """First node matched by the highest-priority strategy that matches."""
        for selector in self.selectors:
            node = root.select_one(selector)
            if node is not None:
                return node
        return None

    def first_with_text(self, root: Tag) -> Tag | None:
        """Like :meth:`first`, skipping matches that have no text."""
        for selector in self.selectors:
            for node in root.select(selector):
                if clean_text(node):
                    return node
        return None

    def all(self, root: Tag) -> list[Tag]:
        """Every node matched by any strategy, in document order."""
        return root.select(self.group)

    def text(self, root: Tag) -> str:
        return clean_text(self.first(root))

    def attr(self, root: Tag, *names: str) -> str:
        """First non-empty attribute among ``names`` on the first match."""
        node = self.first(root)
        if node is None:
            return ""
        for name in names:
            value = node.get(name)
            if isinstance(value, list):
                value = " ".join(value)
            if value:
                return str(value).strip()
        return ""
