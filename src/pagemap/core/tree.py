"""Raw content tree.

The page map produced by the content collector: an ordered forest of
pages, folders and per-folder meta records. Nodes are immutable; the
normalizer and the query functions build new structures from them.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pagemap.core.theme import ThemeContext
from pagemap.core.types import ITEM_TYPES

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64
WILDCARD = "*"

_PAGE_KINDS = frozenset({"Page", "MdxPage", "MarkdownPage"})
_EMPTY: Mapping[str, Any] = MappingProxyType({})


class MalformedTreeError(ValueError):
    """Raised when the content tree is cyclic or nested beyond the depth guard."""


@dataclass(frozen=True)
class Page:
    """A content page."""

    name: str
    route: str
    front_matter: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    locale: str | None = None


@dataclass(frozen=True)
class Folder:
    """A content folder with nested nodes."""

    name: str
    route: str
    children: tuple[ContentNode, ...] = ()
    locale: str | None = None


@dataclass(frozen=True)
class MetaEntry:
    """Per-child overrides declared in a folder's meta record."""

    title: str | None = None
    type: str | None = None
    display: str | None = None
    theme: ThemeContext = field(default_factory=ThemeContext)
    href: str | None = None
    new_window: bool = False

    @classmethod
    def from_value(cls, value: object) -> MetaEntry | None:
        """Build an entry from a raw meta value.

        A string is a title. A mapping may carry title, type, display,
        theme, href and newWindow. Anything else is ignored.
        """
        if isinstance(value, str):
            return cls(title=value)
        if not isinstance(value, Mapping):
            return None

        title = value.get("title")
        item_type = value.get("type")
        if item_type is not None and (
            not isinstance(item_type, str) or item_type not in ITEM_TYPES
        ):
            logger.debug(f"Ignoring unknown meta type {item_type!r}")
            item_type = None
        display = value.get("display")
        href = value.get("href")

        return cls(
            title=title if isinstance(title, str) else None,
            type=item_type,
            display=display if isinstance(display, str) else None,
            theme=ThemeContext.from_mapping(value.get("theme")),
            href=href if isinstance(href, str) else None,
            new_window=value.get("newWindow") is True,
        )


@dataclass(frozen=True)
class MetaRecord:
    """Ordering and override declarations for the children of one folder.

    Entry insertion order is the declared child ordering.
    """

    entries: Mapping[str, MetaEntry] = field(default_factory=lambda: _EMPTY)
    locale: str | None = None

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, object],
        locale: str | None = None,
    ) -> MetaRecord:
        """Build a record from raw meta data, ignoring malformed entries."""
        entries: dict[str, MetaEntry] = {}
        for key, value in data.items():
            entry = MetaEntry.from_value(value)
            if entry is None:
                logger.debug(f"Ignoring meta entry {key!r} with value {value!r}")
                continue
            entries[str(key)] = entry
        return cls(entries=MappingProxyType(entries), locale=locale)

    @property
    def keys(self) -> list[str]:
        return list(self.entries)

    def get(self, name: str) -> MetaEntry | None:
        return self.entries.get(name)

    @property
    def wildcard(self) -> MetaEntry | None:
        return self.entries.get(WILDCARD)


ContentNode = Page | Folder | MetaRecord


def parse_page_map(
    data: object,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> tuple[ContentNode, ...]:
    """Parse a loosely-typed page map into content nodes.

    Accepts the JSON shape written by the content collector: a list of
    objects with a ``kind`` of ``Page`` (or ``MdxPage``/``MarkdownPage``),
    ``Folder`` or ``Meta``. Implausible nodes are skipped with a warning.

    Args:
        data: Decoded JSON page map (list of node objects)
        max_depth: Maximum folder nesting depth

    Returns:
        Tuple of root content nodes

    Raises:
        MalformedTreeError: If children reference each other cyclically
            or nesting exceeds max_depth
    """
    if not isinstance(data, list):
        logger.warning(f"Page map must be a list of nodes, got {type(data).__name__}")
        return ()
    return _parse_nodes(data, "/", 0, max_depth, set())


def _parse_nodes(
    items: list[Any],
    parent_route: str,
    depth: int,
    max_depth: int,
    seen: set[int],
) -> tuple[ContentNode, ...]:
    if depth > max_depth:
        raise MalformedTreeError(f"Page map nested deeper than {max_depth} levels")
    if id(items) in seen:
        raise MalformedTreeError(f"Cyclic children reference under {parent_route}")

    seen.add(id(items))
    nodes: list[ContentNode] = []
    for item in items:
        node = _parse_node(item, parent_route, depth, max_depth, seen)
        if node is not None:
            nodes.append(node)
    seen.discard(id(items))
    return tuple(nodes)


def _parse_node(
    item: object,
    parent_route: str,
    depth: int,
    max_depth: int,
    seen: set[int],
) -> ContentNode | None:
    if not isinstance(item, Mapping):
        logger.warning(f"Skipping non-object node under {parent_route}")
        return None

    kind = item.get("kind")
    locale = item.get("locale")
    if not isinstance(locale, str) or not locale:
        locale = None

    if kind == "Meta":
        return _parse_meta(item.get("data"), locale)

    if not isinstance(kind, str) or (kind not in _PAGE_KINDS and kind != "Folder"):
        logger.warning(f"Skipping node of unknown kind {kind!r} under {parent_route}")
        return None

    name, route = _name_and_route(item, parent_route)
    if name is None or route is None:
        logger.warning(f"Skipping {kind} without name or route under {parent_route}")
        return None

    if kind == "Folder":
        raw_children = item.get("children")
        if not isinstance(raw_children, list):
            if raw_children is not None:
                logger.warning(f"Folder {route} children is not a list, ignoring")
            raw_children = []
        children = _parse_nodes(raw_children, route, depth + 1, max_depth, seen)
        return Folder(name=name, route=route, children=children, locale=locale)

    front_matter = item.get("frontMatter")
    if not isinstance(front_matter, Mapping):
        front_matter = {}
    return Page(
        name=name,
        route=route,
        front_matter=MappingProxyType(dict(front_matter)),
        locale=locale,
    )


def _parse_meta(data: object, locale: str | None) -> MetaRecord | None:
    if not isinstance(data, Mapping):
        logger.warning("Skipping meta record without a data object")
        return None
    return MetaRecord.from_mapping(data, locale)


def _name_and_route(
    item: Mapping[str, Any],
    parent_route: str,
) -> tuple[str | None, str | None]:
    name = item.get("name")
    route = item.get("route")
    if not isinstance(name, str) or not name:
        name = None
    if not isinstance(route, str) or not route:
        route = None

    if route is None and name is not None:
        route = f"{parent_route.rstrip('/')}/{name}"
    if name is None and route is not None:
        name = route.rstrip("/").rsplit("/", 1)[-1] or "index"
    return name, route
