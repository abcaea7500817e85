"""Page queries over a page index.

Stateless lookups for application code that needs slices of the page
map outside of a request's active route resolution. Every function
takes the PageIndex snapshot to read explicitly.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypedDict

from pagemap.core.index import PageIndex
from pagemap.core.locale import filter_locale, get_fs_route
from pagemap.core.meta import ResolvedEntry, ResolvedLevel, resolve_level
from pagemap.core.routes import is_route_prefix, normalize_route
from pagemap.core.tree import ContentNode, Folder, MalformedTreeError, Page


class PageSummaryDict(TypedDict, total=False):
    """Dictionary representation of a page summary."""

    route: str
    title: str | None
    frontMatter: dict[str, Any]
    children: list[PageSummaryDict]


@dataclass(frozen=True)
class PageSummary:
    """Route, title and front matter of a page."""

    route: str
    title: str | None
    front_matter: Mapping[str, Any] = field(default_factory=dict)
    children: tuple[PageSummary, ...] = ()

    def to_dict(self) -> PageSummaryDict:
        """Convert to dictionary for JSON serialization."""
        result: PageSummaryDict = {
            "route": self.route,
            "title": self.title,
            "frontMatter": dict(self.front_matter),
        }
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


def get_all_pages(
    index: PageIndex,
    locale: str | None = None,
) -> tuple[PageSummary, ...]:
    """List every visible page in navigation order.

    A folder's index page stands at the folder's position, ahead of the
    folder's other pages. Hidden pages and their subtrees are left out.

    Args:
        index: Page index snapshot
        locale: Requested locale (default locale if omitted)

    Returns:
        Tuple of PageSummary in pre-order
    """
    nodes = _filtered(index, locale)
    return tuple(_pages(nodes, None, 0, index.max_depth))


def get_current_level_pages(
    index: PageIndex,
    route: str,
    locale: str | None = None,
) -> tuple[PageSummary, ...]:
    """List the pages on the same level as the node at route.

    Folders on that level are summarized with their own pages as
    children.

    Args:
        index: Page index snapshot
        route: Route of the current page
        locale: Requested locale (default locale if omitted)

    Returns:
        Tuple of PageSummary in navigation order, empty if no node matches
    """
    nodes = _filtered(index, locale)
    target = get_fs_route(route, index.resolve_locale(locale), index.locales)
    level = _find_level(nodes, None, target, 0, index.max_depth)
    if level is None:
        return ()

    summaries: list[PageSummary] = []
    for entry in level.entries:
        if not _is_listed(entry):
            continue
        if isinstance(entry.node, Folder):
            children = tuple(
                _pages(entry.node.children, entry.node.route, 1, index.max_depth),
            )
            summaries.append(_summary(entry, children))
        elif isinstance(entry.node, Page):
            summaries.append(_summary(entry))
    return tuple(summaries)


def get_pages_under_route(
    index: PageIndex,
    route: str,
    locale: str | None = None,
) -> tuple[PageSummary, ...]:
    """List the visible pages at or below route.

    Prefix matching is segment-aware: "/docs" covers "/docs/advanced"
    but not "/docset/x".

    Args:
        index: Page index snapshot
        route: Route prefix
        locale: Requested locale (default locale if omitted)

    Returns:
        Tuple of PageSummary in navigation order, empty if nothing matches
    """
    prefix = get_fs_route(route, index.resolve_locale(locale), index.locales)
    return tuple(
        page
        for page in get_all_pages(index, locale)
        if is_route_prefix(prefix, page.route)
    )


def _filtered(index: PageIndex, locale: str | None) -> tuple[ContentNode, ...]:
    return filter_locale(
        index.nodes,
        index.resolve_locale(locale),
        index.default_locale,
        max_depth=index.max_depth,
    )


def _is_listed(entry: ResolvedEntry) -> bool:
    return not entry.hidden and not entry.is_separator and entry.node is not None


def _summary(
    entry: ResolvedEntry,
    children: tuple[PageSummary, ...] = (),
) -> PageSummary:
    return PageSummary(
        route=entry.route,
        title=entry.title,
        front_matter=entry.front_matter,
        children=children,
    )


def _pages(
    nodes: Sequence[ContentNode],
    parent_route: str | None,
    depth: int,
    max_depth: int,
) -> Iterator[PageSummary]:
    if depth > max_depth:
        raise MalformedTreeError(f"Content tree nested deeper than {max_depth} levels")

    for entry in resolve_level(nodes, parent_route).entries:
        if not _is_listed(entry):
            continue
        if isinstance(entry.node, Folder):
            if entry.index_page is not None:
                yield _summary(entry)
            yield from _pages(
                entry.node.children,
                entry.node.route,
                depth + 1,
                max_depth,
            )
        elif not entry.is_link:
            yield _summary(entry)


def _find_level(
    nodes: Sequence[ContentNode],
    parent_route: str | None,
    route: str,
    depth: int,
    max_depth: int,
) -> ResolvedLevel | None:
    if depth > max_depth:
        raise MalformedTreeError(f"Content tree nested deeper than {max_depth} levels")

    level = resolve_level(nodes, parent_route)
    for entry in level.entries:
        if entry.node is None:
            continue
        if normalize_route(entry.node.route) == route:
            return level
        if isinstance(entry.node, Folder):
            found = _find_level(
                entry.node.children,
                entry.node.route,
                route,
                depth + 1,
                max_depth,
            )
            if found is not None:
                return found
    return None
