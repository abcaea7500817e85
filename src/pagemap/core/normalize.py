"""Page map normalization.

Turns the raw content tree and a requested route into the structures the
rendering layer needs: the ordered navigation tree, its flattened views
and the active page resolution.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, TypedDict

from pagemap.core.locale import filter_locale, get_fs_route
from pagemap.core.meta import ResolvedEntry, resolve_level
from pagemap.core.routes import is_route_prefix, normalize_route
from pagemap.core.theme import DEFAULT_THEME, ThemeContext
from pagemap.core.tree import (
    DEFAULT_MAX_DEPTH,
    ContentNode,
    Folder,
    MalformedTreeError,
)

_TOP_LEVEL_TYPES = frozenset({"page", "menu"})


class NormalizedItemDict(TypedDict, total=False):
    """Dictionary representation of a normalized item."""

    name: str
    route: str
    title: str | None
    type: str
    children: list[NormalizedItemDict]
    hidden: bool
    expanded: bool
    firstChildRoute: str
    frontMatter: dict[str, Any]
    href: str
    newWindow: bool
    withIndexPage: bool


@dataclass
class NormalizedItem:
    """Item of the normalized navigation tree."""

    name: str
    route: str
    title: str | None
    type: str
    children: list[NormalizedItem] = field(default_factory=list)
    hidden: bool = False
    expanded: bool = False
    first_child_route: str | None = None

    @property
    def is_navigable(self) -> bool:
        """Item is an internal page that pagination can land on."""
        return False

    def to_dict(self) -> NormalizedItemDict:
        """Convert to dictionary for JSON serialization."""
        result: NormalizedItemDict = {
            "name": self.name,
            "route": self.route,
            "title": self.title,
            "type": self.type,
        }
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        if self.hidden:
            result["hidden"] = True
        if self.expanded:
            result["expanded"] = True
        if self.first_child_route is not None:
            result["firstChildRoute"] = self.first_child_route
        return result


@dataclass
class PageItem(NormalizedItem):
    """Navigable item: a page, a folder with an index page, or a link."""

    front_matter: Mapping[str, Any] = field(default_factory=dict)
    href: str | None = None
    new_window: bool = False
    with_index_page: bool = False

    @property
    def is_link(self) -> bool:
        """Item points at an href instead of a page of its own."""
        return self.href is not None and not self.with_index_page

    @property
    def is_navigable(self) -> bool:
        return not self.is_link

    def to_dict(self) -> NormalizedItemDict:
        result = super().to_dict()
        if self.front_matter:
            result["frontMatter"] = dict(self.front_matter)
        if self.href is not None:
            result["href"] = self.href
        if self.new_window:
            result["newWindow"] = True
        if self.with_index_page:
            result["withIndexPage"] = True
        return result


@dataclass
class MenuItem(NormalizedItem):
    """Folder without a page of its own."""


@dataclass
class SeparatorItem(NormalizedItem):
    """Non-navigable divider."""


class NormalizedPagesDict(TypedDict):
    """Dictionary representation of normalization results."""

    directories: list[NormalizedItemDict]
    flatDirectories: list[NormalizedItemDict]
    docsDirectories: list[NormalizedItemDict]
    flatDocsDirectories: list[NormalizedItemDict]
    topLevelPageItems: list[NormalizedItemDict]
    activeType: str
    activeIndex: int
    activeThemeContext: dict[str, bool | str]
    activePath: list[str]
    redirectRoute: str | None


@dataclass
class NormalizedPages:
    """Navigation structures for one (route, locale) request."""

    directories: list[NormalizedItem]
    flat_directories: list[NormalizedItem]
    docs_directories: list[NormalizedItem]
    flat_docs_directories: list[NormalizedItem]
    top_level_page_items: list[NormalizedItem]
    active_type: str = "doc"
    active_index: int = -1
    active_theme_context: ThemeContext = DEFAULT_THEME
    active_path: list[NormalizedItem] = field(default_factory=list)
    redirect_route: str | None = None

    def to_dict(self) -> NormalizedPagesDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "directories": _dump(self.directories),
            "flatDirectories": _dump(self.flat_directories, nested=False),
            "docsDirectories": _dump(self.docs_directories),
            "flatDocsDirectories": _dump(self.flat_docs_directories, nested=False),
            "topLevelPageItems": _dump(self.top_level_page_items),
            "activeType": self.active_type,
            "activeIndex": self.active_index,
            "activeThemeContext": self.active_theme_context.to_dict(),
            "activePath": [item.route for item in self.active_path],
            "redirectRoute": self.redirect_route,
        }


def _dump(
    items: Sequence[NormalizedItem],
    *,
    nested: bool = True,
) -> list[NormalizedItemDict]:
    result = []
    for item in items:
        data = item.to_dict()
        if not nested:
            data.pop("children", None)
        result.append(data)
    return result


@dataclass
class _Walk:
    """Result of normalizing one level."""

    directories: list[NormalizedItem] = field(default_factory=list)
    chain: list[NormalizedItem] = field(default_factory=list)
    themes: list[ThemeContext] = field(default_factory=list)
    exact: bool = False


def normalize_pages(
    nodes: Sequence[ContentNode],
    route: str,
    *,
    locale: str | None = None,
    default_locale: str | None = None,
    locales: Iterable[str] = (),
    theme: ThemeContext = DEFAULT_THEME,
    default_menu_collapsed: bool | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> NormalizedPages:
    """Normalize a page map for the requested route.

    Args:
        nodes: Root nodes of the raw content tree
        route: Requested route, may carry a locale prefix
        locale: Requested locale
        default_locale: Locale used when a node has no variant for locale
        locales: All configured locales (stripped from route prefixes)
        theme: Site-wide theme defaults
        default_menu_collapsed: Whether folders start collapsed
        max_depth: Maximum folder nesting depth

    Returns:
        NormalizedPages with the navigation views and active resolution

    Raises:
        MalformedTreeError: If nesting exceeds max_depth
    """
    fs_route = get_fs_route(route, locale, locales)
    filtered = filter_locale(nodes, locale, default_locale, max_depth=max_depth)

    root_theme = theme
    if default_menu_collapsed is not None:
        root_theme = theme.merge(ThemeContext(collapsed=default_menu_collapsed))

    walk = _walk(filtered, None, fs_route, root_theme, 0, max_depth)

    for item in walk.chain:
        if item.children:
            item.expanded = True

    directories = walk.directories
    docs_directories = _docs_view(directories)
    flat_directories = list(_flatten(directories))
    flat_docs_directories = [
        item for item in _flatten(docs_directories) if item.type == "doc"
    ]
    top_level_page_items = [
        item
        for item in directories
        if item.type in _TOP_LEVEL_TYPES and not item.hidden
    ]

    result = NormalizedPages(
        directories=directories,
        flat_directories=flat_directories,
        docs_directories=docs_directories,
        flat_docs_directories=flat_docs_directories,
        top_level_page_items=top_level_page_items,
        active_theme_context=walk.themes[-1] if walk.themes else root_theme,
        active_path=walk.chain,
    )
    if not walk.exact:
        return result

    active = walk.chain[-1]
    result.active_type = "page" if active.type in _TOP_LEVEL_TYPES else "doc"
    if not any(item.hidden for item in walk.chain):
        result.active_index = next(
            (
                i
                for i, item in enumerate(flat_docs_directories)
                if normalize_route(item.route) == fs_route
            ),
            -1,
        )
    if isinstance(active, MenuItem):
        result.redirect_route = active.first_child_route
    return result


def _walk(
    nodes: Sequence[ContentNode],
    parent_route: str | None,
    route: str,
    theme: ThemeContext,
    depth: int,
    max_depth: int,
) -> _Walk:
    if depth > max_depth:
        raise MalformedTreeError(f"Content tree nested deeper than {max_depth} levels")

    level = resolve_level(nodes, parent_route)
    result = _Walk()

    for entry in level.entries:
        entry_theme = theme.merge(entry.theme)

        if entry.is_separator:
            result.directories.append(
                SeparatorItem(
                    name=entry.name,
                    route="",
                    title=entry.title,
                    type=entry.type,
                    hidden=entry.hidden,
                ),
            )
            continue

        sub: _Walk | None = None
        if isinstance(entry.node, Folder):
            sub = _walk(
                entry.node.children,
                entry.node.route,
                route,
                entry_theme,
                depth + 1,
                max_depth,
            )

        item = _build_item(entry, sub.directories if sub is not None else None)
        result.directories.append(item)

        if result.exact:
            continue

        # Exact matches win over partial chains, deeper chains over shallower
        if not _is_link(item) and normalize_route(item.route) == route:
            chain = [item]
            themes = [entry_theme]
            exact = True
        elif sub is not None and is_route_prefix(item.route, route):
            chain = [item, *sub.chain]
            themes = [entry_theme, *sub.themes]
            exact = sub.exact
        else:
            continue

        if exact or len(chain) > len(result.chain):
            result.chain = chain
            result.themes = themes
            result.exact = exact

    return result


def _build_item(
    entry: ResolvedEntry,
    children: list[NormalizedItem] | None,
) -> NormalizedItem:
    common: dict[str, Any] = {
        "name": entry.name,
        "route": entry.route,
        "title": entry.title,
        "type": entry.type,
        "hidden": entry.hidden,
    }

    if children is None:
        return PageItem(
            **common,
            front_matter=entry.front_matter,
            href=entry.href,
            new_window=entry.new_window,
        )

    first_child = next(_flatten(children), None)
    common["children"] = children
    common["first_child_route"] = first_child.route if first_child is not None else None

    if entry.index_page is not None or entry.href is not None:
        return PageItem(
            **common,
            front_matter=entry.front_matter,
            href=entry.href,
            new_window=entry.new_window,
            with_index_page=entry.index_page is not None,
        )
    return MenuItem(**common)


def _flatten(items: Iterable[NormalizedItem]) -> Iterable[NormalizedItem]:
    """Yield navigable items in pre-order, skipping hidden subtrees."""
    for item in items:
        if item.hidden or isinstance(item, SeparatorItem):
            continue
        if item.is_navigable:
            yield item
        yield from _flatten(item.children)


def _docs_view(items: Sequence[NormalizedItem]) -> list[NormalizedItem]:
    """Filter the tree down to the documentation sidebar.

    Top-level style ``page`` items are dropped and their documentation
    children take their place.
    """
    result: list[NormalizedItem] = []
    for item in items:
        if item.hidden:
            continue
        children = _docs_view(item.children)
        if item.type == "page":
            result.extend(children)
        else:
            result.append(replace(item, children=children))
    return result


def _is_link(item: NormalizedItem) -> bool:
    return isinstance(item, PageItem) and item.is_link
