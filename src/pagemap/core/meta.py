"""Meta record resolution.

Merges a folder's meta record with its children: effective ordering,
titles, item types, visibility and theme overrides. Operates on one
locale-filtered level of the content tree at a time.
"""

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pagemap.core.theme import ThemeContext
from pagemap.core.tree import (
    WILDCARD,
    ContentNode,
    Folder,
    MetaEntry,
    MetaRecord,
    Page,
)

logger = logging.getLogger(__name__)

DEFAULT_TYPE = "doc"
HIDDEN = "hidden"

_SLUG_SEPARATORS = re.compile(r"[-_\s]+")
_NO_FRONT_MATTER: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class ResolvedEntry:
    """One child of a folder with its overrides applied."""

    name: str
    route: str
    title: str | None
    type: str
    hidden: bool = False
    theme: ThemeContext = field(default_factory=ThemeContext)
    node: Page | Folder | None = None
    index_page: Page | None = None
    href: str | None = None
    new_window: bool = False

    @property
    def front_matter(self) -> Mapping[str, Any]:
        """Front matter of the page behind this entry, if any."""
        if isinstance(self.node, Page):
            return self.node.front_matter
        if self.index_page is not None:
            return self.index_page.front_matter
        return _NO_FRONT_MATTER

    @property
    def is_separator(self) -> bool:
        return self.type == "separator"

    @property
    def is_link(self) -> bool:
        """Entry navigates to an href instead of a page of its own."""
        return self.href is not None and self.index_page is None


@dataclass(frozen=True)
class ResolvedLevel:
    """Ordered entries of one folder plus the page folded into the folder."""

    entries: tuple[ResolvedEntry, ...]
    index_page: Page | None = None


def title_from_slug(slug: str) -> str:
    """Derive a display title from a slug.

    Example: "getting-started" -> "Getting Started"
    """
    words = [word for word in _SLUG_SEPARATORS.split(slug) if word]
    if not words:
        return slug
    return " ".join(word[:1].upper() + word[1:] for word in words)


def find_meta(nodes: Sequence[ContentNode]) -> MetaRecord | None:
    """Return the meta record of a locale-filtered level."""
    for node in nodes:
        if isinstance(node, MetaRecord):
            return node
    return None


def find_index_page(folder: Folder) -> Page | None:
    """Return the child page routed at the folder's own route."""
    for node in folder.children:
        if isinstance(node, Page) and node.route == folder.route:
            return node
    return None


def resolve_level(
    nodes: Sequence[ContentNode],
    parent_route: str | None = None,
) -> ResolvedLevel:
    """Resolve the children of one folder.

    Children mentioned in the meta record come first in record order.
    Unmentioned children keep their original relative order and go to
    the wildcard position, or to the end when there is no wildcard.

    Args:
        nodes: Locale-filtered sibling nodes (including the meta record)
        parent_route: Route of the containing folder, None at the root

    Returns:
        ResolvedLevel with ordered entries and the folded index page
    """
    meta = find_meta(nodes)
    children = [
        node
        for node in nodes
        if not isinstance(node, MetaRecord) and not node.name.startswith("_")
    ]

    level_index: Page | None = None
    if parent_route is not None:
        for child in children:
            if isinstance(child, Page) and child.route == parent_route:
                level_index = child
                break
        if level_index is not None:
            children.remove(level_index)

    paired = _pair_folder_pages(children)
    children = [child for child in children if not _is_paired(child, paired)]

    entries = [
        _resolve_entry(name, node, meta, paired)
        for name, node in _order(children, meta)
    ]
    return ResolvedLevel(entries=tuple(entries), index_page=level_index)


def _pair_folder_pages(children: list[Page | Folder]) -> dict[str, Page]:
    # A page sharing name and route with a sibling folder is that folder's page
    folders = {
        child.name: child for child in children if isinstance(child, Folder)
    }
    paired: dict[str, Page] = {}
    for child in children:
        if not isinstance(child, Page):
            continue
        folder = folders.get(child.name)
        if folder is not None and folder.route == child.route:
            paired[child.name] = child
    return paired


def _is_paired(child: Page | Folder, paired: dict[str, Page]) -> bool:
    return isinstance(child, Page) and paired.get(child.name) is child


def _order(
    children: list[Page | Folder],
    meta: MetaRecord | None,
) -> list[tuple[str, Page | Folder | None]]:
    if meta is None:
        return [(child.name, child) for child in children]

    keys = meta.keys
    by_name: dict[str, list[Page | Folder]] = {}
    for child in children:
        by_name.setdefault(child.name, []).append(child)
    unmentioned = [child for child in children if child.name not in meta.entries]

    ordered: list[tuple[str, Page | Folder | None]] = []
    wildcard_placed = False
    for key in keys:
        if key == WILDCARD:
            ordered.extend((child.name, child) for child in unmentioned)
            wildcard_placed = True
        elif key in by_name:
            ordered.extend((key, child) for child in by_name[key])
        elif _is_synthetic(meta.entries[key]):
            ordered.append((key, None))
        else:
            logger.debug(f"Ignoring meta key {key!r} with no matching child")

    if not wildcard_placed:
        ordered.extend((child.name, child) for child in unmentioned)
    return ordered


def _is_synthetic(entry: MetaEntry) -> bool:
    return entry.type == "separator" or entry.href is not None


def _resolve_entry(
    name: str,
    node: Page | Folder | None,
    meta: MetaRecord | None,
    paired: dict[str, Page],
) -> ResolvedEntry:
    entry = meta.get(name) if meta is not None else None
    wildcard = meta.wildcard if meta is not None else None

    index_page: Page | None = None
    if isinstance(node, Folder):
        index_page = paired.get(name) or find_index_page(node)

    if isinstance(node, Page):
        front_matter = node.front_matter
    elif index_page is not None:
        front_matter = index_page.front_matter
    else:
        front_matter = _NO_FRONT_MATTER

    item_type = (
        (entry.type if entry is not None else None)
        or (wildcard.type if wildcard is not None else None)
        or DEFAULT_TYPE
    )

    display = entry.display if entry is not None else None
    if display is None:
        front_display = front_matter.get("display")
        display = front_display if isinstance(front_display, str) else None
    if display is None and wildcard is not None:
        display = wildcard.display

    # Meta record overrides beat front matter, which beats the wildcard defaults
    theme = ThemeContext()
    if wildcard is not None:
        theme = theme.merge(wildcard.theme)
    theme = theme.merge(ThemeContext.from_front_matter(front_matter))
    if entry is not None:
        theme = theme.merge(entry.theme)

    if node is not None:
        route = node.route
    elif entry is not None and entry.href is not None:
        route = entry.href
    else:
        route = ""

    return ResolvedEntry(
        name=name,
        route=route,
        title=_resolve_title(name, item_type, entry, front_matter),
        type=item_type,
        hidden=display == HIDDEN,
        theme=theme,
        node=node,
        index_page=index_page,
        href=entry.href if entry is not None else None,
        new_window=entry.new_window if entry is not None else False,
    )


def _resolve_title(
    name: str,
    item_type: str,
    entry: MetaEntry | None,
    front_matter: Mapping[str, Any],
) -> str | None:
    if entry is not None and entry.title:
        return entry.title
    front_title = front_matter.get("title")
    if isinstance(front_title, str) and front_title:
        return front_title
    if item_type == "separator":
        return None
    return title_from_slug(name)
