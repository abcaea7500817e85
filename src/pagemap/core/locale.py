"""Locale resolution.

Selects per-locale variants of content nodes and maps request routes to
the locale-independent routes stored in the page map.
"""

from collections.abc import Iterable, Sequence
from typing import TypeVar

from pagemap.core.tree import (
    DEFAULT_MAX_DEPTH,
    ContentNode,
    Folder,
    MalformedTreeError,
    MetaRecord,
    Page,
)
from pagemap.core.types import URLPath

T = TypeVar("T", Page, Folder, MetaRecord)


def get_fs_route(
    route: str,
    locale: str | None = None,
    locales: Iterable[str] = (),
) -> URLPath:
    """Strip request decorations from a route.

    Removes the query string and fragment, a leading locale segment
    (the requested locale or any configured one) and a trailing
    ``/index`` or slash.

    Args:
        route: Request route (e.g., "/fr/docs/index?x=1")
        locale: Requested locale
        locales: All configured locales

    Returns:
        Locale-independent route (e.g., "/docs")
    """
    path = route.split("#", 1)[0].split("?", 1)[0]
    segments = [segment for segment in path.split("/") if segment]

    known = {code for code in (locale, *locales) if code}
    if segments and segments[0] in known:
        segments = segments[1:]
    if segments and locale and segments[-1].endswith(f".{locale}"):
        segments[-1] = segments[-1][: -len(locale) - 1]
    if segments and segments[-1] == "index":
        segments.pop()

    return URLPath("/" + "/".join(segments))


def select_variant(
    variants: Sequence[T],
    locale: str | None,
    default_locale: str | None,
) -> T | None:
    """Pick the best variant of a node for the requested locale.

    Preference order: the requested locale, the default locale, a
    locale-neutral variant. Without any locale information the first
    variant is used.

    Returns:
        Selected variant, or None when the node doesn't exist for the locale
    """
    for wanted in (locale, default_locale):
        if wanted is None:
            continue
        for variant in variants:
            if variant.locale == wanted:
                return variant

    for variant in variants:
        if variant.locale is None:
            return variant

    if locale is None and default_locale is None and variants:
        return variants[0]
    return None


def filter_locale(
    nodes: Sequence[ContentNode],
    locale: str | None,
    default_locale: str | None,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> tuple[ContentNode, ...]:
    """Resolve every node of a tree to a single locale variant.

    Returns a new tree. Sibling order follows the first appearance of
    each slug; a folder keeps at most one meta record.

    Raises:
        MalformedTreeError: If nesting exceeds max_depth
    """
    return _filter_level(nodes, locale, default_locale, 0, max_depth)


def _filter_level(
    nodes: Sequence[ContentNode],
    locale: str | None,
    default_locale: str | None,
    depth: int,
    max_depth: int,
) -> tuple[ContentNode, ...]:
    if depth > max_depth:
        raise MalformedTreeError(f"Content tree nested deeper than {max_depth} levels")

    groups: dict[tuple[str, str], list[ContentNode]] = {}
    for node in nodes:
        if isinstance(node, MetaRecord):
            key = ("meta", "")
        elif isinstance(node, Folder):
            key = ("folder", node.name)
        else:
            key = ("page", node.name)
        groups.setdefault(key, []).append(node)

    result: list[ContentNode] = []
    for variants in groups.values():
        selected = select_variant(variants, locale, default_locale)
        if selected is None:
            continue
        if isinstance(selected, Folder):
            children = _filter_level(
                selected.children,
                locale,
                default_locale,
                depth + 1,
                max_depth,
            )
            selected = Folder(
                name=selected.name,
                route=selected.route,
                children=children,
                locale=selected.locale,
            )
        result.append(selected)
    return tuple(result)
