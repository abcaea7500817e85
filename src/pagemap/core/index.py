"""Page index snapshots.

A PageIndex is an immutable snapshot of the raw content tree together
with the site settings needed to interpret it. PageIndexStore holds the
current snapshot for long-running processes; readers grab ``current``
once and keep working with that snapshot.
"""

from dataclasses import dataclass, field

from pagemap.core.normalize import NormalizedPages, normalize_pages
from pagemap.core.theme import DEFAULT_THEME, ThemeContext
from pagemap.core.tree import DEFAULT_MAX_DEPTH, ContentNode


@dataclass(frozen=True)
class PageIndex:
    """Snapshot of a collected page map."""

    nodes: tuple[ContentNode, ...] = ()
    default_locale: str | None = None
    locales: tuple[str, ...] = ()
    theme: ThemeContext = field(default=DEFAULT_THEME)
    default_menu_collapsed: bool | None = None
    max_depth: int = DEFAULT_MAX_DEPTH

    def resolve_locale(self, locale: str | None) -> str | None:
        """Return the requested locale, falling back to the default."""
        return locale or self.default_locale

    def normalize(self, route: str, locale: str | None = None) -> NormalizedPages:
        """Normalize this snapshot for a request.

        Args:
            route: Requested route
            locale: Requested locale (default locale if omitted)

        Returns:
            NormalizedPages for the route
        """
        return normalize_pages(
            self.nodes,
            route,
            locale=self.resolve_locale(locale),
            default_locale=self.default_locale,
            locales=self.locales,
            theme=self.theme,
            default_menu_collapsed=self.default_menu_collapsed,
            max_depth=self.max_depth,
        )


class PageIndexStore:
    """Holder of the current PageIndex.

    Updates replace the whole snapshot in one attribute assignment, so
    concurrent readers see either the old or the new index.
    """

    __slots__ = ("_current",)

    def __init__(self, index: PageIndex | None = None) -> None:
        self._current = index if index is not None else PageIndex()

    @property
    def current(self) -> PageIndex:
        """Current snapshot."""
        return self._current

    def replace(self, index: PageIndex) -> None:
        """Swap in a new snapshot.

        Args:
            index: Snapshot that becomes current
        """
        self._current = index
