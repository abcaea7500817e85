"""Page map loading.

Reads the JSON page map written by the content collector and turns it
into a PageIndex snapshot. The file holds either a bare list of nodes or
an object with a ``pageMap`` list and optional site settings.
"""

import json
import logging
from pathlib import Path

from pagemap.core.index import PageIndex
from pagemap.core.theme import DEFAULT_THEME, ThemeContext
from pagemap.core.tree import DEFAULT_MAX_DEPTH, parse_page_map

logger = logging.getLogger(__name__)


class PageMapLoader:
    """Loads PageIndex snapshots from a page map file.

    Settings passed to the loader take precedence over the settings
    stored in the file.
    """

    def __init__(
        self,
        source: Path,
        *,
        default_locale: str | None = None,
        locales: list[str] | None = None,
        theme: ThemeContext | None = None,
        default_menu_collapsed: bool | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        """Initialize loader.

        Args:
            source: Path to the page map JSON file
            default_locale: Fallback locale for nodes without a variant
            locales: All site locales
            theme: Site-wide theme overrides applied over the defaults
            default_menu_collapsed: Whether folders start collapsed
            max_depth: Maximum folder nesting depth
        """
        self._source = source
        self._default_locale = default_locale
        self._locales = locales
        self._theme = theme
        self._default_menu_collapsed = default_menu_collapsed
        self._max_depth = max_depth

    @property
    def source(self) -> Path:
        """Page map file path."""
        return self._source

    def load(self) -> PageIndex:
        """Read the page map file into a new snapshot.

        Returns:
            PageIndex built from the file

        Raises:
            FileNotFoundError: If the page map file doesn't exist
            ValueError: If the file is not valid JSON
            MalformedTreeError: If the tree is cyclic or too deep
        """
        if not self._source.exists():
            raise FileNotFoundError(f"Page map not found: {self._source}")

        try:
            data = json.loads(self._source.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid page map JSON in {self._source}: {e}") from e

        settings: dict[str, object] = {}
        if isinstance(data, dict):
            settings = data
            data = data.get("pageMap", [])

        nodes = parse_page_map(data, max_depth=self._max_depth)
        logger.info(f"Loaded {len(nodes)} root nodes from {self._source}")

        default_locale = self._default_locale or _str_or_none(
            settings.get("defaultLocale"),
        )
        locales = self._locales or _str_list(settings.get("locales"))

        return PageIndex(
            nodes=nodes,
            default_locale=default_locale,
            locales=tuple(locales),
            theme=self._site_theme(settings.get("theme")),
            default_menu_collapsed=self._menu_collapsed(
                settings.get("defaultMenuCollapsed"),
            ),
            max_depth=self._max_depth,
        )

    def _site_theme(self, file_theme: object) -> ThemeContext:
        theme = DEFAULT_THEME.merge(ThemeContext.from_mapping(file_theme))
        if self._theme is not None:
            theme = theme.merge(self._theme)
        return theme

    def _menu_collapsed(self, file_value: object) -> bool | None:
        if self._default_menu_collapsed is not None:
            return self._default_menu_collapsed
        return file_value if isinstance(file_value, bool) else None


def _str_or_none(value: object) -> str | None:
    return value if isinstance(value, str) and value else None


def _str_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]
