"""Navigation data for documentation sites.

Turns a collected content tree into ordered, locale-aware sidebar,
navbar and pagination views, and answers page queries over it.
"""

from pagemap.core.index import PageIndex, PageIndexStore
from pagemap.core.locale import get_fs_route
from pagemap.core.normalize import (
    MenuItem,
    NormalizedItem,
    NormalizedPages,
    PageItem,
    SeparatorItem,
    normalize_pages,
)
from pagemap.core.query import (
    PageSummary,
    get_all_pages,
    get_current_level_pages,
    get_pages_under_route,
)
from pagemap.core.theme import DEFAULT_THEME, ThemeContext
from pagemap.core.tree import (
    Folder,
    MalformedTreeError,
    MetaEntry,
    MetaRecord,
    Page,
    parse_page_map,
)

__all__ = [
    "DEFAULT_THEME",
    "Folder",
    "MalformedTreeError",
    "MenuItem",
    "MetaEntry",
    "MetaRecord",
    "NormalizedItem",
    "NormalizedPages",
    "Page",
    "PageIndex",
    "PageIndexStore",
    "PageItem",
    "PageSummary",
    "SeparatorItem",
    "ThemeContext",
    "get_all_pages",
    "get_current_level_pages",
    "get_fs_route",
    "get_pages_under_route",
    "normalize_pages",
    "parse_page_map",
]
