"""Tests for meta record resolution."""

from pagemap.core.meta import resolve_level, title_from_slug
from pagemap.core.theme import ThemeContext
from pagemap.core.tree import Folder, MetaRecord, Page


def _names(nodes, parent_route=None) -> list[str]:
    return [entry.name for entry in resolve_level(nodes, parent_route).entries]


class TestOrdering:
    """Tests for meta-driven child ordering."""

    def test__no_meta__keeps_original_order(self) -> None:
        """Children keep their order without a meta record."""
        nodes = (Page("b", "/b"), Page("a", "/a"))

        assert _names(nodes) == ["b", "a"]

    def test__meta_keys__come_first(self) -> None:
        """Mentioned children first in record order, the rest appended."""
        nodes = (
            MetaRecord.from_mapping({"b": {}, "a": {}}),
            Page("a", "/a"),
            Page("b", "/b"),
            Page("c", "/c"),
        )

        assert _names(nodes) == ["b", "a", "c"]

    def test__wildcard__places_unmentioned_children(self) -> None:
        """Unmentioned children go to the wildcard position in raw order."""
        nodes = (
            MetaRecord.from_mapping({"a": {}, "*": {}, "c": {}}),
            Page("a", "/a"),
            Page("b", "/b"),
            Page("c", "/c"),
            Page("d", "/d"),
        )

        assert _names(nodes) == ["a", "b", "d", "c"]

    def test__unknown_meta_key__is_ignored(self) -> None:
        """Keys without a child produce no entry."""
        nodes = (MetaRecord.from_mapping({"ghost": "Ghost"}), Page("a", "/a"))

        assert _names(nodes) == ["a"]

    def test__private_children__are_skipped(self) -> None:
        """Names starting with an underscore are not navigation items."""
        nodes = (Page("_app", "/_app"), Page("a", "/a"))

        assert _names(nodes) == ["a"]


class TestEntries:
    """Tests for per-entry resolution."""

    def test__title__meta_beats_front_matter(self) -> None:
        """Meta title wins over the front matter title."""
        nodes = (
            MetaRecord.from_mapping({"a": "From Meta"}),
            Page("a", "/a", front_matter={"title": "From Page"}),
        )

        assert resolve_level(nodes).entries[0].title == "From Meta"

    def test__title__front_matter_beats_slug(self) -> None:
        """Front matter title wins over the slug."""
        nodes = (Page("a", "/a", front_matter={"title": "From Page"}),)

        assert resolve_level(nodes).entries[0].title == "From Page"

    def test__title__falls_back_to_slug(self) -> None:
        """Derive the title from the slug."""
        nodes = (Page("getting-started", "/getting-started"),)

        assert resolve_level(nodes).entries[0].title == "Getting Started"

    def test__type__defaults_to_doc(self) -> None:
        """Entries without a declared type are docs."""
        entry = resolve_level((Page("a", "/a"),)).entries[0]

        assert entry.type == "doc"

    def test__wildcard__supplies_defaults(self) -> None:
        """The wildcard entry provides type and theme defaults."""
        nodes = (
            MetaRecord.from_mapping({"*": {"type": "page", "theme": {"toc": False}}}),
            Page("a", "/a"),
        )

        entry = resolve_level(nodes).entries[0]

        assert entry.type == "page"
        assert entry.theme == ThemeContext(toc=False)
        assert entry.title == "A"

    def test__display_hidden__from_front_matter(self) -> None:
        """Front matter can hide a page."""
        nodes = (Page("a", "/a", front_matter={"display": "hidden"}),)

        assert resolve_level(nodes).entries[0].hidden is True

    def test__display__meta_beats_front_matter(self) -> None:
        """Meta display wins over front matter display."""
        nodes = (
            MetaRecord.from_mapping({"a": {"display": "normal"}}),
            Page("a", "/a", front_matter={"display": "hidden"}),
        )

        assert resolve_level(nodes).entries[0].hidden is False

    def test__theme__meta_beats_front_matter(self) -> None:
        """Meta theme overrides front matter theme per field."""
        nodes = (
            MetaRecord.from_mapping({"a": {"theme": {"toc": True}}}),
            Page("a", "/a", front_matter={"theme": {"toc": False, "footer": False}}),
        )

        entry = resolve_level(nodes).entries[0]

        assert entry.theme == ThemeContext(toc=True, footer=False)

    def test__separator__is_synthesized(self) -> None:
        """Separator entries exist without a matching child."""
        nodes = (
            MetaRecord.from_mapping({"a": {}, "---": {"type": "separator"}, "b": {}}),
            Page("a", "/a"),
            Page("b", "/b"),
        )

        entries = resolve_level(nodes).entries

        assert [entry.name for entry in entries] == ["a", "---", "b"]
        assert entries[1].is_separator
        assert entries[1].title is None

    def test__href_entry__is_synthesized_as_link(self) -> None:
        """Href entries without a child become links."""
        nodes = (
            MetaRecord.from_mapping({"gh": {"title": "GitHub", "href": "https://x"}}),
        )

        entry = resolve_level(nodes).entries[0]

        assert entry.is_link
        assert entry.route == "https://x"
        assert entry.node is None


class TestIndexPages:
    """Tests for index page folding."""

    def test__level_index__is_folded(self) -> None:
        """A page routed at the parent route is not a separate entry."""
        nodes = (Page("index", "/docs"), Page("a", "/docs/a"))

        level = resolve_level(nodes, "/docs")

        assert [entry.name for entry in level.entries] == ["a"]
        assert level.index_page == Page("index", "/docs")

    def test__root_index__stays_an_entry(self) -> None:
        """The root index page is an ordinary entry."""
        nodes = (Page("index", "/"), Page("a", "/a"))

        assert _names(nodes) == ["index", "a"]

    def test__folder_index__found_in_children(self) -> None:
        """A folder's index page provides its front matter."""
        index = Page("index", "/docs", front_matter={"title": "Docs"})
        folder = Folder("docs", "/docs", children=(index, Page("a", "/docs/a")))

        entry = resolve_level((folder,)).entries[0]

        assert entry.index_page is index
        assert entry.title == "Docs"

    def test__sibling_page__pairs_with_folder(self) -> None:
        """A sibling page with the folder's name and route is its index."""
        page = Page("docs", "/docs", front_matter={"title": "Docs"})
        folder = Folder("docs", "/docs", children=(Page("a", "/docs/a"),))

        entries = resolve_level((page, folder)).entries

        assert len(entries) == 1
        assert entries[0].node is folder
        assert entries[0].index_page is page


class TestTitleFromSlug:
    """Tests for title_from_slug()."""

    def test__dashes_and_underscores__become_spaces(self) -> None:
        """Split words and capitalize them."""
        assert title_from_slug("api_reference-guide") == "Api Reference Guide"

    def test__existing_capitals__are_kept(self) -> None:
        """Only the first letter of each word changes."""
        assert title_from_slug("iOS-setup") == "IOS Setup"
