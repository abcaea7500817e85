"""Tests for page queries."""

from pagemap.core.index import PageIndex
from pagemap.core.query import (
    PageSummary,
    get_all_pages,
    get_current_level_pages,
    get_pages_under_route,
)


def _routes(pages: tuple[PageSummary, ...]) -> list[str]:
    return [page.route for page in pages]


class TestGetAllPages:
    """Tests for get_all_pages()."""

    def test__all_pages__in_navigation_order(self, sample_index: PageIndex) -> None:
        """List every visible page in pre-order."""
        pages = get_all_pages(sample_index)

        assert _routes(pages) == [
            "/",
            "/docs",
            "/docs/getting-started",
            "/docs/advanced/caching",
            "/docs/advanced/plugins",
            "/about",
            "/docset/x",
        ]

    def test__folder_index__carries_folder_title(self, sample_index: PageIndex) -> None:
        """A folder's index page is listed under the folder's title."""
        docs = get_all_pages(sample_index)[1]

        assert docs.title == "Documentation"
        assert docs.front_matter == {"title": "Docs Home"}

    def test__hidden_pages__excluded(self, sample_index: PageIndex) -> None:
        """Hidden pages are not listed."""
        assert "/docs/secret" not in _routes(get_all_pages(sample_index))

    def test__locale__selects_variants(self, localized_index: PageIndex) -> None:
        """Listing for a locale uses that locale's variants."""
        pages = get_all_pages(localized_index, "fr")

        assert [page.title for page in pages] == [
            "Présentation",
            "Guide",
            "Actualités",
            "Legal",
        ]

    def test__empty_index__returns_empty(self) -> None:
        """An empty index lists no pages."""
        assert get_all_pages(PageIndex()) == ()


class TestGetPagesUnderRoute:
    """Tests for get_pages_under_route()."""

    def test__prefix__includes_route_and_descendants(
        self,
        sample_index: PageIndex,
    ) -> None:
        """List the page at the route and everything below it."""
        pages = get_pages_under_route(sample_index, "/docs")

        assert _routes(pages) == [
            "/docs",
            "/docs/getting-started",
            "/docs/advanced/caching",
            "/docs/advanced/plugins",
        ]

    def test__prefix__is_segment_aware(self, sample_index: PageIndex) -> None:
        """/docs does not cover /docset."""
        routes = _routes(get_pages_under_route(sample_index, "/docs"))

        assert "/docset/x" not in routes

    def test__nested_prefix(self, sample_index: PageIndex) -> None:
        """List pages under a nested folder without an index page."""
        pages = get_pages_under_route(sample_index, "/docs/advanced/")

        assert _routes(pages) == ["/docs/advanced/caching", "/docs/advanced/plugins"]

    def test__locale_prefix__is_stripped(self, localized_index: PageIndex) -> None:
        """A locale segment in the route is ignored."""
        pages = get_pages_under_route(localized_index, "/fr/intro", "fr")

        assert [page.title for page in pages] == ["Présentation"]

    def test__no_match__returns_empty(self, sample_index: PageIndex) -> None:
        """Unknown prefixes produce no pages."""
        assert get_pages_under_route(sample_index, "/missing") == ()


class TestGetCurrentLevelPages:
    """Tests for get_current_level_pages()."""

    def test__nested_page__returns_siblings(self, sample_index: PageIndex) -> None:
        """List the pages next to the current page."""
        pages = get_current_level_pages(sample_index, "/docs/getting-started")

        assert _routes(pages) == ["/docs/getting-started", "/docs/advanced"]

    def test__folders__summarize_children(self, sample_index: PageIndex) -> None:
        """Folders on the level carry their pages as children."""
        pages = get_current_level_pages(sample_index, "/docs/getting-started")
        advanced = pages[1]

        assert advanced.title == "Advanced"
        assert _routes(advanced.children) == [
            "/docs/advanced/caching",
            "/docs/advanced/plugins",
        ]

    def test__folder_route__returns_its_level(self, sample_index: PageIndex) -> None:
        """A folder route resolves to the level holding the folder."""
        pages = get_current_level_pages(sample_index, "/docs")

        assert _routes(pages) == ["/", "/docs", "/about", "/docset"]

    def test__unknown_route__returns_empty(self, sample_index: PageIndex) -> None:
        """Unknown routes produce no pages."""
        assert get_current_level_pages(sample_index, "/missing") == ()


class TestPageSummary:
    """Tests for PageSummary serialization."""

    def test__to_dict__minimal(self) -> None:
        """Serialize without children."""
        summary = PageSummary(route="/a", title="A")

        assert summary.to_dict() == {"route": "/a", "title": "A", "frontMatter": {}}

    def test__to_dict__with_children(self) -> None:
        """Serialize nested children."""
        summary = PageSummary(
            route="/a",
            title="A",
            children=(PageSummary(route="/a/b", title="B"),),
        )

        data = summary.to_dict()

        assert data["children"] == [
            {"route": "/a/b", "title": "B", "frontMatter": {}},
        ]
