"""Tests for page map loading."""

import json
from pathlib import Path

import pytest
from pagemap.core.loader import PageMapLoader
from pagemap.core.theme import DEFAULT_THEME, ThemeContext
from pagemap.core.tree import Page


class TestPageMapLoader:
    """Tests for PageMapLoader.load()."""

    def test__sample_file__loads_index(self, pagemap_file: Path) -> None:
        """Load the nodes of a page map object."""
        index = PageMapLoader(pagemap_file).load()

        assert len(index.nodes) == 5
        assert index.theme == DEFAULT_THEME

    def test__bare_list__loads_index(self, tmp_path: Path) -> None:
        """A bare list of nodes is accepted."""
        path = tmp_path / "pagemap.json"
        path.write_text(json.dumps([{"kind": "Page", "name": "a", "route": "/a"}]))

        index = PageMapLoader(path).load()

        assert index.nodes == (Page("a", "/a"),)

    def test__file_settings__are_read(self, tmp_path: Path) -> None:
        """Read locales, theme and menu settings from the file."""
        path = tmp_path / "pagemap.json"
        path.write_text(
            json.dumps(
                {
                    "pageMap": [],
                    "defaultLocale": "en",
                    "locales": ["en", "fr"],
                    "theme": {"footer": False},
                    "defaultMenuCollapsed": True,
                },
            ),
        )

        index = PageMapLoader(path).load()

        assert index.default_locale == "en"
        assert index.locales == ("en", "fr")
        assert index.theme.footer is False
        assert index.theme.navbar is True
        assert index.default_menu_collapsed is True

    def test__loader_settings__win_over_file(self, tmp_path: Path) -> None:
        """Settings passed to the loader override the file."""
        path = tmp_path / "pagemap.json"
        path.write_text(
            json.dumps(
                {
                    "pageMap": [],
                    "defaultLocale": "en",
                    "locales": ["en"],
                    "theme": {"footer": False, "toc": False},
                    "defaultMenuCollapsed": True,
                },
            ),
        )

        index = PageMapLoader(
            path,
            default_locale="fr",
            locales=["fr", "de"],
            theme=ThemeContext(footer=True),
            default_menu_collapsed=False,
        ).load()

        assert index.default_locale == "fr"
        assert index.locales == ("fr", "de")
        assert index.theme.footer is True
        assert index.theme.toc is False
        assert index.default_menu_collapsed is False

    def test__missing_file__raises(self, tmp_path: Path) -> None:
        """Raise FileNotFoundError for a missing page map."""
        loader = PageMapLoader(tmp_path / "missing.json")

        with pytest.raises(FileNotFoundError):
            loader.load()

    def test__invalid_json__raises(self, tmp_path: Path) -> None:
        """Raise ValueError for invalid JSON."""
        path = tmp_path / "pagemap.json"
        path.write_text("{not json")

        with pytest.raises(ValueError, match="Invalid page map JSON"):
            PageMapLoader(path).load()

    def test__source__is_exposed(self, pagemap_file: Path) -> None:
        """The loader exposes its source path."""
        assert PageMapLoader(pagemap_file).source == pagemap_file
