"""Shared test fixtures."""

import json
from pathlib import Path
from typing import Any

import pytest
from pagemap.config import (
    Config,
    I18nConfig,
    LiveReloadConfig,
    NavigationConfig,
    PageMapConfig,
    ServerConfig,
)
from pagemap.core.index import PageIndex
from pagemap.core.theme import ThemeContext
from pagemap.core.tree import parse_page_map


@pytest.fixture
def raw_page_map() -> list[dict[str, Any]]:
    """Page map with meta ordering, a hidden page, a separator and a link.

    Navigation order at the root: index, docs, about, separator, github,
    docset. The docs folder has an index page; docs/advanced does not.
    """
    return [
        {
            "kind": "Meta",
            "data": {
                "index": "Home",
                "docs": {"title": "Documentation", "type": "page"},
                "about": {"title": "About", "type": "page"},
                "---": {"type": "separator", "title": "More"},
                "github": {
                    "title": "GitHub",
                    "href": "https://github.com/example/site",
                    "newWindow": True,
                },
            },
        },
        {
            "kind": "Page",
            "name": "index",
            "route": "/",
            "frontMatter": {"title": "Welcome"},
        },
        {
            "kind": "Folder",
            "name": "docs",
            "route": "/docs",
            "children": [
                {
                    "kind": "Meta",
                    "data": {
                        "getting-started": "Getting Started",
                        "advanced": {},
                        "secret": {"display": "hidden"},
                    },
                },
                {
                    "kind": "MdxPage",
                    "name": "index",
                    "route": "/docs",
                    "frontMatter": {"title": "Docs Home"},
                },
                {
                    "kind": "MdxPage",
                    "name": "getting-started",
                    "route": "/docs/getting-started",
                },
                {
                    "kind": "Folder",
                    "name": "advanced",
                    "route": "/docs/advanced",
                    "children": [
                        {
                            "kind": "MdxPage",
                            "name": "caching",
                            "route": "/docs/advanced/caching",
                            "frontMatter": {"title": "Caching", "layout": "full"},
                        },
                        {
                            "kind": "MdxPage",
                            "name": "plugins",
                            "route": "/docs/advanced/plugins",
                        },
                    ],
                },
                {"kind": "MdxPage", "name": "secret", "route": "/docs/secret"},
            ],
        },
        {
            "kind": "Page",
            "name": "about",
            "route": "/about",
            "frontMatter": {"theme": {"toc": False}},
        },
        {
            "kind": "Folder",
            "name": "docset",
            "route": "/docset",
            "children": [
                {"kind": "Page", "name": "x", "route": "/docset/x"},
            ],
        },
    ]


@pytest.fixture
def sample_index(raw_page_map: list[dict[str, Any]]) -> PageIndex:
    """PageIndex over the sample page map."""
    return PageIndex(nodes=parse_page_map(raw_page_map))


@pytest.fixture
def localized_page_map() -> list[dict[str, Any]]:
    """Page map with English and French variants.

    "intro" exists in both locales, "guide" only in English, "news" only
    in French and "legal" is locale-neutral.
    """
    return [
        {
            "kind": "Page",
            "name": "intro",
            "route": "/intro",
            "locale": "en",
            "frontMatter": {"title": "Introduction"},
        },
        {
            "kind": "Page",
            "name": "intro",
            "route": "/intro",
            "locale": "fr",
            "frontMatter": {"title": "Présentation"},
        },
        {
            "kind": "Page",
            "name": "guide",
            "route": "/guide",
            "locale": "en",
            "frontMatter": {"title": "Guide"},
        },
        {
            "kind": "Page",
            "name": "news",
            "route": "/news",
            "locale": "fr",
            "frontMatter": {"title": "Actualités"},
        },
        {"kind": "Page", "name": "legal", "route": "/legal"},
    ]


@pytest.fixture
def localized_index(localized_page_map: list[dict[str, Any]]) -> PageIndex:
    """PageIndex over the localized page map with English as default."""
    return PageIndex(
        nodes=parse_page_map(localized_page_map),
        default_locale="en",
        locales=("en", "fr"),
    )


@pytest.fixture
def pagemap_file(tmp_path: Path, raw_page_map: list[dict[str, Any]]) -> Path:
    """Write the sample page map to a JSON file."""
    path = tmp_path / "pagemap.json"
    path.write_text(json.dumps({"pageMap": raw_page_map}))
    return path


@pytest.fixture
def test_config(pagemap_file: Path) -> Config:
    """Create a test configuration pointing at the sample page map.

    Live reload is disabled so no file watcher starts during tests.
    """
    return Config(
        server=ServerConfig(),
        pagemap=PageMapConfig(source=pagemap_file),
        i18n=I18nConfig(),
        navigation=NavigationConfig(),
        theme=ThemeContext(),
        live_reload=LiveReloadConfig(enabled=False),
    )
