"""Configuration management for pagemap.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from pagemap.core.loader import PageMapLoader
from pagemap.core.theme import THEME_KEYS, ThemeContext
from pagemap.core.tree import DEFAULT_MAX_DEPTH

CONFIG_FILENAME = "pagemap.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class PageMapConfig:
    """Page map source configuration."""

    source: Path = field(default_factory=lambda: Path("pagemap.json"))
    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass
class I18nConfig:
    """Locale configuration."""

    default_locale: str | None = None
    locales: list[str] = field(default_factory=list)


@dataclass
class NavigationConfig:
    """Navigation configuration."""

    default_menu_collapsed: bool | None = None


@dataclass
class LiveReloadConfig:
    """Live reload configuration."""

    enabled: bool = True


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    pagemap: PageMapConfig
    i18n: I18nConfig
    navigation: NavigationConfig
    theme: ThemeContext
    live_reload: LiveReloadConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for pagemap.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> Config:
        """Create config with all defaults."""
        return cls(
            server=ServerConfig(),
            pagemap=PageMapConfig(),
            i18n=I18nConfig(),
            navigation=NavigationConfig(),
            theme=ThemeContext(),
            live_reload=LiveReloadConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            pagemap=cls._parse_pagemap(data.get("pagemap"), config_dir),
            i18n=cls._parse_i18n(data.get("i18n")),
            navigation=cls._parse_navigation(data.get("navigation")),
            theme=cls._parse_theme(data.get("theme")),
            live_reload=cls._parse_live_reload(data.get("live_reload")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section."""
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_pagemap(cls, data: object, config_dir: Path) -> PageMapConfig:
        """Parse pagemap configuration section.

        Args:
            data: Raw pagemap section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            PageMapConfig instance
        """
        if data is None:
            return PageMapConfig(source=config_dir / "pagemap.json")

        if not isinstance(data, dict):
            raise ValueError("pagemap section must be a dictionary")

        source = data.get("source", "pagemap.json")
        if not isinstance(source, str):
            raise ValueError("pagemap.source must be a string")

        max_depth = data.get("max_depth", DEFAULT_MAX_DEPTH)
        if not isinstance(max_depth, int) or isinstance(max_depth, bool):
            raise ValueError("pagemap.max_depth must be an integer")
        if max_depth < 1:
            raise ValueError("pagemap.max_depth must be positive")

        return PageMapConfig(source=config_dir / source, max_depth=max_depth)

    @classmethod
    def _parse_i18n(cls, data: object) -> I18nConfig:
        """Parse i18n configuration section."""
        if data is None:
            return I18nConfig()

        if not isinstance(data, dict):
            raise ValueError("i18n section must be a dictionary")

        default_locale = data.get("default_locale")
        if default_locale is not None and not isinstance(default_locale, str):
            raise ValueError("i18n.default_locale must be a string")

        locales_raw = data.get("locales", [])
        if not isinstance(locales_raw, list):
            raise ValueError("i18n.locales must be a list")
        locales: list[str] = []
        for item in locales_raw:
            if not isinstance(item, str):
                raise ValueError("i18n.locales items must be strings")
            locales.append(item)

        if default_locale is not None and locales and default_locale not in locales:
            raise ValueError("i18n.default_locale must be one of i18n.locales")

        return I18nConfig(default_locale=default_locale, locales=locales)

    @classmethod
    def _parse_navigation(cls, data: object) -> NavigationConfig:
        """Parse navigation configuration section."""
        if data is None:
            return NavigationConfig()

        if not isinstance(data, dict):
            raise ValueError("navigation section must be a dictionary")

        collapsed = data.get("default_menu_collapsed")
        if collapsed is not None and not isinstance(collapsed, bool):
            raise ValueError("navigation.default_menu_collapsed must be a boolean")

        return NavigationConfig(default_menu_collapsed=collapsed)

    @classmethod
    def _parse_theme(cls, data: object) -> ThemeContext:
        """Parse theme configuration section.

        Unlike page-level overrides, site configuration is strict:
        unknown keys and invalid values are errors.
        """
        if data is None:
            return ThemeContext()

        if not isinstance(data, dict):
            raise ValueError("theme section must be a dictionary")

        for key, value in data.items():
            if key not in THEME_KEYS:
                raise ValueError(f"Unknown theme option: {key}")
            if ThemeContext.from_mapping({key: value}).is_empty():
                raise ValueError(f"Invalid value for theme.{key}: {value!r}")

        return ThemeContext.from_mapping(data)

    @classmethod
    def _parse_live_reload(cls, data: object) -> LiveReloadConfig:
        """Parse live_reload configuration section."""
        if data is None:
            return LiveReloadConfig()

        if not isinstance(data, dict):
            raise ValueError("live_reload section must be a dictionary")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("live_reload.enabled must be a boolean")

        return LiveReloadConfig(enabled=enabled)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        source: Path | None = None,
        default_locale: str | None = None,
        live_reload_enabled: bool | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. This follows
        the immutable pattern - the original Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            source: Override pagemap.source
            default_locale: Override i18n.default_locale
            live_reload_enabled: Override live_reload.enabled

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        pagemap = self.pagemap
        if source is not None:
            pagemap = replace(self.pagemap, source=source)

        i18n = self.i18n
        if default_locale is not None:
            i18n = replace(self.i18n, default_locale=default_locale)

        live_reload = self.live_reload
        if live_reload_enabled is not None:
            live_reload = replace(self.live_reload, enabled=live_reload_enabled)

        return replace(
            self,
            server=server,
            pagemap=pagemap,
            i18n=i18n,
            live_reload=live_reload,
        )

    def create_loader(self) -> PageMapLoader:
        """Create a page map loader bound to this configuration."""
        return PageMapLoader(
            self.pagemap.source,
            default_locale=self.i18n.default_locale,
            locales=self.i18n.locales,
            theme=self.theme,
            default_menu_collapsed=self.navigation.default_menu_collapsed,
            max_depth=self.pagemap.max_depth,
        )
