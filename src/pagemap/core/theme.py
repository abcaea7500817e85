"""Cascading theme context.

A ThemeContext is a fixed record of rendering options. Every field is
optional: None means "inherit from the ancestor". Contexts cascade down
the page tree with a shallow, per-field merge where the child wins.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

logger = logging.getLogger(__name__)

LAYOUTS = frozenset({"default", "full", "raw"})
TYPESETTINGS = frozenset({"default", "article"})

_BOOL_FIELDS = (
    "navbar",
    "sidebar",
    "toc",
    "pagination",
    "footer",
    "breadcrumb",
    "timestamp",
    "collapsed",
)
_CHOICE_FIELDS = {"layout": LAYOUTS, "typesetting": TYPESETTINGS}

THEME_KEYS = frozenset(_BOOL_FIELDS) | frozenset(_CHOICE_FIELDS)


@dataclass(frozen=True)
class ThemeContext:
    """Rendering options for a page and its descendants."""

    navbar: bool | None = None
    sidebar: bool | None = None
    toc: bool | None = None
    pagination: bool | None = None
    footer: bool | None = None
    breadcrumb: bool | None = None
    timestamp: bool | None = None
    layout: str | None = None
    typesetting: str | None = None
    collapsed: bool | None = None

    def merge(self, overrides: ThemeContext) -> ThemeContext:
        """Return a new context with non-None override fields applied.

        Args:
            overrides: Context whose set fields take precedence

        Returns:
            Merged ThemeContext (self is not modified)
        """
        changes = {
            f.name: getattr(overrides, f.name)
            for f in fields(overrides)
            if getattr(overrides, f.name) is not None
        }
        if not changes:
            return self
        return replace(self, **changes)

    def is_empty(self) -> bool:
        """Check whether no field is set."""
        return all(getattr(self, f.name) is None for f in fields(self))

    @classmethod
    def from_mapping(cls, data: object) -> ThemeContext:
        """Build a context from loosely-typed data.

        Unknown keys and values of the wrong type are ignored.

        Args:
            data: Mapping of theme option names to values

        Returns:
            ThemeContext with the recognized options set
        """
        if not isinstance(data, Mapping):
            return cls()

        values: dict[str, Any] = {}
        for key, value in data.items():
            if key in _BOOL_FIELDS:
                if isinstance(value, bool):
                    values[key] = value
                else:
                    logger.debug(f"Ignoring non-boolean theme option {key}={value!r}")
            elif key in _CHOICE_FIELDS:
                if isinstance(value, str) and value in _CHOICE_FIELDS[key]:
                    values[key] = value
                else:
                    logger.debug(f"Ignoring unknown theme {key} {value!r}")
        return cls(**values)

    @classmethod
    def from_front_matter(cls, front_matter: Mapping[str, Any]) -> ThemeContext:
        """Extract theme overrides from page front matter.

        Top-level keys naming a theme option apply first, then the
        ``theme`` mapping overrides them.
        """
        flat = cls.from_mapping(
            {key: value for key, value in front_matter.items() if key in THEME_KEYS},
        )
        return flat.merge(cls.from_mapping(front_matter.get("theme")))

    def to_dict(self) -> dict[str, bool | str]:
        """Convert set fields to dictionary for JSON serialization."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


DEFAULT_THEME = ThemeContext(
    navbar=True,
    sidebar=True,
    toc=True,
    pagination=True,
    footer=True,
    breadcrumb=True,
    timestamp=True,
    layout="default",
    typesetting="default",
    collapsed=False,
)
