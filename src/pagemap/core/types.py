"""Core type definitions."""

from typing import Literal, NewType

# URL path for routing (e.g., "/docs", "/docs/advanced")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)

ItemType = Literal["page", "doc", "menu", "separator"]

ITEM_TYPES: frozenset[str] = frozenset({"page", "doc", "menu", "separator"})
