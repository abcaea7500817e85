"""Route helpers shared by the normalizer and the query functions."""

from pagemap.core.types import URLPath


def normalize_route(route: str) -> URLPath:
    """Normalize route to have a leading slash and no trailing slash."""
    stripped = route.strip("/")
    return URLPath(f"/{stripped}" if stripped else "/")


def is_route_prefix(prefix: str, route: str) -> bool:
    """Check whether prefix is route itself or one of its ancestor routes.

    Matching is segment-aware: "/docs" is a prefix of "/docs/advanced"
    but not of "/docset/x".
    """
    prefix = normalize_route(prefix)
    route = normalize_route(route)
    if prefix == "/":
        return True
    return route == prefix or route.startswith(f"{prefix}/")
