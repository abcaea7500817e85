"""Shared request parameter handling."""

import json

from aiohttp import web

from pagemap.app_keys import index_store_key


def requested_locale(request: web.Request) -> str | None:
    """Read the ``locale`` query parameter.

    Raises:
        web.HTTPBadRequest: If the locale is not one of the site locales
    """
    locale = request.query.get("locale") or None
    locales = request.app[index_store_key].current.locales
    if locale is not None and locales and locale not in locales:
        raise web.HTTPBadRequest(
            text=json.dumps({"error": "Unknown locale", "locale": locale}),
            content_type="application/json",
        )
    return locale


def requested_route(request: web.Request) -> str:
    """Return the route captured by the ``path`` placeholder."""
    path = request.match_info.get("path", "")
    return path if path.startswith("/") else f"/{path}"
