"""Pages API endpoints.

Exposes the page queries: all pages, pages on the level of a route, and
pages under a route prefix.
"""

from aiohttp import web

from pagemap.api.params import requested_locale, requested_route
from pagemap.app_keys import index_store_key
from pagemap.core.query import (
    PageSummary,
    get_all_pages,
    get_current_level_pages,
    get_pages_under_route,
)


def create_pages_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/pages", get_pages),
        web.get("/api/pages/level/{path:.*}", get_level_pages),
        web.get("/api/pages/under/{path:.*}", get_pages_under),
    ]


async def get_pages(request: web.Request) -> web.Response:
    locale = requested_locale(request)
    index = request.app[index_store_key].current
    return _pages_response(get_all_pages(index, locale))


async def get_level_pages(request: web.Request) -> web.Response:
    route = requested_route(request)
    locale = requested_locale(request)
    index = request.app[index_store_key].current
    return _pages_response(get_current_level_pages(index, route, locale))


async def get_pages_under(request: web.Request) -> web.Response:
    route = requested_route(request)
    locale = requested_locale(request)
    index = request.app[index_store_key].current
    return _pages_response(get_pages_under_route(index, route, locale))


def _pages_response(pages: tuple[PageSummary, ...]) -> web.Response:
    return web.json_response({"pages": [page.to_dict() for page in pages]})
