"""Navigation API endpoint.

Returns the normalized navigation views and active page resolution for
a route.
"""

from aiohttp import web

from pagemap.api.params import requested_locale, requested_route
from pagemap.app_keys import index_store_key


def create_navigation_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/navigation", get_navigation),
        web.get("/api/navigation/{path:.*}", get_navigation),
    ]


async def get_navigation(request: web.Request) -> web.Response:
    route = requested_route(request)
    locale = requested_locale(request)
    index = request.app[index_store_key].current

    result = index.normalize(route, locale)
    return web.json_response(result.to_dict())
