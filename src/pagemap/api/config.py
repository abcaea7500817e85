"""Config API endpoint."""

from aiohttp import web

from pagemap.app_keys import config_key, index_store_key


def create_config_routes() -> list[web.RouteDef]:
    return [web.get("/api/config", get_config)]


async def get_config(request: web.Request) -> web.Response:
    config = request.app[config_key]
    index = request.app[index_store_key].current
    return web.json_response(
        {
            "liveReloadEnabled": config.live_reload.enabled,
            "defaultLocale": index.default_locale,
            "locales": list(index.locales),
        },
    )
