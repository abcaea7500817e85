"""aiohttp server for pagemap.

Application factory and route registration for the navigation service.
"""

import logging

from aiohttp import web

from pagemap.api.config import create_config_routes
from pagemap.api.navigation import create_navigation_routes
from pagemap.api.pages import create_pages_routes
from pagemap.app_keys import (
    config_key,
    index_store_key,
    live_reload_key,
    loader_key,
)
from pagemap.config import Config
from pagemap.core.index import PageIndex, PageIndexStore

logger = logging.getLogger(__name__)


def create_app(config: Config, *, index: PageIndex | None = None) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        index: Initial page index (loaded from config.pagemap.source if omitted)

    Returns:
        Configured aiohttp application

    Raises:
        FileNotFoundError: If the page map file doesn't exist
        ValueError: If the page map file is invalid
    """
    app = web.Application()

    loader = config.create_loader()
    if index is None:
        index = loader.load()

    app[config_key] = config
    app[loader_key] = loader
    app[index_store_key] = PageIndexStore(index)

    app.router.add_routes(create_config_routes())
    app.router.add_routes(create_navigation_routes())
    app.router.add_routes(create_pages_routes())

    # Live reload WebSocket endpoint
    if config.live_reload.enabled:
        from pagemap.live import LiveReloadManager
        from pagemap.live.reload import create_live_reload_routes

        manager = LiveReloadManager(loader, app[index_store_key])
        app[live_reload_key] = manager
        app.router.add_routes(create_live_reload_routes(manager))
        app.on_startup.append(_start_live_reload)
        app.on_cleanup.append(_stop_live_reload)

    return app


async def _start_live_reload(app: web.Application) -> None:
    """Start live reload on application startup."""
    await app[live_reload_key].start()
    logger.info(f"Watching {app[loader_key].source} for changes")


async def _stop_live_reload(app: web.Application) -> None:
    """Stop live reload on application cleanup."""
    await app[live_reload_key].stop()


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    web.run_app(app, host=config.server.host, port=config.server.port)
