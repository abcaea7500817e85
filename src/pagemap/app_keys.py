"""Application keys for type-safe app configuration access."""

from aiohttp import web

from pagemap.config import Config
from pagemap.core.index import PageIndexStore
from pagemap.core.loader import PageMapLoader
from pagemap.live.reload import LiveReloadManager

config_key = web.AppKey("config", Config)
index_store_key = web.AppKey("index_store", PageIndexStore)
loader_key = web.AppKey("loader", PageMapLoader)
live_reload_key = web.AppKey("live_reload", LiveReloadManager)
