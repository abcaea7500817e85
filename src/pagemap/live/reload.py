"""WebSocket-based live reload for development mode.

Watches the page map file, rebuilds the page index when the collector
rewrites it, and notifies connected clients via WebSocket so they can
refetch navigation.
"""

import asyncio
import json
import logging
import weakref
from pathlib import Path

from aiohttp import WSMsgType, web
from watchfiles import Change, awatch

from pagemap.core.index import PageIndexStore
from pagemap.core.loader import PageMapLoader

logger = logging.getLogger(__name__)


class LiveReloadManager:
    """Manages WebSocket connections and page map watching for live reload.

    A changed page map is treated as a rebuild from scratch: the file is
    loaded into a new snapshot which replaces the current one in the store.
    """

    def __init__(self, loader: PageMapLoader, store: PageIndexStore) -> None:
        """Initialize the live reload manager.

        Args:
            loader: Loader for the watched page map file
            store: Store whose snapshot is replaced on change
        """
        self._loader = loader
        self._store = store
        self._connections: weakref.WeakSet[web.WebSocketResponse] = weakref.WeakSet()
        self._watch_task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Start the file watcher."""
        if self._watch_task is not None:
            return
        self._watch_task = asyncio.create_task(self._watch_files())

    async def stop(self) -> None:
        """Stop the file watcher and close all connections."""
        if self._watch_task is not None:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            self._watch_task = None

        for ws in list(self._connections):
            await ws.close()

    async def handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Handle WebSocket connection for live reload.

        Args:
            request: aiohttp request

        Returns:
            WebSocket response
        """
        ws = web.WebSocketResponse()
        await ws.prepare(request)

        self._connections.add(ws)

        try:
            async for msg in ws:
                if msg.type == WSMsgType.ERROR:
                    break
        finally:
            self._connections.discard(ws)

        return ws

    def reload(self) -> bool:
        """Rebuild the page index from the page map file.

        The previous snapshot stays current when the file can't be loaded.

        Returns:
            True if a new snapshot was swapped in
        """
        try:
            index = self._loader.load()
        except (OSError, ValueError) as e:
            logger.error(f"Failed to reload page map: {e}")
            return False

        self._store.replace(index)
        return True

    async def _watch_files(self) -> None:
        """Watch the page map file and broadcast reload events."""
        source = self._loader.source.resolve()
        async for changes in awatch(source.parent):
            if not self._is_source_changed(changes, source):
                continue
            if await asyncio.to_thread(self.reload):
                await self._broadcast_reload()

    def _is_source_changed(
        self,
        changes: set[tuple[Change, str]],
        source: Path,
    ) -> bool:
        for change_type, path_str in changes:
            if change_type == Change.deleted:
                continue
            if Path(path_str).resolve() == source:
                return True
        return False

    async def _broadcast_reload(self) -> None:
        """Broadcast reload event to all connected clients."""
        if not self._connections:
            return

        message = json.dumps({"type": "reload", "source": str(self._loader.source)})

        for ws in list(self._connections):
            if ws.closed:
                continue
            try:
                await ws.send_str(message)
            except ConnectionResetError:
                # Client disconnected mid-send, will be cleaned up by WeakSet
                pass


def create_live_reload_routes(manager: LiveReloadManager) -> list[web.RouteDef]:
    """Create routes for live reload WebSocket.

    Args:
        manager: LiveReloadManager instance

    Returns:
        List of route definitions
    """
    return [web.get("/ws/live-reload", manager.handle_websocket)]
