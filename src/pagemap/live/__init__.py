"""Live reload support for development mode."""

from pagemap.live.reload import LiveReloadManager

__all__ = ["LiveReloadManager"]
