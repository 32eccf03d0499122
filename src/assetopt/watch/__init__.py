"""Filesystem watching for asset optimisation.

- dispatcher: backfill pass over the watch root, then live watchdog events
"""

from .dispatcher import (
    AssetEventHandler,
    EventDispatcher,
    iter_asset_files,
)

__all__ = [
    "AssetEventHandler",
    "EventDispatcher",
    "iter_asset_files",
]
