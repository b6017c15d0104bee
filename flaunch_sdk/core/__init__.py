from flaunch_sdk.core.adapters.BaseAdapter import BaseAdapter
from flaunch_sdk.core.events.types import EventBatch
from flaunch_sdk.core.events.watcher import EventWatcher, WatchHandle, start_watch
from flaunch_sdk.core.utils.swaps import ParsedSwapData, SwapType, parse_swap_data

__all__ = [
    "BaseAdapter",
    "EventBatch",
    "EventWatcher",
    "ParsedSwapData",
    "SwapType",
    "WatchHandle",
    "parse_swap_data",
    "start_watch",
]
