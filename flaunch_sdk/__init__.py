__version__ = "0.1.0"

from flaunch_sdk.core import (
    BaseAdapter,
    EventBatch,
    EventWatcher,
    ParsedSwapData,
    SwapType,
    WatchHandle,
    parse_swap_data,
    start_watch,
)

__all__ = [
    "__version__",
    "BaseAdapter",
    "EventBatch",
    "EventWatcher",
    "ParsedSwapData",
    "SwapType",
    "WatchHandle",
    "parse_swap_data",
    "start_watch",
]
