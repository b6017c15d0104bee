"""Types for the event watcher (dataclasses)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from flaunch_sdk.core.utils.swaps import BuySwapDelta, SellSwapDelta, SwapType

T = TypeVar("T")


@dataclass
class EventBatch(Generic[T]):
    """One delivery to a watcher callback, newest log first."""

    logs: list[T]
    # True only for the empty batch emitted when a watch replays from a start block.
    is_fetching_from_start: bool = False


@dataclass
class WatcherCursor:
    last_observed_block: int
    is_active: bool = True


@dataclass
class EventLog:
    event: str
    block_number: int
    transaction_hash: str
    log_index: int
    args: dict[str, Any]
    timestamp: int  # ms since epoch


@dataclass
class PoolCreatedLog(EventLog):
    pass


@dataclass
class PoolSwapLog(EventLog):
    # Only set when the flETH orientation of the pool is known.
    type: SwapType | None = None
    delta: BuySwapDelta | SellSwapDelta | None = field(default=None)

    @property
    def is_parsed(self) -> bool:
        return self.type is not None


def to_hex(value: Any) -> str:
    if isinstance(value, bytes | bytearray):
        return "0x" + bytes(value).hex()
    text = str(value)
    return text if text.startswith("0x") else f"0x{text}"


def plain_args(value: Any) -> Any:
    """Convert web3 ``AttributeDict``/tuple args into plain dicts and lists."""
    if isinstance(value, Mapping):
        return {str(k): plain_args(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [plain_args(v) for v in value]
    if isinstance(value, bytes | bytearray):
        return to_hex(value)
    return value


def event_log_fields(raw_log: Mapping[str, Any], timestamp_ms: int) -> dict[str, Any]:
    return {
        "event": str(raw_log.get("event", "")),
        "block_number": int(raw_log["blockNumber"]),
        "transaction_hash": to_hex(raw_log["transactionHash"]),
        "log_index": int(raw_log.get("logIndex", 0)),
        "args": plain_args(raw_log.get("args", {})),
        "timestamp": timestamp_ms,
    }
