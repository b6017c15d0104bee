from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from eth_utils import to_checksum_address
from loguru import logger
from web3 import AsyncWeb3
from web3.exceptions import TransactionNotFound

from flaunch_sdk.core.constants.position_manager_abi import (
    ANY_POSITION_MANAGER_ABI,
    FLAUNCH_POSITION_MANAGER_ABI,
    FLAUNCH_POSITION_MANAGER_V1_1_ABI,
)
from flaunch_sdk.core.events.types import (
    PoolCreatedLog,
    PoolSwapLog,
    event_log_fields,
    to_hex,
)
from flaunch_sdk.core.events.watcher import (
    EventWatcher,
    OnBatch,
    OnError,
    WatchHandle,
    block_timestamp_ms,
)
from flaunch_sdk.core.utils.swaps import SwapLogArgs, parse_swap_data
from flaunch_sdk.core.utils.uniswap_v4 import PoolKey

POOL_CREATED = "PoolCreated"
POOL_SWAP = "PoolSwap"


def pool_created_log(raw_log: Mapping[str, Any], timestamp_ms: int) -> PoolCreatedLog:
    return PoolCreatedLog(**event_log_fields(raw_log, timestamp_ms))


def pool_swap_log(
    raw_log: Mapping[str, Any],
    timestamp_ms: int,
    fleth_is_currency_zero: bool | None = None,
) -> PoolSwapLog:
    log = PoolSwapLog(**event_log_fields(raw_log, timestamp_ms))
    if fleth_is_currency_zero is None:
        return log
    parsed = parse_swap_data(
        SwapLogArgs.from_event_args(raw_log["args"]), fleth_is_currency_zero
    )
    log.type = parsed.type
    log.delta = parsed.delta
    return log


class ReadPositionManager:
    """Read-only client for a Flaunch position manager.

    Subclasses only pin the ABI; the watching and swap parsing logic is shared by
    every position manager version.
    """

    abi: list[dict[str, Any]] = FLAUNCH_POSITION_MANAGER_ABI

    def __init__(self, address: str | None, web3: AsyncWeb3):
        if not address:
            raise ValueError("Address is required")
        self.address = to_checksum_address(address)
        self.web3 = web3
        self.contract = web3.eth.contract(address=self.address, abi=self.abi)
        self.logger = logger.bind(client=self.__class__.__name__)

    async def get_block_number(self) -> int:
        return int(await self.web3.eth.block_number)

    async def get_block(self, block_number: int) -> Mapping[str, Any]:
        return await self.web3.eth.get_block(block_number)

    async def get_events(
        self,
        event_name: str,
        *,
        from_block: int,
        to_block: int,
        argument_filters: dict[str, Any] | None = None,
    ) -> list[Mapping[str, Any]]:
        event = getattr(self.contract.events, event_name)
        logs = await event().get_logs(
            argument_filters=argument_filters,
            from_block=from_block,
            to_block=to_block,
        )
        return list(logs)

    async def pool_key(self, coin_address: str) -> PoolKey:
        raw = await self.contract.functions.poolKey(
            to_checksum_address(coin_address)
        ).call()
        return PoolKey.from_tuple(raw)

    async def is_valid_coin(self, coin_address: str) -> bool:
        return (await self.pool_key(coin_address)).tick_spacing != 0

    def _watcher(
        self,
        event_name: str,
        on_batch: OnBatch,
        *,
        enrich,
        argument_filters: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> EventWatcher:
        async def fetch_logs(from_block: int, to_block: int):
            return await self.get_events(
                event_name,
                from_block=from_block,
                to_block=to_block,
                argument_filters=argument_filters,
            )

        return EventWatcher(
            name=f"{self.__class__.__name__}.{event_name}",
            fetch_logs=fetch_logs,
            get_block_number=self.get_block_number,
            get_block=self.get_block,
            on_batch=on_batch,
            enrich=enrich,
            **kwargs,
        )

    async def watch_pool_created(
        self,
        on_pool_created: OnBatch,
        *,
        start_block: int | None = None,
        poll_interval_ms: int | None = None,
        max_block_range: int | None = None,
        on_error: OnError | None = None,
    ) -> WatchHandle:
        watcher = self._watcher(
            POOL_CREATED,
            on_pool_created,
            enrich=pool_created_log,
            start_block=start_block,
            poll_interval_ms=poll_interval_ms,
            max_block_range=max_block_range,
            on_error=on_error,
        )
        return await watcher.start()

    async def watch_pool_swap(
        self,
        on_pool_swap: OnBatch,
        *,
        fleth_is_currency_zero: bool | None = None,
        start_block: int | None = None,
        filter_by_pool_id: str | None = None,
        poll_interval_ms: int | None = None,
        max_block_range: int | None = None,
        on_error: OnError | None = None,
    ) -> WatchHandle:
        def enrich(raw_log: Mapping[str, Any], timestamp_ms: int) -> PoolSwapLog:
            return pool_swap_log(raw_log, timestamp_ms, fleth_is_currency_zero)

        watcher = self._watcher(
            POOL_SWAP,
            on_pool_swap,
            enrich=enrich,
            argument_filters={"poolId": filter_by_pool_id} if filter_by_pool_id else None,
            start_block=start_block,
            poll_interval_ms=poll_interval_ms,
            max_block_range=max_block_range,
            on_error=on_error,
        )
        return await watcher.start()

    async def parse_swap_tx(
        self, tx_hash: str, fleth_is_currency_zero: bool | None = None
    ) -> PoolSwapLog | None:
        """Find the ``PoolSwap`` emitted by ``tx_hash``, or ``None`` if there is none."""
        try:
            tx = await self.web3.eth.get_transaction(tx_hash)
            if not tx or tx.get("blockNumber") is None:
                return None
            block_number = int(tx["blockNumber"])

            timestamp_ms = await block_timestamp_ms(self.get_block, block_number)
            swap_logs = await self.get_events(
                POOL_SWAP, from_block=block_number, to_block=block_number
            )

            wanted = to_hex(tx_hash).lower()
            target = next(
                (
                    log
                    for log in swap_logs
                    if to_hex(log["transactionHash"]).lower() == wanted
                ),
                None,
            )
            if target is None:
                return None
            return pool_swap_log(target, timestamp_ms, fleth_is_currency_zero)
        except TransactionNotFound:
            return None
        except Exception as exc:  # noqa: BLE001
            self.logger.error(f"Error parsing swap transaction {tx_hash}: {exc}")
            return None


class ReadFlaunchPositionManager(ReadPositionManager):
    abi = FLAUNCH_POSITION_MANAGER_ABI


class ReadFlaunchPositionManagerV1_1(ReadPositionManager):  # noqa: N801
    abi = FLAUNCH_POSITION_MANAGER_V1_1_ABI


class ReadAnyPositionManager(ReadPositionManager):
    abi = ANY_POSITION_MANAGER_ABI


POSITION_MANAGER_CLIENTS: dict[str, type[ReadPositionManager]] = {
    "v1": ReadFlaunchPositionManager,
    "v1_1": ReadFlaunchPositionManagerV1_1,
    "any": ReadAnyPositionManager,
}
