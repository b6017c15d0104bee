from __future__ import annotations

from typing import Any

from web3 import AsyncWeb3

from flaunch_sdk.core.adapters.BaseAdapter import BaseAdapter
from flaunch_sdk.core.clients.PositionManagerClient import (
    POSITION_MANAGER_CLIENTS,
    ReadPositionManager,
)
from flaunch_sdk.core.constants.addresses import FLAUNCH_POSITION_MANAGER, FLETH
from flaunch_sdk.core.events.types import PoolSwapLog
from flaunch_sdk.core.events.watcher import OnBatch, OnError, WatchHandle
from flaunch_sdk.core.utils.uniswap_v4 import (
    PoolKey,
    flaunch_pool_key,
    fleth_is_currency_zero,
    get_pool_id,
)


class FlaunchAdapter(BaseAdapter):
    """Entry point for watching and decoding Flaunch pool activity on one chain.

    Config keys:

    - ``chain_id`` (default Base)
    - ``position_manager_version``: ``"v1"`` (default), ``"v1_1"`` or ``"any"``
    - ``addresses``: per-key overrides (``position_manager``, ``fleth``). The
      V1.1 and Any position managers have no built-in address and require one.
    """

    adapter_type = "FLAUNCH"

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        *,
        web3: AsyncWeb3 | None = None,
    ) -> None:
        config = config or {}
        version = str(config.get("position_manager_version", "v1")).lower()
        client_cls = POSITION_MANAGER_CLIENTS.get(version)
        if client_cls is None:
            raise ValueError(
                f"Unknown position_manager_version {version!r}; "
                f"expected one of {sorted(POSITION_MANAGER_CLIENTS)}"
            )

        super().__init__("flaunch_adapter", config, web3=web3)

        self.fleth_address = self.resolve_address("fleth", FLETH)
        self.position_manager_address = self.resolve_address(
            "position_manager", FLAUNCH_POSITION_MANAGER if version == "v1" else None
        )
        self.position_manager: ReadPositionManager = client_cls(
            self.position_manager_address, self.web3
        )

    def pool_key(self, coin_address: str) -> PoolKey:
        return flaunch_pool_key(
            coin_address,
            fleth_address=self.fleth_address,
            hooks=self.position_manager_address,
        )

    def pool_id(self, coin_address: str) -> str:
        return get_pool_id(self.pool_key(coin_address))

    def fleth_is_currency_zero(self, coin_address: str) -> bool:
        return fleth_is_currency_zero(coin_address, self.fleth_address)

    async def is_valid_coin(self, coin_address: str) -> bool:
        return await self.position_manager.is_valid_coin(coin_address)

    async def watch_pool_created(
        self,
        on_pool_created: OnBatch,
        *,
        start_block: int | None = None,
        poll_interval_ms: int | None = None,
        max_block_range: int | None = None,
        on_error: OnError | None = None,
    ) -> WatchHandle:
        return await self.position_manager.watch_pool_created(
            on_pool_created,
            start_block=start_block,
            poll_interval_ms=poll_interval_ms,
            max_block_range=max_block_range,
            on_error=on_error,
        )

    async def watch_pool_swap(
        self,
        on_pool_swap: OnBatch,
        *,
        filter_by_coin: str | None = None,
        start_block: int | None = None,
        poll_interval_ms: int | None = None,
        max_block_range: int | None = None,
        on_error: OnError | None = None,
    ) -> WatchHandle:
        """Watch swaps, optionally for a single coin.

        Swaps are only classified as BUY/SELL when ``filter_by_coin`` is given,
        since that is what tells us which pool slot holds flETH.
        """
        return await self.position_manager.watch_pool_swap(
            on_pool_swap,
            fleth_is_currency_zero=(
                self.fleth_is_currency_zero(filter_by_coin) if filter_by_coin else None
            ),
            filter_by_pool_id=self.pool_id(filter_by_coin) if filter_by_coin else None,
            start_block=start_block,
            poll_interval_ms=poll_interval_ms,
            max_block_range=max_block_range,
            on_error=on_error,
        )

    async def parse_swap_tx(
        self, tx_hash: str, coin_address: str | None = None
    ) -> PoolSwapLog | None:
        return await self.position_manager.parse_swap_tx(
            tx_hash,
            self.fleth_is_currency_zero(coin_address) if coin_address else None,
        )
