from __future__ import annotations

from abc import ABC
from typing import Any

from loguru import logger
from web3 import AsyncWeb3

from flaunch_sdk.core.config import get_address_overrides
from flaunch_sdk.core.constants.chains import CHAIN_ID_BASE, SUPPORTED_CHAINS
from flaunch_sdk.core.utils.web3 import get_web3_from_chain_id


class BaseAdapter(ABC):
    adapter_type: str | None = None

    def __init__(
        self,
        name: str,
        config: dict[str, Any] | None = None,
        *,
        web3: AsyncWeb3 | None = None,
    ):
        self.name = name
        self.config = config or {}
        self.logger = logger.bind(adapter=self.__class__.__name__)

        self.chain_id: int = int(self.config.get("chain_id", CHAIN_ID_BASE))
        if self.chain_id not in SUPPORTED_CHAINS:
            raise ValueError(
                f"Unsupported chain_id {self.chain_id}. Supported: {SUPPORTED_CHAINS}"
            )

        # Adapters that build their own client also disconnect it on close().
        self._owns_web3 = web3 is None
        self.web3 = web3 or get_web3_from_chain_id(self.chain_id)

    def resolve_address(self, key: str, table: dict[int, str] | None = None) -> str:
        """Look up ``key`` in adapter config, then global config, then ``table``."""
        addresses = self.config.get("addresses") or {}
        value = addresses.get(key) or get_address_overrides(self.chain_id).get(key)
        if not value and table is not None:
            value = table.get(self.chain_id)
        if not value:
            raise ValueError(
                f"No {key} address configured for chain {self.chain_id}"
            )
        return str(value)

    async def close(self) -> None:
        if self._owns_web3:
            await self.web3.provider.disconnect()
