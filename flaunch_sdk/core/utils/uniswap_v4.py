from __future__ import annotations

from dataclasses import dataclass, replace

from eth_abi import encode
from eth_utils import keccak, to_checksum_address

# Flaunch pools are always created with a zero static fee and a tick spacing of 60.
FLAUNCH_POOL_FEE = 0
FLAUNCH_TICK_SPACING = 60


@dataclass(frozen=True)
class PoolKey:
    currency0: str
    currency1: str
    fee: int
    tick_spacing: int
    hooks: str

    @classmethod
    def from_tuple(cls, raw) -> PoolKey:
        currency0, currency1, fee, tick_spacing, hooks = raw
        return cls(
            currency0=to_checksum_address(currency0),
            currency1=to_checksum_address(currency1),
            fee=int(fee),
            tick_spacing=int(tick_spacing),
            hooks=to_checksum_address(hooks),
        )


def _address_value(address: str) -> int:
    return int(str(address), 16)


def order_pool_key(key: PoolKey) -> PoolKey:
    if _address_value(key.currency0) <= _address_value(key.currency1):
        return key
    return replace(key, currency0=key.currency1, currency1=key.currency0)


def get_pool_id(key: PoolKey) -> str:
    """keccak256(abi.encode(PoolKey)) as a 0x-prefixed hex string."""
    encoded = encode(
        ["address", "address", "uint24", "int24", "address"],
        [
            to_checksum_address(key.currency0),
            to_checksum_address(key.currency1),
            int(key.fee),
            int(key.tick_spacing),
            to_checksum_address(key.hooks),
        ],
    )
    return "0x" + keccak(encoded).hex()


def fleth_is_currency_zero(coin_address: str, fleth_address: str) -> bool:
    # Currencies are ordered numerically, so flETH sits in slot 0 whenever the
    # coin sorts above it.
    return _address_value(coin_address) > _address_value(fleth_address)


def flaunch_pool_key(coin_address: str, *, fleth_address: str, hooks: str) -> PoolKey:
    return order_pool_key(
        PoolKey(
            currency0=to_checksum_address(fleth_address),
            currency1=to_checksum_address(coin_address),
            fee=FLAUNCH_POOL_FEE,
            tick_spacing=FLAUNCH_TICK_SPACING,
            hooks=to_checksum_address(hooks),
        )
    )
