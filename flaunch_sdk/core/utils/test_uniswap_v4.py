from eth_utils import keccak

from flaunch_sdk.core.utils.uniswap_v4 import (
    FLAUNCH_TICK_SPACING,
    PoolKey,
    flaunch_pool_key,
    fleth_is_currency_zero,
    get_pool_id,
    order_pool_key,
)

FLETH = "0x000000000D564D5be76f7f0d28fE52605afC7Cf8"
HOOKS = "0x51Bba15255406Cfe7099a42183302640ba7dAFDC"
HIGH_COIN = "0xf1a2b3c4d5e6f7a8b9c0d1e2f3a4b5c6d7e8f9a0"
LOW_COIN = "0x0000000000000000000000000000000000000001"


class TestOrdering:
    def test_order_pool_key_sorts_numerically(self):
        key = PoolKey(HIGH_COIN.lower(), FLETH, 0, 60, HOOKS)
        ordered = order_pool_key(key)
        assert int(ordered.currency0, 16) < int(ordered.currency1, 16)
        assert ordered.currency1.lower() == HIGH_COIN.lower()

    def test_order_pool_key_keeps_sorted_key(self):
        key = PoolKey(FLETH, HIGH_COIN, 0, 60, HOOKS)
        assert order_pool_key(key) is key

    def test_fleth_is_currency_zero(self):
        assert fleth_is_currency_zero(HIGH_COIN, FLETH) is True
        assert fleth_is_currency_zero(LOW_COIN, FLETH) is False

    def test_fleth_is_currency_zero_is_case_insensitive(self):
        assert fleth_is_currency_zero(HIGH_COIN.lower(), FLETH.lower()) is True


class TestPoolId:
    def test_pool_id_is_keccak_of_encoded_key(self):
        key = flaunch_pool_key(HIGH_COIN, fleth_address=FLETH, hooks=HOOKS)
        pool_id = get_pool_id(key)
        assert pool_id.startswith("0x")
        assert len(pool_id) == 66

        # abi.encode of five static words is just the padded words back to back.
        words = [
            bytes.fromhex(key.currency0[2:]).rjust(32, b"\x00"),
            bytes.fromhex(key.currency1[2:]).rjust(32, b"\x00"),
            key.fee.to_bytes(32, "big"),
            key.tick_spacing.to_bytes(32, "big", signed=True),
            bytes.fromhex(key.hooks[2:]).rjust(32, b"\x00"),
        ]
        assert pool_id == "0x" + keccak(b"".join(words)).hex()

    def test_flaunch_pool_key_orders_and_fixes_params(self):
        key = flaunch_pool_key(LOW_COIN, fleth_address=FLETH, hooks=HOOKS)
        assert key.currency0.lower() == LOW_COIN.lower()
        assert key.currency1.lower() == FLETH.lower()
        assert key.fee == 0
        assert key.tick_spacing == FLAUNCH_TICK_SPACING

    def test_pool_id_differs_per_coin(self):
        a = get_pool_id(flaunch_pool_key(LOW_COIN, fleth_address=FLETH, hooks=HOOKS))
        b = get_pool_id(flaunch_pool_key(HIGH_COIN, fleth_address=FLETH, hooks=HOOKS))
        assert a != b

    def test_from_tuple(self):
        key = PoolKey.from_tuple((FLETH.lower(), HIGH_COIN.lower(), 0, 60, HOOKS.lower()))
        assert key.currency0.lower() == FLETH.lower()
        assert key.tick_spacing == 60
