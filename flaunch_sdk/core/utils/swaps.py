"""Classification of ``PoolSwap`` accounting into BUY / SELL records.

A Flaunch swap settles across three internal buckets: the hook's own
fair-launch/internal swap (``fl``), the internal swap pool (``isp``) and the
underlying Uniswap v4 pool (``uni``). Each bucket emits a signed delta and a
signed fee for both pool currencies. Summing a currency across the buckets
gives the true net movement and total fee for that currency.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import StrEnum
from typing import Any


class SwapType(StrEnum):
    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class SwapLogArgs:
    fl_amount0: int
    fl_amount1: int
    fl_fee0: int
    fl_fee1: int
    isp_amount0: int
    isp_amount1: int
    isp_fee0: int
    isp_fee1: int
    uni_amount0: int
    uni_amount1: int
    uni_fee0: int
    uni_fee1: int

    @classmethod
    def from_event_args(cls, args: Mapping[str, Any]) -> SwapLogArgs:
        """Build from decoded ``PoolSwap`` args (``flAmount0``, ``ispFee1``, ...)."""
        values = {}
        for f in fields(cls):
            bucket, rest = f.name.split("_", 1)
            kind, slot = rest[:-1], rest[-1]
            values[f.name] = int(args[f"{bucket}{kind.capitalize()}{slot}"])
        return cls(**values)

    def currency_delta(self, slot: int) -> int:
        return sum(getattr(self, f"{b}_amount{slot}") for b in ("fl", "isp", "uni"))

    def currency_fees(self, slot: int) -> int:
        return sum(getattr(self, f"{b}_fee{slot}") for b in ("fl", "isp", "uni"))


@dataclass(frozen=True)
class SwapFees:
    is_in_fleth: bool
    amount: int


@dataclass(frozen=True)
class BuySwapDelta:
    coins_bought: int
    fleth_sold: int
    fees: SwapFees


@dataclass(frozen=True)
class SellSwapDelta:
    coins_sold: int
    fleth_bought: int
    fees: SwapFees


@dataclass(frozen=True)
class ParsedSwapData:
    type: SwapType
    delta: BuySwapDelta | SellSwapDelta


def parse_swap_data(args: SwapLogArgs, fleth_is_currency_zero: bool) -> ParsedSwapData:
    """Classify a swap from the perspective of the pool's flETH leg.

    The flETH slot delta alone decides direction: negative means flETH left the
    pool accounting (BUY), anything else is a SELL. The fee is taken in flETH
    iff the flETH slot fee sum is negative; the matching leg is reported net
    of the fee.
    """
    fleth_slot = 0 if fleth_is_currency_zero else 1
    coin_slot = 1 - fleth_slot

    fleth_delta = args.currency_delta(fleth_slot)
    coin_delta = args.currency_delta(coin_slot)
    fleth_fees = args.currency_fees(fleth_slot)
    coin_fees = args.currency_fees(coin_slot)

    swap_type = SwapType.BUY if fleth_delta < 0 else SwapType.SELL
    fees_in_fleth = fleth_fees < 0
    fees = SwapFees(
        is_in_fleth=fees_in_fleth,
        amount=abs(fleth_fees) if fees_in_fleth else abs(coin_fees),
    )

    coin_amount = abs(coin_delta) - (0 if fees_in_fleth else fees.amount)
    fleth_amount = abs(fleth_delta) - (fees.amount if fees_in_fleth else 0)

    if swap_type == SwapType.BUY:
        return ParsedSwapData(
            type=swap_type,
            delta=BuySwapDelta(
                coins_bought=coin_amount, fleth_sold=fleth_amount, fees=fees
            ),
        )
    return ParsedSwapData(
        type=swap_type,
        delta=SellSwapDelta(
            coins_sold=coin_amount, fleth_bought=fleth_amount, fees=fees
        ),
    )
