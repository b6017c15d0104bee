from __future__ import annotations

import asyncio
import json
import sys
from dataclasses import asdict
from typing import Any

import click
from loguru import logger

from flaunch_sdk.adapters.flaunch_adapter.adapter import FlaunchAdapter
from flaunch_sdk.core.config import load_config
from flaunch_sdk.core.constants.chains import CHAIN_ID_BASE
from flaunch_sdk.core.events.types import EventBatch


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _adapter(chain_id: int, version: str) -> FlaunchAdapter:
    return FlaunchAdapter(
        {"chain_id": chain_id, "position_manager_version": version}
    )


async def _wait_until_interrupted() -> None:
    await asyncio.Event().wait()


@click.group(name="flaunch", help="Watch and decode Flaunch pool events.")
@click.option("--config", "config_path", type=click.Path(), default=None)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
)
def flaunch_cli(config_path: str | None, log_level: str) -> None:
    if config_path:
        load_config(config_path, require_exists=True)
    logger.remove()
    logger.add(sys.stderr, level=str(log_level).upper())


_chain_option = click.option(
    "--chain-id", type=int, default=CHAIN_ID_BASE, show_default=True
)
_version_option = click.option(
    "--position-manager",
    "version",
    type=click.Choice(["v1", "v1_1", "any"], case_sensitive=False),
    default="v1",
    show_default=True,
)


@flaunch_cli.command(name="watch-swaps", help="Stream PoolSwap events as JSON lines.")
@click.option("--coin", default=None, help="Only watch the pool of this coin.")
@click.option("--start-block", type=int, default=None)
@click.option("--interval-ms", type=int, default=None)
@_chain_option
@_version_option
def watch_swaps_cmd(
    coin: str | None,
    start_block: int | None,
    interval_ms: int | None,
    chain_id: int,
    version: str,
) -> None:
    def on_batch(batch: EventBatch) -> None:
        if batch.is_fetching_from_start:
            logger.info(f"Replaying swaps from block {start_block}")
        for log in batch.logs:
            click.echo(json.dumps(asdict(log), default=str))

    async def _run() -> None:
        adapter = _adapter(chain_id, version)
        try:
            handle = await adapter.watch_pool_swap(
                on_batch,
                filter_by_coin=coin,
                start_block=start_block,
                poll_interval_ms=interval_ms,
            )
            try:
                await _wait_until_interrupted()
            finally:
                await handle.aclose()
        finally:
            await adapter.close()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        logger.info("Stopped")


@flaunch_cli.command(name="parse-tx", help="Decode the PoolSwap emitted by a transaction.")
@click.argument("tx_hash")
@click.option("--coin", default=None, help="Coin traded, enables BUY/SELL decoding.")
@_chain_option
@_version_option
def parse_tx_cmd(tx_hash: str, coin: str | None, chain_id: int, version: str) -> None:
    async def _run():
        adapter = _adapter(chain_id, version)
        try:
            return await adapter.parse_swap_tx(tx_hash, coin)
        finally:
            await adapter.close()

    result = asyncio.run(_run())
    if result is None:
        _echo_json({"ok": False, "error": "swap_not_found", "tx_hash": tx_hash})
        sys.exit(1)
    _echo_json({"ok": True, "result": asdict(result)})


def main() -> None:
    flaunch_cli()


if __name__ == "__main__":
    main()
