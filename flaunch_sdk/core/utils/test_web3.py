import copy
from unittest.mock import AsyncMock

import pytest
from web3 import AsyncWeb3

import flaunch_sdk.core.config as config
import flaunch_sdk.core.utils.web3 as web3_utils
from flaunch_sdk.core.constants.chains import CHAIN_ID_BASE, CHAIN_ID_BASE_SEPOLIA
from flaunch_sdk.core.utils.web3 import (
    _get_rpcs_for_chain_id,
    _RetryingProvider,
    get_web3_from_chain_id,
)

OK_RESPONSE = b'{"jsonrpc":"2.0","id":1,"result":"0x1"}'


class _HttpError(Exception):
    def __init__(self, status: int):
        super().__init__(f"HTTP {status}")
        self.status = status


@pytest.fixture(autouse=True)
def no_retry_delay(monkeypatch):
    monkeypatch.setattr(web3_utils, "_BASE_DELAY_S", 0)


@pytest.fixture
def restore_global_config():
    original = copy.deepcopy(config.CONFIG)
    yield
    config.set_config(original)


@pytest.mark.asyncio
async def test_retrying_provider_retries_http_429():
    provider = _RetryingProvider("https://rpc.invalid")
    provider._make_request = AsyncMock(side_effect=[_HttpError(429), OK_RESPONSE])

    resp = await provider.make_request("eth_blockNumber", [])

    assert resp["result"] == "0x1"
    assert provider._make_request.await_count == 2


@pytest.mark.asyncio
async def test_retrying_provider_gives_up_after_max_attempts():
    provider = _RetryingProvider("https://rpc.invalid")
    provider._make_request = AsyncMock(side_effect=_HttpError(503))

    with pytest.raises(_HttpError):
        await provider.make_request("eth_getLogs", [])
    assert provider._make_request.await_count == web3_utils._MAX_RETRIES


@pytest.mark.asyncio
async def test_retrying_provider_does_not_retry_other_failures():
    provider = _RetryingProvider("https://rpc.invalid")
    provider._make_request = AsyncMock(side_effect=ConnectionError("refused"))

    with pytest.raises(ConnectionError):
        await provider.make_request("eth_blockNumber", [])
    assert provider._make_request.await_count == 1


@pytest.mark.asyncio
async def test_retrying_provider_returns_rpc_errors_untouched():
    provider = _RetryingProvider("https://rpc.invalid")
    provider._make_request = AsyncMock(
        return_value=(
            b'{"jsonrpc":"2.0","id":1,"error":{"code":3,"message":"execution reverted"}}'
        )
    )

    resp = await provider.make_request("eth_call", [])

    assert resp["error"]["code"] == 3
    assert provider._make_request.await_count == 1


def test_rpcs_from_config_accept_str_and_int_keys(restore_global_config):
    config.set_rpc_urls(
        {
            str(CHAIN_ID_BASE): "https://base.example",
            CHAIN_ID_BASE_SEPOLIA: ["https://a", "https://b"],
        }
    )
    assert _get_rpcs_for_chain_id(CHAIN_ID_BASE) == ["https://base.example"]
    assert _get_rpcs_for_chain_id(CHAIN_ID_BASE_SEPOLIA) == ["https://a", "https://b"]


def test_rpcs_fall_back_to_public_endpoint(restore_global_config):
    config.set_config({})
    assert _get_rpcs_for_chain_id(CHAIN_ID_BASE) == ["https://mainnet.base.org"]


def test_rpcs_unknown_chain(restore_global_config):
    config.set_config({})
    with pytest.raises(ValueError, match="No RPCs configured"):
        _get_rpcs_for_chain_id(1)


def test_get_web3_uses_first_configured_rpc(restore_global_config):
    config.set_rpc_urls({str(CHAIN_ID_BASE): ["https://first.example", "https://second"]})
    web3 = get_web3_from_chain_id(CHAIN_ID_BASE)
    assert isinstance(web3, AsyncWeb3)
    assert isinstance(web3.provider, _RetryingProvider)
    assert web3.provider.endpoint_uri == "https://first.example"
