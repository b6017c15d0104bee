import asyncio
from typing import Any

from loguru import logger
from web3 import AsyncHTTPProvider, AsyncWeb3

from flaunch_sdk.core.config import get_rpc_urls
from flaunch_sdk.core.constants.chains import DEFAULT_RPC_URLS

# Retry only on provider-side transient statuses. JSON-RPC errors and
# on-chain reverts are returned to the caller untouched.
_RETRYABLE_STATUS_CODES = {429, 502, 503, 504}
_MAX_RETRIES = 3
_BASE_DELAY_S = 0.25


def _extract_http_status(exc: Exception) -> int | None:
    status = getattr(exc, "status", None)
    if isinstance(status, int):
        return status
    status_code = getattr(exc, "status_code", None)
    if isinstance(status_code, int):
        return status_code
    response = getattr(exc, "response", None)
    if response is not None:
        code = getattr(response, "status_code", None)
        if isinstance(code, int):
            return code
    return None


class _RetryingProvider(AsyncHTTPProvider):
    async def make_request(self, method, params):  # type: ignore[override]
        req = self.form_request(method, params)
        request_data = self.encode_rpc_dict(req)

        for attempt in range(_MAX_RETRIES):
            try:
                raw_response = await self._make_request(method, request_data)
                return self.decode_rpc_response(raw_response)
            except Exception as exc:
                status = _extract_http_status(exc)
                if status in _RETRYABLE_STATUS_CODES and attempt < _MAX_RETRIES - 1:
                    delay_s = _BASE_DELAY_S * (2**attempt)
                    logger.debug(
                        f"RPC {method} returned HTTP {status}; retrying in {delay_s}s"
                    )
                    await asyncio.sleep(delay_s)
                    continue
                raise


def _get_rpcs_for_chain_id(chain_id: int) -> list[str]:
    mapping = get_rpc_urls()
    rpcs: Any = mapping.get(str(chain_id))
    if rpcs is None:
        rpcs = mapping.get(chain_id)  # allow int keys
    if rpcs is None:
        rpcs = DEFAULT_RPC_URLS.get(chain_id)
    if rpcs is None:
        raise ValueError(f"No RPCs configured for chain ID {chain_id}")
    if isinstance(rpcs, str):
        return [rpcs]
    return list(rpcs)


def _get_web3(rpc: str) -> AsyncWeb3:
    provider = _RetryingProvider(
        rpc, request_kwargs={"headers": AsyncHTTPProvider.get_request_headers()}
    )
    return AsyncWeb3(provider)


def get_web3_from_chain_id(chain_id: int) -> AsyncWeb3:
    """Build a web3 client for the first configured RPC of ``chain_id``.

    The caller owns the returned client and must disconnect its provider.
    """
    return _get_web3(_get_rpcs_for_chain_id(chain_id)[0])

