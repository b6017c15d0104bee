# Minimal ABIs for the Flaunch position managers (events + read helpers).

_POOL_KEY_COMPONENTS = [
    {"name": "currency0", "type": "address"},
    {"name": "currency1", "type": "address"},
    {"name": "fee", "type": "uint24"},
    {"name": "tickSpacing", "type": "int24"},
    {"name": "hooks", "type": "address"},
]

POOL_KEY_FN = {
    "name": "poolKey",
    "type": "function",
    "stateMutability": "view",
    "inputs": [{"name": "_token", "type": "address"}],
    "outputs": [{"name": "", "type": "tuple", "components": _POOL_KEY_COMPONENTS}],
}

POOL_SWAP_EVENT = {
    "name": "PoolSwap",
    "type": "event",
    "anonymous": False,
    "inputs": [
        {"name": "poolId", "type": "bytes32", "indexed": True},
        {"name": "flAmount0", "type": "int256", "indexed": False},
        {"name": "flAmount1", "type": "int256", "indexed": False},
        {"name": "flFee0", "type": "int256", "indexed": False},
        {"name": "flFee1", "type": "int256", "indexed": False},
        {"name": "ispAmount0", "type": "int256", "indexed": False},
        {"name": "ispAmount1", "type": "int256", "indexed": False},
        {"name": "ispFee0", "type": "int256", "indexed": False},
        {"name": "ispFee1", "type": "int256", "indexed": False},
        {"name": "uniAmount0", "type": "int256", "indexed": False},
        {"name": "uniAmount1", "type": "int256", "indexed": False},
        {"name": "uniFee0", "type": "int256", "indexed": False},
        {"name": "uniFee1", "type": "int256", "indexed": False},
    ],
}


def _pool_created_event(params_components: list[dict]) -> dict:
    return {
        "name": "PoolCreated",
        "type": "event",
        "anonymous": False,
        "inputs": [
            {"name": "_poolId", "type": "bytes32", "indexed": True},
            {"name": "_memecoin", "type": "address", "indexed": False},
            {"name": "_memecoinTreasury", "type": "address", "indexed": False},
            {"name": "_tokenId", "type": "uint256", "indexed": False},
            {"name": "_currencyFlipped", "type": "bool", "indexed": False},
            {"name": "_flaunchFee", "type": "uint256", "indexed": False},
            {
                "name": "_params",
                "type": "tuple",
                "indexed": False,
                "components": params_components,
            },
        ],
    }


FLAUNCH_PARAMS_V1 = [
    {"name": "name", "type": "string"},
    {"name": "symbol", "type": "string"},
    {"name": "tokenUri", "type": "string"},
    {"name": "initialTokenFairLaunch", "type": "uint256"},
    {"name": "premineAmount", "type": "uint256"},
    {"name": "creator", "type": "address"},
    {"name": "creatorFeeAllocation", "type": "uint24"},
    {"name": "flaunchAt", "type": "uint256"},
    {"name": "initialPriceParams", "type": "bytes"},
    {"name": "feeCalculatorParams", "type": "bytes"},
]

FLAUNCH_PARAMS_V1_1 = [
    {"name": "name", "type": "string"},
    {"name": "symbol", "type": "string"},
    {"name": "tokenUri", "type": "string"},
    {"name": "initialTokenFairLaunch", "type": "uint256"},
    {"name": "fairLaunchDuration", "type": "uint256"},
    {"name": "premineAmount", "type": "uint256"},
    {"name": "creator", "type": "address"},
    {"name": "creatorFeeAllocation", "type": "uint24"},
    {"name": "flaunchAt", "type": "uint256"},
    {"name": "initialPriceParams", "type": "bytes"},
    {"name": "feeCalculatorParams", "type": "bytes"},
]

ANY_FLAUNCH_PARAMS = [
    {"name": "memecoin", "type": "address"},
    {"name": "creator", "type": "address"},
    {"name": "creatorFeeAllocation", "type": "uint24"},
    {"name": "initialPriceParams", "type": "bytes"},
    {"name": "feeCalculatorParams", "type": "bytes"},
]

FLAUNCH_POSITION_MANAGER_ABI = [
    POOL_KEY_FN,
    POOL_SWAP_EVENT,
    _pool_created_event(FLAUNCH_PARAMS_V1),
]

FLAUNCH_POSITION_MANAGER_V1_1_ABI = [
    POOL_KEY_FN,
    POOL_SWAP_EVENT,
    _pool_created_event(FLAUNCH_PARAMS_V1_1),
]

ANY_POSITION_MANAGER_ABI = [
    POOL_KEY_FN,
    POOL_SWAP_EVENT,
    _pool_created_event(ANY_FLAUNCH_PARAMS),
]
