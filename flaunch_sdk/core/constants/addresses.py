from flaunch_sdk.core.constants.chains import CHAIN_ID_BASE, CHAIN_ID_BASE_SEPOLIA

FLAUNCH_POSITION_MANAGER: dict[int, str] = {
    CHAIN_ID_BASE: "0x51Bba15255406Cfe7099a42183302640ba7dAFDC",
    CHAIN_ID_BASE_SEPOLIA: "0x9A7059cA00dA92843906Cb4bCa1D005cE848AFdC",
}

FLETH: dict[int, str] = {
    CHAIN_ID_BASE: "0x000000000D564D5be76f7f0d28fE52605afC7Cf8",
    CHAIN_ID_BASE_SEPOLIA: "0x79FC52701cD4BE6f9Ba9aDC94c207DE37e3314eb",
}
