"""
Minimal contract interfaces used to resolve pools and token metadata.

Only the functions the quote builder reads are declared, so no ABI has to
be discovered at runtime.
"""

from web3 import Web3

POOL_ABI = [
    {
        "inputs": [],
        "name": "token0",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "token1",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "fee",
        "outputs": [{"internalType": "uint24", "name": "", "type": "uint24"}],
        "stateMutability": "view",
        "type": "function",
    },
]

ERC20_ABI = [
    {
        "inputs": [],
        "name": "symbol",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "decimals",
        "outputs": [{"internalType": "uint8", "name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
]

# Older tokens (MKR, SAI) return symbol() as bytes32
ERC20_BYTES32_ABI = [
    {
        "inputs": [],
        "name": "symbol",
        "outputs": [{"internalType": "bytes32", "name": "", "type": "bytes32"}],
        "stateMutability": "view",
        "type": "function",
    },
]

QUOTER_ADDRESS = "0xb27308f9F90D607463bb33eA1BeBb41C27CE5AB6"
QUOTE_EXACT_INPUT_SINGLE = (
    "quoteExactInputSingle(address,address,uint24,uint256,uint160)"
)


def pool_contract(web3: Web3, address: str):
    """Bind the pool interface to ``address``."""
    return web3.eth.contract(address=Web3.to_checksum_address(address), abi=POOL_ABI)


def token_contract(web3: Web3, address: str, abi=ERC20_ABI):
    """Bind the ERC20 metadata interface to ``address``."""
    return web3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)


def decode_bytes32_symbol(raw: bytes) -> str:
    """Strip null padding from a bytes32 symbol."""
    return bytes(raw).split(b"\x00")[0].decode("utf-8", errors="ignore")
