"""Chain state reads used by nonce checks and feasibility evaluation.

The SDK only needs three views: Permit2's ``nonceBitmap`` and ERC-20
``balanceOf``/``allowance``. Anything that implements ``ChainReader`` can serve
them; ``Web3ChainReader`` does so over ``web3.AsyncWeb3``.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence

from eth_utils import to_checksum_address
from web3 import AsyncHTTPProvider, AsyncWeb3

from .constants import PERMIT2_ADDRESS

logger = logging.getLogger(__name__)

# Permit2 stores consumed nonces as bits: word = nonce >> 8, bit = nonce & 0xff
PERMIT2_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "wordPosition", "type": "uint256"},
        ],
        "name": "nonceBitmap",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]

ERC20_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [{"name": "account", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "spender", "type": "address"},
        ],
        "name": "allowance",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]


class ChainReader(Protocol):
    """Protocol for read-only contract calls."""

    async def read_contract(
        self,
        address: str,
        abi: List[Dict[str, Any]],
        function_name: str,
        args: Sequence[Any],
    ) -> Any:
        """Call a view function and return its decoded result."""
        ...


class Web3ChainReader:
    """ChainReader backed by an ``AsyncWeb3`` instance.

    Each read is bounded by ``timeout`` seconds. Reads are never retried;
    the caller decides the retry policy.
    """

    def __init__(self, w3: AsyncWeb3, timeout: Optional[float] = 10.0):
        self.w3 = w3
        self.timeout = timeout

    @classmethod
    def from_url(cls, rpc_url: str, timeout: Optional[float] = 10.0) -> "Web3ChainReader":
        """Create a reader for an HTTP JSON-RPC endpoint."""
        return cls(AsyncWeb3(AsyncHTTPProvider(rpc_url)), timeout=timeout)

    async def read_contract(
        self,
        address: str,
        abi: List[Dict[str, Any]],
        function_name: str,
        args: Sequence[Any],
    ) -> Any:
        contract = self.w3.eth.contract(address=to_checksum_address(address), abi=abi)
        call = getattr(contract.functions, function_name)(*args).call()
        logger.debug("eth_call %s.%s%s", address, function_name, tuple(args))
        return await asyncio.wait_for(call, timeout=self.timeout)


async def read_nonce_bitmap(reader: ChainReader, owner: str, word_position: int) -> int:
    """Read one 256-bit word of an owner's Permit2 nonce bitmap."""
    return await reader.read_contract(
        PERMIT2_ADDRESS,
        PERMIT2_ABI,
        "nonceBitmap",
        [to_checksum_address(owner), word_position],
    )


async def get_token_balance(reader: ChainReader, token: str, owner: str) -> int:
    """Read an owner's ERC-20 balance."""
    return await reader.read_contract(
        token, ERC20_ABI, "balanceOf", [to_checksum_address(owner)]
    )


async def get_permit2_allowance(reader: ChainReader, token: str, owner: str) -> int:
    """Read the ERC-20 allowance an owner has granted to Permit2."""
    return await reader.read_contract(
        token,
        ERC20_ABI,
        "allowance",
        [to_checksum_address(owner), PERMIT2_ADDRESS],
    )
