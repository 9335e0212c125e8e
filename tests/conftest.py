"""Shared fixtures for the Signet SDK tests."""

from typing import Any, Dict, List, Sequence

import pytest
from eth_account import Account

from signet_sdk.constants import MAINNET
from signet_sdk.orders import ChainConfig, LocalAccountSigner

# Test wallet (DO NOT use in production)
TEST_PRIVATE_KEY = "0x" + "ab" * 32  # Deterministic test key
TEST_ACCOUNT = Account.from_key(TEST_PRIVATE_KEY)
TEST_ADDRESS = TEST_ACCOUNT.address

WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
RECIPIENT = "0x0000000000000000000000000000000000000002"

ROLLUP_CHAIN = ChainConfig(
    chain_id=MAINNET.rollup_chain_id, order_contract=MAINNET.rollup_orders
)


class FakeChainReader:
    """In-memory ChainReader keyed by (contract, function, args)."""

    def __init__(self):
        self.balances: Dict[tuple, int] = {}
        self.allowances: Dict[tuple, int] = {}
        self.bitmaps: Dict[tuple, int] = {}
        self.fail_on: Dict[str, Exception] = {}
        self.calls: List[tuple] = []

    def set_balance(self, token: str, owner: str, amount: int):
        self.balances[(token.lower(), owner.lower())] = amount

    def set_allowance(self, token: str, owner: str, amount: int):
        self.allowances[(token.lower(), owner.lower())] = amount

    def set_bitmap(self, owner: str, word_position: int, bitmap: int):
        self.bitmaps[(owner.lower(), word_position)] = bitmap

    async def read_contract(
        self,
        address: str,
        abi: List[Dict[str, Any]],
        function_name: str,
        args: Sequence[Any],
    ) -> Any:
        self.calls.append((address, function_name, tuple(args)))
        if function_name in self.fail_on:
            raise self.fail_on[function_name]

        if function_name == "nonceBitmap":
            owner, word_position = args
            return self.bitmaps.get((owner.lower(), word_position), 0)
        if function_name == "balanceOf":
            (owner,) = args
            return self.balances.get((address.lower(), owner.lower()), 0)
        if function_name == "allowance":
            owner, _spender = args
            return self.allowances.get((address.lower(), owner.lower()), 0)
        raise AssertionError(f"Unexpected call: {function_name}")


class NoAddressSigner(LocalAccountSigner):
    """A signer that cannot report a default account."""

    async def get_address(self):
        return None


@pytest.fixture
def signer():
    return LocalAccountSigner(TEST_PRIVATE_KEY)


@pytest.fixture
def reader():
    return FakeChainReader()
