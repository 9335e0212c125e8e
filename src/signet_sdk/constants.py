"""Chain configuration constants for Signet."""

from dataclasses import dataclass
from typing import Optional

# Canonical Permit2 deployment, same address on every EVM chain
PERMIT2_ADDRESS = "0x000000000022D473030F116dDEE9F6B43aC78BA3"

# Permit2 EIP-712 domain name
PERMIT2_NAME = "Permit2"

# Zero address
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Fill deadline offset (seconds) when no chain constants are supplied
DEFAULT_SLOT_TIME = 12


@dataclass(frozen=True)
class SignetSystemConstants:
    """System constants for a Signet chain pair (host + rollup)."""

    host_chain_id: int
    rollup_chain_id: int
    host_orders: str
    """Orders contract on the host chain."""

    rollup_orders: str
    """Orders contract on the rollup."""

    host_zenith: str
    host_passage: str
    host_transactor: str
    rollup_passage: str
    slot_time: int = DEFAULT_SLOT_TIME
    """Host block time in seconds."""


MAINNET = SignetSystemConstants(
    host_chain_id=1,
    rollup_chain_id=519,
    host_orders="0x96f44ddc3bc8892371305531f1a6d8ca2331fe6c",
    rollup_orders="0x000000000000007369676e65742d6f7264657273",
    host_zenith="0xbce84d45d7be8859bcbd838d4a7b3448b55e6869",
    host_passage="0x02a64d6e2c30d2b07ddbd177b24d9d0f6439ccbd",
    host_transactor="0xc4388a6f4917b8d392b19b43f9c46fec1b890f45",
    rollup_passage="0x0000000000007369676e65742d70617373616765",
)

PARMIGIANA = SignetSystemConstants(
    host_chain_id=3151908,
    rollup_chain_id=88888,
    host_orders="0x96f44ddc3bc8892371305531f1a6d8ca2331fe6c",
    rollup_orders="0x000000000000007369676e65742d6f7264657273",
    host_zenith="0x143a5be4e559ca49dbf0966d4b9c398425c5fc19",
    host_passage="0x28524d2a753925ef000c3f0f811cdf452c6256af",
    host_transactor="0x0b4fc18e78c585687e01c172a1087ea687943db9",
    rollup_passage="0x0000000000007369676e65742d70617373616765",
)

NETWORKS = {
    "mainnet": MAINNET,
    "parmigiana": PARMIGIANA,
}


def get_orders_contract(constants: SignetSystemConstants, chain_id: int) -> Optional[str]:
    """Return the orders contract for ``chain_id``, or None if the pair doesn't include it."""
    if chain_id == constants.host_chain_id:
        return constants.host_orders
    if chain_id == constants.rollup_chain_id:
        return constants.rollup_orders
    return None
