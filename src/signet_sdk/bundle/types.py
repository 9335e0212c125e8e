"""Bundle Types for Signet.

Mirror the ``signet_sendBundle`` / ``signet_callBundle`` JSON-RPC payloads.

Optional fields are ``None`` when absent. Optional arrays are also ``None``
when absent, and an empty array is normalized to ``None`` so that it
round-trips through the wire format, which omits it.
"""

from dataclasses import dataclass
from typing import Dict, Literal, Optional, Tuple, Union

BlockTag = Literal["latest", "pending", "earliest"]
BlockNumberOrTag = Union[int, BlockTag]

BLOCK_TAGS = ("latest", "pending", "earliest")


def _optional_tuple(obj, name):
    value = getattr(obj, name)
    object.__setattr__(obj, name, tuple(value) if value else None)


@dataclass(frozen=True)
class SignetEthBundle:
    """Bundle of transactions for ``signet_sendBundle``.

    Extends Flashbots ``eth_sendBundle`` with host transactions.
    """

    txs: Tuple[str, ...]
    """Raw EIP-2718 encoded transactions."""

    block_number: int
    min_timestamp: Optional[int] = None
    max_timestamp: Optional[int] = None
    reverting_tx_hashes: Optional[Tuple[str, ...]] = None
    replacement_uuid: Optional[str] = None
    dropping_tx_hashes: Optional[Tuple[str, ...]] = None
    refund_percent: Optional[int] = None
    """Percentage of MEV profit to refund (0-100)."""

    refund_recipient: Optional[str] = None
    refund_tx_hashes: Optional[Tuple[str, ...]] = None
    host_txs: Optional[Tuple[str, ...]] = None
    """Transactions for the host bundle."""

    def __post_init__(self):
        object.__setattr__(self, "txs", tuple(self.txs))
        for name in (
            "reverting_tx_hashes",
            "dropping_tx_hashes",
            "refund_tx_hashes",
            "host_txs",
        ):
            _optional_tuple(self, name)


@dataclass(frozen=True)
class SignetCallBundle:
    """Bundle of transactions for ``signet_callBundle`` (simulation)."""

    txs: Tuple[str, ...]
    block_number: int
    state_block_number: BlockNumberOrTag
    timestamp: Optional[int] = None
    gas_limit: Optional[int] = None
    difficulty: Optional[int] = None
    base_fee: Optional[int] = None
    transaction_index: Optional[int] = None
    coinbase: Optional[str] = None
    timeout: Optional[int] = None
    """Simulation timeout in seconds."""

    def __post_init__(self):
        object.__setattr__(self, "txs", tuple(self.txs))


@dataclass(frozen=True)
class CallBundleTransactionResult:
    """Result for a single transaction of a simulated bundle."""

    coinbase_diff: int
    eth_sent_to_coinbase: int
    from_address: str
    gas_fees: int
    gas_price: int
    gas_used: int
    tx_hash: str
    to_address: Optional[str] = None
    value: Optional[str] = None
    """Return data if the transaction succeeded."""

    revert: Optional[str] = None
    """Revert reason if the transaction failed."""


@dataclass(frozen=True)
class AggregateOrders:
    """Order inputs and outputs detected in a bundle.

    ``outputs`` maps "(chainId, token)" keys to recipient -> amount;
    ``inputs`` maps token -> amount. Amounts stay decimal strings.
    """

    outputs: Dict[str, Dict[str, str]]
    inputs: Dict[str, str]


@dataclass(frozen=True)
class AggregateFills:
    fills: Dict[str, Dict[str, str]]


@dataclass(frozen=True)
class SignetCallBundleResponse:
    """Response of ``signet_callBundle``."""

    bundle_hash: str
    bundle_gas_price: int
    coinbase_diff: int
    eth_sent_to_coinbase: int
    gas_fees: int
    results: Tuple[CallBundleTransactionResult, ...]
    state_block_number: int
    total_gas_used: int
    orders: AggregateOrders
    fills: AggregateFills
