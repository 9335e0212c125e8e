"""Signet bundle wire types and their JSON-RPC serialization."""

from .types import (
    BlockNumberOrTag,
    SignetEthBundle,
    SignetCallBundle,
    CallBundleTransactionResult,
    AggregateOrders,
    AggregateFills,
    SignetCallBundleResponse,
)
from .serialization import (
    serialize_eth_bundle,
    deserialize_eth_bundle,
    serialize_call_bundle,
    deserialize_call_bundle,
    deserialize_transaction_result,
    deserialize_call_bundle_response,
)

__all__ = [
    "BlockNumberOrTag",
    "SignetEthBundle",
    "SignetCallBundle",
    "CallBundleTransactionResult",
    "AggregateOrders",
    "AggregateFills",
    "SignetCallBundleResponse",
    "serialize_eth_bundle",
    "deserialize_eth_bundle",
    "serialize_call_bundle",
    "deserialize_call_bundle",
    "deserialize_transaction_result",
    "deserialize_call_bundle_response",
]
