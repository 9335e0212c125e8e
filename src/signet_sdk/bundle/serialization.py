"""Bundle serialization for JSON-RPC.

Absent fields are omitted entirely, never sent as ``null`` or ``[]``.
"""

from typing import Any, Dict, Union

from ..errors import ErrorCode, ValidationError
from ..orders.codec import from_hex_quantity, to_hex_quantity
from .types import (
    BLOCK_TAGS,
    AggregateFills,
    AggregateOrders,
    BlockNumberOrTag,
    CallBundleTransactionResult,
    SignetCallBundle,
    SignetCallBundleResponse,
    SignetEthBundle,
)

# (python attribute, wire key) pairs copied through unchanged when present
_ETH_BUNDLE_PLAIN_FIELDS = (
    ("min_timestamp", "minTimestamp"),
    ("max_timestamp", "maxTimestamp"),
    ("replacement_uuid", "replacementUuid"),
    ("refund_percent", "refundPercent"),
    ("refund_recipient", "refundRecipient"),
)

_ETH_BUNDLE_ARRAY_FIELDS = (
    ("reverting_tx_hashes", "revertingTxHashes"),
    ("dropping_tx_hashes", "droppingTxHashes"),
    ("refund_tx_hashes", "refundTxHashes"),
    ("host_txs", "hostTxs"),
)

_CALL_BUNDLE_HEX_FIELDS = (
    ("timestamp", "timestamp"),
    ("gas_limit", "gasLimit"),
    ("difficulty", "difficulty"),
    ("base_fee", "baseFee"),
    ("transaction_index", "transactionIndex"),
    ("timeout", "timeout"),
)


def serialize_eth_bundle(bundle: SignetEthBundle) -> Dict[str, Any]:
    """Serialize a SignetEthBundle for ``signet_sendBundle``."""
    result: Dict[str, Any] = {
        "txs": list(bundle.txs),
        "blockNumber": to_hex_quantity(bundle.block_number),
    }
    for attr, key in _ETH_BUNDLE_PLAIN_FIELDS:
        value = getattr(bundle, attr)
        if value is not None:
            result[key] = value
    for attr, key in _ETH_BUNDLE_ARRAY_FIELDS:
        value = getattr(bundle, attr)
        if value:
            result[key] = list(value)
    return result


def deserialize_eth_bundle(raw: Dict[str, Any]) -> SignetEthBundle:
    kwargs: Dict[str, Any] = {}
    for attr, key in _ETH_BUNDLE_PLAIN_FIELDS:
        if raw.get(key) is not None:
            kwargs[attr] = raw[key]
    for attr, key in _ETH_BUNDLE_ARRAY_FIELDS:
        if raw.get(key):
            kwargs[attr] = tuple(raw[key])
    return SignetEthBundle(
        txs=tuple(raw["txs"]),
        block_number=from_hex_quantity(raw["blockNumber"], "blockNumber"),
        **kwargs,
    )


def serialize_block_number_or_tag(value: BlockNumberOrTag) -> str:
    if isinstance(value, str):
        if value not in BLOCK_TAGS:
            raise ValidationError(
                f"Invalid block tag: {value}",
                ErrorCode.INVALID_HEX,
                field="stateBlockNumber",
                actual=value,
            )
        return value
    return to_hex_quantity(value)


def deserialize_block_number_or_tag(value: str) -> BlockNumberOrTag:
    if value in BLOCK_TAGS:
        return value
    return from_hex_quantity(value, "stateBlockNumber")


def serialize_call_bundle(bundle: SignetCallBundle) -> Dict[str, Any]:
    """Serialize a SignetCallBundle for ``signet_callBundle``."""
    result: Dict[str, Any] = {
        "txs": list(bundle.txs),
        "blockNumber": to_hex_quantity(bundle.block_number),
        "stateBlockNumber": serialize_block_number_or_tag(bundle.state_block_number),
    }
    for attr, key in _CALL_BUNDLE_HEX_FIELDS:
        value = getattr(bundle, attr)
        if value is not None:
            result[key] = to_hex_quantity(value)
    if bundle.coinbase is not None:
        result["coinbase"] = bundle.coinbase
    return result


def deserialize_call_bundle(raw: Dict[str, Any]) -> SignetCallBundle:
    kwargs: Dict[str, Any] = {}
    for attr, key in _CALL_BUNDLE_HEX_FIELDS:
        if raw.get(key) is not None:
            kwargs[attr] = from_hex_quantity(raw[key], key)
    if raw.get("coinbase") is not None:
        kwargs["coinbase"] = raw["coinbase"]
    return SignetCallBundle(
        txs=tuple(raw["txs"]),
        block_number=from_hex_quantity(raw["blockNumber"], "blockNumber"),
        state_block_number=deserialize_block_number_or_tag(raw["stateBlockNumber"]),
        **kwargs,
    )


def _parse_quantity(value: Union[str, int]) -> int:
    # Response quantities arrive as decimal strings, hex strings or numbers
    if isinstance(value, int):
        return value
    return int(value, 0)


def deserialize_transaction_result(raw: Dict[str, Any]) -> CallBundleTransactionResult:
    return CallBundleTransactionResult(
        coinbase_diff=_parse_quantity(raw["coinbaseDiff"]),
        eth_sent_to_coinbase=_parse_quantity(raw["ethSentToCoinbase"]),
        from_address=raw["fromAddress"],
        gas_fees=_parse_quantity(raw["gasFees"]),
        gas_price=_parse_quantity(raw["gasPrice"]),
        gas_used=raw["gasUsed"],
        tx_hash=raw["txHash"],
        to_address=raw.get("toAddress"),
        value=raw.get("value"),
        revert=raw.get("revert"),
    )


def deserialize_call_bundle_response(raw: Dict[str, Any]) -> SignetCallBundleResponse:
    """Parse the result of ``signet_callBundle``."""
    return SignetCallBundleResponse(
        bundle_hash=raw["bundleHash"],
        bundle_gas_price=_parse_quantity(raw["bundleGasPrice"]),
        coinbase_diff=_parse_quantity(raw["coinbaseDiff"]),
        eth_sent_to_coinbase=_parse_quantity(raw["ethSentToCoinbase"]),
        gas_fees=_parse_quantity(raw["gasFees"]),
        results=tuple(deserialize_transaction_result(r) for r in raw["results"]),
        state_block_number=raw["stateBlockNumber"],
        total_gas_used=raw["totalGasUsed"],
        orders=AggregateOrders(
            outputs=raw["orders"]["outputs"], inputs=raw["orders"]["inputs"]
        ),
        fills=AggregateFills(fills=raw["fills"]["fills"]),
    )
