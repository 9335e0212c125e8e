"""JSON wire format for signed orders and fills.

Integers travel as minimal ``0x`` hex quantities, addresses and signatures as
``0x`` hex. ``chainId`` is accepted either as hex or as a plain integer.
"""

from typing import Any, Dict, List, TypedDict, Union

from .codec import check_uint32, from_hex_quantity, to_hex_quantity
from .types import (
    Output,
    Permit2Batch,
    PermitBatchTransferFrom,
    SignedArtifact,
    SignedFill,
    SignedOrder,
    TokenPermissions,
)


class SerializedTokenPermissions(TypedDict):
    token: str
    amount: str


class SerializedOutput(TypedDict):
    token: str
    amount: str
    recipient: str
    chainId: str


class SerializedPermitBatchTransferFrom(TypedDict):
    permitted: List[SerializedTokenPermissions]
    nonce: str
    deadline: str


class SerializedPermit2Batch(TypedDict):
    permit: SerializedPermitBatchTransferFrom
    owner: str
    signature: str


class SerializedSignedOrder(TypedDict):
    """Serialized order or fill; both share this shape."""

    permit: SerializedPermit2Batch
    outputs: List[SerializedOutput]


def _parse_chain_id(value: Union[str, int]) -> int:
    if isinstance(value, str):
        return check_uint32(from_hex_quantity(value, "chainId"), "chainId")
    return check_uint32(value, "chainId")


def _serialize(artifact: SignedArtifact) -> SerializedSignedOrder:
    permit = artifact.permit
    return {
        "permit": {
            "permit": {
                "permitted": [
                    {"token": p.token, "amount": to_hex_quantity(p.amount)}
                    for p in permit.permit.permitted
                ],
                "nonce": to_hex_quantity(permit.permit.nonce),
                "deadline": to_hex_quantity(permit.permit.deadline),
            },
            "owner": permit.owner,
            "signature": permit.signature,
        },
        "outputs": [
            {
                "token": o.token,
                "amount": to_hex_quantity(o.amount),
                "recipient": o.recipient,
                "chainId": hex(o.chain_id),
            }
            for o in artifact.outputs
        ],
    }


def _deserialize_permit(raw: Dict[str, Any]) -> Permit2Batch:
    body = raw["permit"]
    return Permit2Batch(
        permit=PermitBatchTransferFrom(
            permitted=tuple(
                TokenPermissions(
                    token=p["token"], amount=from_hex_quantity(p["amount"], "amount")
                )
                for p in body["permitted"]
            ),
            nonce=from_hex_quantity(body["nonce"], "nonce"),
            deadline=from_hex_quantity(body["deadline"], "deadline"),
        ),
        owner=raw["owner"],
        signature=raw["signature"],
    )


def _deserialize_outputs(raw: List[Dict[str, Any]]) -> tuple:
    return tuple(
        Output(
            token=o["token"],
            amount=from_hex_quantity(o["amount"], "amount"),
            recipient=o["recipient"],
            chain_id=_parse_chain_id(o["chainId"]),
        )
        for o in raw
    )


def serialize_order(order: SignedOrder) -> SerializedSignedOrder:
    """Convert a signed order to its JSON-transportable form."""
    return _serialize(order)


def deserialize_order(raw: SerializedSignedOrder) -> SignedOrder:
    """Parse a signed order from its JSON form.

    Raises:
        ValidationError: On malformed hex, addresses or out-of-range values
    """
    return SignedOrder(
        permit=_deserialize_permit(raw["permit"]),
        outputs=_deserialize_outputs(raw["outputs"]),
    )


def serialize_fill(fill: SignedFill) -> SerializedSignedOrder:
    return _serialize(fill)


def deserialize_fill(raw: SerializedSignedOrder) -> SignedFill:
    return SignedFill(
        permit=_deserialize_permit(raw["permit"]),
        outputs=_deserialize_outputs(raw["outputs"]),
    )
