"""Order hash computation for Signet orders and fills.

The order hash identifies one specific signed authorization. It is computed
after signing and is distinct from the EIP-712 signing hash:

    orderHash = keccak256(
        keccak256(abi(permit))       # (permitted[], nonce, deadline) tuple
        || keccak256(abi(owner))
        || keccak256(abi(outputs))   # (token, amount, recipient, chainId)[]
        || keccak256(normalizedSignature)  # raw 65 bytes, no ABI wrapper
    )

These are standard ABI tuple encodings, not the EIP-712 struct hashes.
"""

from typing import Sequence

from eth_abi import encode
from eth_utils import keccak

from .signature import normalize_signature, signature_bytes
from .types import Output, Permit2Batch, SignedArtifact, SignedOrder

PERMIT_BATCH_TRANSFER_FROM_ABI = "((address,uint256)[],uint256,uint256)"
OUTPUTS_ABI = "(address,uint256,address,uint32)[]"


def order_hash_pre_image(order: SignedArtifact) -> bytes:
    """Build the 128-byte order hash pre-image.

    Args:
        order: Signed order or fill

    Returns:
        permitHash || ownerHash || outputsHash || sigHash

    Raises:
        ValidationError: If the signature is not 65 bytes
    """
    permit = order.permit.permit

    permit_encoded = encode(
        [PERMIT_BATCH_TRANSFER_FROM_ABI],
        [
            (
                [(p.token, p.amount) for p in permit.permitted],
                permit.nonce,
                permit.deadline,
            )
        ],
    )
    owner_encoded = encode(["address"], [order.permit.owner])
    outputs_encoded = encode(
        [OUTPUTS_ABI],
        [[(o.token, o.amount, o.recipient, o.chain_id) for o in order.outputs]],
    )
    normalized = signature_bytes(normalize_signature(order.permit.signature))

    return (
        keccak(permit_encoded)
        + keccak(owner_encoded)
        + keccak(outputs_encoded)
        + keccak(normalized)
    )


def order_hash(order: SignedArtifact) -> str:
    """Compute the order hash as a bytes32 hex string."""
    return "0x" + keccak(order_hash_pre_image(order)).hex()


def compute_order_hash(permit: Permit2Batch, outputs: Sequence[Output]) -> str:
    """Compute the order hash from a permit and outputs.

    Useful when you don't have a fully formed SignedOrder.
    """
    return order_hash(SignedOrder(permit=permit, outputs=tuple(outputs)))


def verify_order_hash(expected: str, order: SignedArtifact) -> bool:
    """Check an order hash against a signed artifact.

    Returns:
        True if the recomputed hash matches ``expected``
    """
    return order_hash(order).lower() == expected.lower()
