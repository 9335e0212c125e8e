"""EIP-712 hashing for Permit2 batch witness transfers.

signingHash = keccak256("\\x19\\x01" || domainSeparator || structHash)

The Permit2 domain has no ``version`` or ``salt`` field; the domain type
string below must stay exactly as written.
"""

from dataclasses import dataclass
from typing import Sequence

from eth_abi import encode
from eth_utils import keccak

from .codec import check_uint32, check_uint256
from .types import Output, TokenPermissions
from .utils import PERMIT2_ADDRESS, PERMIT2_NAME, checksum_address

EIP712_DOMAIN_TYPE_HASH = keccak(
    text="EIP712Domain(string name,uint256 chainId,address verifyingContract)"
)

TOKEN_PERMISSIONS_TYPE_HASH = keccak(text="TokenPermissions(address token,uint256 amount)")

OUTPUT_TYPE_HASH = keccak(
    text="Output(address token,uint256 amount,address recipient,uint32 chainId)"
)

PERMIT_BATCH_WITNESS_TRANSFER_FROM_TYPE_HASH = keccak(
    text=(
        "PermitBatchWitnessTransferFrom(TokenPermissions[] permitted,address spender,"
        "uint256 nonce,uint256 deadline,Output[] outputs)"
        "Output(address token,uint256 amount,address recipient,uint32 chainId)"
        "TokenPermissions(address token,uint256 amount)"
    )
)


@dataclass(frozen=True)
class Eip712SigningParams:
    """Inputs to the Permit2 witness signing hash."""

    chain_id: int
    """Chain ID for the domain."""

    order_contract: str
    """Orders contract, the Permit2 spender."""

    permitted: Sequence[TokenPermissions]
    nonce: int
    deadline: int
    outputs: Sequence[Output]
    """Witness data."""


@dataclass(frozen=True)
class Eip712Components:
    """Intermediate EIP-712 hashes, for debugging and cross-checks."""

    domain_separator: bytes
    struct_hash: bytes
    signing_hash: bytes


def permit2_domain_separator(chain_id: int) -> bytes:
    """Compute the Permit2 domain separator for a chain."""
    encoded = encode(
        ["bytes32", "bytes32", "uint256", "address"],
        [
            EIP712_DOMAIN_TYPE_HASH,
            keccak(text=PERMIT2_NAME),
            check_uint256(chain_id, "chain_id"),
            PERMIT2_ADDRESS,
        ],
    )
    return keccak(encoded)


def hash_token_permissions(permission: TokenPermissions) -> bytes:
    encoded = encode(
        ["bytes32", "address", "uint256"],
        [TOKEN_PERMISSIONS_TYPE_HASH, permission.token, permission.amount],
    )
    return keccak(encoded)


def hash_output(output: Output) -> bytes:
    encoded = encode(
        ["bytes32", "address", "uint256", "address", "uint32"],
        [
            OUTPUT_TYPE_HASH,
            output.token,
            output.amount,
            output.recipient,
            check_uint32(output.chain_id, "chain_id"),
        ],
    )
    return keccak(encoded)


def hash_token_permissions_array(permissions: Sequence[TokenPermissions]) -> bytes:
    # EIP-712 arrays: hash of the concatenated member hashes, no length prefix
    return keccak(b"".join(hash_token_permissions(p) for p in permissions))


def hash_output_array(outputs: Sequence[Output]) -> bytes:
    return keccak(b"".join(hash_output(o) for o in outputs))


def permit_batch_witness_struct_hash(params: Eip712SigningParams) -> bytes:
    """Compute the struct hash of PermitBatchWitnessTransferFrom.

    Args:
        params: The signing parameters

    Returns:
        32-byte struct hash
    """
    encoded = encode(
        ["bytes32", "bytes32", "address", "uint256", "uint256", "bytes32"],
        [
            PERMIT_BATCH_WITNESS_TRANSFER_FROM_TYPE_HASH,
            hash_token_permissions_array(params.permitted),
            checksum_address(params.order_contract, "order_contract"),
            check_uint256(params.nonce, "nonce"),
            check_uint256(params.deadline, "deadline"),
            hash_output_array(params.outputs),
        ],
    )
    return keccak(encoded)


def eip712_signing_hash(params: Eip712SigningParams) -> bytes:
    """Compute the 32-byte hash the wallet actually signs."""
    return keccak(
        b"\x19\x01"
        + permit2_domain_separator(params.chain_id)
        + permit_batch_witness_struct_hash(params)
    )


def eip712_components(params: Eip712SigningParams) -> Eip712Components:
    """Domain separator, struct hash and signing hash in one call."""
    domain_separator = permit2_domain_separator(params.chain_id)
    struct_hash = permit_batch_witness_struct_hash(params)
    return Eip712Components(
        domain_separator=domain_separator,
        struct_hash=struct_hash,
        signing_hash=keccak(b"\x19\x01" + domain_separator + struct_hash),
    )
