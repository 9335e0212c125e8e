"""Signet Orders Module.

This module builds, signs, hashes and checks Permit2-authorized orders and
fills whose hashes and signatures match what Signet nodes and contracts compute.

Key components:
- EIP-712 hashing for PermitBatchWitnessTransferFrom
- Order hash computation (post-signing identifier)
- Low-S signature normalization
- Nonce generation and Permit2 bitmap checks
- Order/fill builders, validation and feasibility checks

Example usage:
    ```python
    from signet_sdk.orders import (
        ChainConfig,
        LocalAccountSigner,
        UnsignedOrder,
        order_hash,
        now_seconds,
    )
    from signet_sdk.constants import MAINNET

    signer = LocalAccountSigner("0x...")

    order = await (
        UnsignedOrder.new()
        .with_input("0x...", 1_000_000)
        .with_output("0x...", 1_000_000, recipient="0x...", chain_id=1)
        .with_deadline(now_seconds() + 600)
        .with_chain(ChainConfig(
            chain_id=MAINNET.rollup_chain_id,
            order_contract=MAINNET.rollup_orders,
        ))
        .sign(signer)
    )

    print(order_hash(order))
    ```
"""

from .types import (
    TokenPermissions,
    Output,
    PermitBatchTransferFrom,
    Permit2Batch,
    SignedOrder,
    SignedFill,
    ChainConfig,
    chain_config_for,
    PERMIT_BATCH_WITNESS_TRANSFER_FROM_TYPES,
    OUTPUT_WITNESS_TYPE_STRING,
)
from .codec import (
    encode_uint256,
    encode_uint32,
    encode_address,
    to_hex_quantity,
    from_hex_quantity,
)
from .signature import normalize_signature, is_normalized, SECP256K1_N, SECP256K1_HALF_N
from .eip712 import (
    Eip712SigningParams,
    Eip712Components,
    permit2_domain_separator,
    permit_batch_witness_struct_hash,
    eip712_signing_hash,
    eip712_components,
)
from .order_hash import (
    order_hash_pre_image,
    order_hash,
    compute_order_hash,
    verify_order_hash,
)
from .nonce import random_nonce, nonce_from_seed, nonce_bitmap_position, is_nonce_used
from .signing import (
    TypedDataSigner,
    LocalAccountSigner,
    Permit2SigningParams,
    permit2_domain,
    build_permit2_typed_data,
    resolve_account,
    sign_permit2_witness_transfer,
    recover_permit2_signer,
    verify_permit2_signature,
)
from .builders import UnsignedOrder, UnsignedFill
from .validate import validate_order, validate_fill
from .feasibility import (
    FeasibilityIssueType,
    FeasibilityIssue,
    FeasibilityResult,
    check_order_feasibility,
    has_permit2_approval,
)
from .serialization import (
    SerializedSignedOrder,
    serialize_order,
    deserialize_order,
    serialize_fill,
    deserialize_fill,
)
from .utils import PERMIT2_ADDRESS, PERMIT2_NAME, ZERO_ADDRESS, now_seconds

__all__ = [
    # Types
    "TokenPermissions",
    "Output",
    "PermitBatchTransferFrom",
    "Permit2Batch",
    "SignedOrder",
    "SignedFill",
    "ChainConfig",
    "chain_config_for",
    "PERMIT_BATCH_WITNESS_TRANSFER_FROM_TYPES",
    "OUTPUT_WITNESS_TYPE_STRING",
    # Codec
    "encode_uint256",
    "encode_uint32",
    "encode_address",
    "to_hex_quantity",
    "from_hex_quantity",
    # Signatures
    "normalize_signature",
    "is_normalized",
    "SECP256K1_N",
    "SECP256K1_HALF_N",
    # EIP-712
    "Eip712SigningParams",
    "Eip712Components",
    "permit2_domain_separator",
    "permit_batch_witness_struct_hash",
    "eip712_signing_hash",
    "eip712_components",
    # Order hash
    "order_hash_pre_image",
    "order_hash",
    "compute_order_hash",
    "verify_order_hash",
    # Nonces
    "random_nonce",
    "nonce_from_seed",
    "nonce_bitmap_position",
    "is_nonce_used",
    # Signing
    "TypedDataSigner",
    "LocalAccountSigner",
    "Permit2SigningParams",
    "permit2_domain",
    "build_permit2_typed_data",
    "resolve_account",
    "sign_permit2_witness_transfer",
    "recover_permit2_signer",
    "verify_permit2_signature",
    "UnsignedOrder",
    "UnsignedFill",
    # Validation
    "validate_order",
    "validate_fill",
    # Feasibility
    "FeasibilityIssueType",
    "FeasibilityIssue",
    "FeasibilityResult",
    "check_order_feasibility",
    "has_permit2_approval",
    # Serialization
    "SerializedSignedOrder",
    "serialize_order",
    "deserialize_order",
    "serialize_fill",
    "deserialize_fill",
    # Utils
    "PERMIT2_ADDRESS",
    "PERMIT2_NAME",
    "ZERO_ADDRESS",
    "now_seconds",
]
