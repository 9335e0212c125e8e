"""Permit2 Witness Signing for Signet orders.

Provides EIP-712 signing that works with various wallet types:
- eth_account.Account (via LocalAccountSigner)
- Any remote wallet implementing TypedDataSigner
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Sequence

from eth_account import Account
from eth_account.messages import encode_typed_data
from eth_utils import decode_hex, to_hex

from ..errors import ConfigurationError, ErrorCode
from .signature import normalize_signature
from .types import (
    PERMIT_BATCH_WITNESS_TRANSFER_FROM_TYPES,
    ChainConfig,
    Output,
    SignedArtifact,
    TokenPermissions,
)
from .utils import PERMIT2_ADDRESS, PERMIT2_NAME, checksum_address

logger = logging.getLogger(__name__)

PRIMARY_TYPE = "PermitBatchWitnessTransferFrom"


@dataclass(frozen=True)
class Permit2SigningParams:
    """Fields of a Permit2 witness transfer message."""

    permitted: Sequence[TokenPermissions]
    spender: str
    nonce: int
    deadline: int
    outputs: Sequence[Output]


def permit2_domain(chain_id: int) -> Dict[str, Any]:
    """Create the EIP-712 domain for Permit2.

    Permit2 omits ``version`` and ``salt``.

    Args:
        chain_id: Chain ID the permit is valid on

    Returns:
        EIP-712 domain dictionary
    """
    return {
        "name": PERMIT2_NAME,
        "chainId": chain_id,
        "verifyingContract": PERMIT2_ADDRESS,
    }


def build_permit2_message(params: Permit2SigningParams) -> Dict[str, Any]:
    return {
        "permitted": [{"token": p.token, "amount": p.amount} for p in params.permitted],
        "spender": checksum_address(params.spender, "spender"),
        "nonce": params.nonce,
        "deadline": params.deadline,
        "outputs": [
            {
                "token": o.token,
                "amount": o.amount,
                "recipient": o.recipient,
                "chainId": o.chain_id,
            }
            for o in params.outputs
        ],
    }


def build_permit2_typed_data(chain_id: int, params: Permit2SigningParams) -> Dict[str, Any]:
    """Build the full typed-data payload for a witness transfer.

    Returns:
        Dict with domain, types, primaryType and message
    """
    return {
        "domain": permit2_domain(chain_id),
        "types": copy.deepcopy(PERMIT_BATCH_WITNESS_TRANSFER_FROM_TYPES),
        "primaryType": PRIMARY_TYPE,
        "message": build_permit2_message(params),
    }


class TypedDataSigner(Protocol):
    """Protocol for signers that can sign EIP-712 typed data."""

    async def get_address(self) -> Optional[str]:
        """Get the signer's own address, or None if it has no default account."""
        ...

    async def sign_typed_data(self, params: Dict[str, Any]) -> str:
        """Sign EIP-712 typed data.

        Args:
            params: Dict with domain, types, primaryType, message and account

        Returns:
            65-byte signature as hex string
        """
        ...


class LocalAccountSigner:
    """TypedDataSigner backed by a private key held in process."""

    def __init__(self, private_key: str):
        self.account = Account.from_key(private_key)

    @property
    def address(self) -> str:
        return self.account.address

    async def get_address(self) -> Optional[str]:
        return self.account.address

    async def sign_typed_data(self, params: Dict[str, Any]) -> str:
        account = params.get("account")
        if account is not None and account.lower() != self.account.address.lower():
            raise ValueError(
                f"LocalAccountSigner holds {self.account.address}, cannot sign for {account}"
            )
        signed = self.account.sign_typed_data(
            domain_data=params["domain"],
            message_types=params["types"],
            message_data=params["message"],
        )
        return to_hex(signed.signature)


async def resolve_account(signer: TypedDataSigner, account: Optional[str] = None) -> str:
    """Resolve the signing account.

    Uses the explicit ``account`` if given, else the signer's own address.

    Raises:
        ConfigurationError: If neither is available
    """
    owner = account if account is not None else await signer.get_address()
    if not owner:
        raise ConfigurationError(
            "No account provided and signer has no default account.",
            ErrorCode.MISSING_ACCOUNT,
        )
    return checksum_address(owner, "account")


async def sign_permit2_witness_transfer(
    signer: TypedDataSigner,
    account: str,
    chain_id: int,
    params: Permit2SigningParams,
) -> str:
    """Sign a Permit2 witness transfer and return the low-S signature.

    Signer errors propagate unchanged; the request is never retried.
    """
    typed_data = build_permit2_typed_data(chain_id, params)
    logger.debug(
        "Requesting Permit2 signature from %s on chain %s (nonce=%s, deadline=%s)",
        account,
        chain_id,
        params.nonce,
        params.deadline,
    )
    signature = await signer.sign_typed_data({**typed_data, "account": account})
    return normalize_signature(signature)


def _typed_data_for(artifact: SignedArtifact, chain: ChainConfig) -> Dict[str, Any]:
    permit = artifact.permit.permit
    params = Permit2SigningParams(
        permitted=permit.permitted,
        spender=chain.order_contract,
        nonce=permit.nonce,
        deadline=permit.deadline,
        outputs=artifact.outputs,
    )
    typed_data = build_permit2_typed_data(chain.chain_id, params)
    return {
        "types": {
            "EIP712Domain": [
                {"name": "name", "type": "string"},
                {"name": "chainId", "type": "uint256"},
                {"name": "verifyingContract", "type": "address"},
            ],
            **typed_data["types"],
        },
        "primaryType": typed_data["primaryType"],
        "domain": typed_data["domain"],
        "message": typed_data["message"],
    }


def recover_permit2_signer(artifact: SignedArtifact, chain: ChainConfig) -> str:
    """Recover the address that signed an order or fill (EOA signatures only)."""
    signable_message = encode_typed_data(full_message=_typed_data_for(artifact, chain))
    return Account.recover_message(
        signable_message, signature=decode_hex(artifact.permit.signature)
    )


def verify_permit2_signature(
    artifact: SignedArtifact,
    chain: ChainConfig,
    expected_signer: Optional[str] = None,
) -> bool:
    """Verify an order or fill signature locally.

    Note: This only works for EOA signatures. Contract wallets must be
    verified on-chain via EIP-1271.

    Args:
        artifact: Signed order or fill
        chain: Chain the artifact was signed for
        expected_signer: Expected signer, defaults to the permit owner

    Returns:
        True if the signature is valid and from the expected signer
    """
    expected = expected_signer or artifact.permit.owner
    try:
        recovered = recover_permit2_signer(artifact, chain)
    except Exception as e:
        logger.debug("Signature recovery failed: %s", e)
        return False
    return recovered.lower() == expected.lower()

