"""Order Types for Signet.

Value objects for Permit2-authorized orders and fills. All of them are frozen:
once a signed artifact exists it is never mutated in place.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from ..constants import SignetSystemConstants, get_orders_contract
from ..errors import ConfigurationError, ErrorCode
from .codec import check_uint32, check_uint256
from .signature import signature_bytes
from .utils import checksum_address


def _set(obj, name, value):
    object.__setattr__(obj, name, value)


@dataclass(frozen=True)
class TokenPermissions:
    """One leg of a Permit2 batch transfer authorization."""

    token: str
    """Token contract address."""

    amount: int
    """Amount to transfer (uint256)."""

    def __post_init__(self):
        _set(self, "token", checksum_address(self.token, "token"))
        check_uint256(self.amount, "amount")


@dataclass(frozen=True)
class Output:
    """A desired delivery: token, amount, recipient and destination chain."""

    token: str
    """Token contract address."""

    amount: int
    """Amount to deliver (uint256)."""

    recipient: str
    """Recipient address."""

    chain_id: int
    """Destination chain ID (uint32)."""

    def __post_init__(self):
        _set(self, "token", checksum_address(self.token, "token"))
        _set(self, "recipient", checksum_address(self.recipient, "recipient"))
        check_uint256(self.amount, "amount")
        check_uint32(self.chain_id, "chain_id")


@dataclass(frozen=True)
class PermitBatchTransferFrom:
    """Permit2 authorization body. ``permitted`` order is significant."""

    permitted: Tuple[TokenPermissions, ...]
    nonce: int
    deadline: int
    """Unix timestamp (seconds)."""

    def __post_init__(self):
        _set(self, "permitted", tuple(self.permitted))
        check_uint256(self.nonce, "nonce")
        check_uint256(self.deadline, "deadline")


@dataclass(frozen=True)
class Permit2Batch:
    """Permit2 authorization plus the owner's signature."""

    permit: PermitBatchTransferFrom
    owner: str
    """Address that signed the permit."""

    signature: str
    """65-byte ECDSA signature (r || s || v). Accepts hex (with or without 0x)
    or bytes; always stored as lowercase 0x-prefixed hex."""

    def __post_init__(self):
        _set(self, "owner", checksum_address(self.owner, "owner"))
        _set(self, "signature", "0x" + signature_bytes(self.signature).hex())


@dataclass(frozen=True)
class SignedOrder:
    """Maker-side artifact: offers ``permit.permit.permitted``, wants ``outputs``.

    Corresponds to the arguments of ``initiatePermit2`` on the orders contract.
    """

    permit: Permit2Batch
    outputs: Tuple[Output, ...]

    def __post_init__(self):
        _set(self, "outputs", tuple(self.outputs))


@dataclass(frozen=True)
class SignedFill:
    """Filler-side artifact delivering ``outputs`` to satisfy orders.

    ``outputs`` must match ``permit.permit.permitted`` index by index; see
    ``validate_fill``. A fill must stay private until mined.
    """

    permit: Permit2Batch
    outputs: Tuple[Output, ...]

    def __post_init__(self):
        _set(self, "outputs", tuple(self.outputs))


SignedArtifact = Union[SignedOrder, SignedFill]


@dataclass(frozen=True)
class ChainConfig:
    """Target chain and the orders contract acting as Permit2 spender."""

    chain_id: int
    order_contract: str

    def __post_init__(self):
        _set(self, "order_contract", checksum_address(self.order_contract, "order_contract"))
        check_uint256(self.chain_id, "chain_id")


def chain_config_for(constants: SignetSystemConstants, chain_id: int) -> ChainConfig:
    """Build the ChainConfig for one side of a host/rollup pair.

    Raises:
        ConfigurationError: If ``chain_id`` is neither the host nor the rollup
    """
    order_contract = get_orders_contract(constants, chain_id)
    if order_contract is None:
        raise ConfigurationError(
            f"Chain {chain_id} is not part of this network "
            f"(host {constants.host_chain_id}, rollup {constants.rollup_chain_id})",
            ErrorCode.CHAIN_NOT_CONFIGURED,
        )
    return ChainConfig(chain_id=chain_id, order_contract=order_contract)


def to_token_permissions(item: Union[TokenPermissions, Output]) -> TokenPermissions:
    """Project an output (or permission) onto its token/amount pair.

    Raises:
        TypeError: If ``item`` is neither a TokenPermissions nor an Output
    """
    if not isinstance(item, (TokenPermissions, Output)):
        raise TypeError(f"Expected TokenPermissions or Output, got {type(item).__name__}")
    return TokenPermissions(token=item.token, amount=item.amount)


# EIP-712 types for PermitBatchWitnessTransferFrom, outputs as witness
PERMIT_BATCH_WITNESS_TRANSFER_FROM_TYPES = {
    "PermitBatchWitnessTransferFrom": [
        {"name": "permitted", "type": "TokenPermissions[]"},
        {"name": "spender", "type": "address"},
        {"name": "nonce", "type": "uint256"},
        {"name": "deadline", "type": "uint256"},
        {"name": "outputs", "type": "Output[]"},
    ],
    "TokenPermissions": [
        {"name": "token", "type": "address"},
        {"name": "amount", "type": "uint256"},
    ],
    "Output": [
        {"name": "token", "type": "address"},
        {"name": "amount", "type": "uint256"},
        {"name": "recipient", "type": "address"},
        {"name": "chainId", "type": "uint32"},
    ],
}

# Witness type string appended to the Permit2 type string by the contract
OUTPUT_WITNESS_TYPE_STRING = (
    "Output[] outputs)Output(address token,uint256 amount,address recipient,uint32 chainId)"
    "TokenPermissions(address token,uint256 amount)"
)
