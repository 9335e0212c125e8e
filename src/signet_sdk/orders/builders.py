"""Builders for unsigned Signet orders and fills.

A builder accumulates inputs, outputs, deadline, nonce and chain in any
order, then ``sign()`` produces an immutable signed artifact. ``sign()`` is
terminal: the builder cannot be signed again or modified afterwards.
"""

import logging
from typing import Iterable, List, Optional, Union

from ..constants import SignetSystemConstants
from ..errors import ConfigurationError, ErrorCode, ValidationError
from .codec import check_uint256
from .nonce import random_nonce
from .signing import (
    Permit2SigningParams,
    TypedDataSigner,
    resolve_account,
    sign_permit2_witness_transfer,
)
from .types import (
    ChainConfig,
    Output,
    Permit2Batch,
    PermitBatchTransferFrom,
    SignedFill,
    SignedOrder,
    TokenPermissions,
    to_token_permissions,
)
from .utils import DEFAULT_SLOT_TIME, now_seconds

logger = logging.getLogger(__name__)


class _Builder:
    def __init__(self):
        self._outputs: List[Output] = []
        self._deadline: Optional[int] = None
        self._nonce: Optional[int] = None
        self._chain: Optional[ChainConfig] = None
        self._signed = False

    def _check_open(self):
        if self._signed:
            raise ConfigurationError(
                f"{type(self).__name__} has already been signed. Create a new builder.",
                ErrorCode.BUILDER_CONSUMED,
            )

    def _require_chain(self) -> ChainConfig:
        if self._chain is None:
            raise ConfigurationError(
                "Chain not configured. Call with_chain() first.",
                ErrorCode.CHAIN_NOT_CONFIGURED,
            )
        return self._chain

    def with_outputs(self, outputs: Iterable[Output]):
        """Add multiple outputs.

        Raises:
            TypeError: If an item is not an Output
        """
        self._check_open()
        outputs = list(outputs)
        for output in outputs:
            if not isinstance(output, Output):
                raise TypeError(f"Expected Output, got {type(output).__name__}")
        self._outputs.extend(outputs)
        return self

    def with_deadline(self, deadline: int):
        """Set the deadline (unix seconds).

        Raises:
            RangeError: If the deadline does not fit in a uint256
        """
        self._check_open()
        self._deadline = check_uint256(deadline, "deadline")
        return self

    def with_nonce(self, nonce: int):
        """Set the Permit2 nonce. A random one is drawn at signing otherwise.

        Raises:
            RangeError: If the nonce does not fit in a uint256
        """
        self._check_open()
        self._nonce = check_uint256(nonce, "nonce")
        return self

    def with_chain(self, config: ChainConfig):
        """Set the target chain and its orders contract."""
        self._check_open()
        self._chain = config
        return self

    @property
    def outputs(self) -> tuple:
        return tuple(self._outputs)

    async def _sign_permit(
        self,
        signer: TypedDataSigner,
        account: Optional[str],
        permitted: tuple,
        deadline: int,
    ) -> Permit2Batch:
        chain = self._require_chain()
        nonce = self._nonce if self._nonce is not None else random_nonce()
        owner = await resolve_account(signer, account)

        signature = await sign_permit2_witness_transfer(
            signer,
            owner,
            chain.chain_id,
            Permit2SigningParams(
                permitted=permitted,
                spender=chain.order_contract,
                nonce=nonce,
                deadline=deadline,
                outputs=self.outputs,
            ),
        )
        self._signed = True

        return Permit2Batch(
            permit=PermitBatchTransferFrom(permitted=permitted, nonce=nonce, deadline=deadline),
            owner=owner,
            signature=signature,
        )


class UnsignedOrder(_Builder):
    """Builder for maker orders.

    Example:
        ```python
        order = await (
            UnsignedOrder.new()
            .with_input(weth, 10**18)
            .with_output(usdc, 3_000 * 10**6, recipient, chain_id=1)
            .with_deadline(now_seconds() + 600)
            .with_chain(ChainConfig(chain_id=519, order_contract=MAINNET.rollup_orders))
            .sign(signer)
        )
        ```
    """

    def __init__(self):
        super().__init__()
        self._inputs: List[TokenPermissions] = []

    @classmethod
    def new(cls) -> "UnsignedOrder":
        return cls()

    def with_input(self, token: str, amount: int) -> "UnsignedOrder":
        """Add a token the maker offers."""
        self._check_open()
        self._inputs.append(TokenPermissions(token=token, amount=amount))
        return self

    def with_inputs(self, inputs: Iterable[Union[TokenPermissions, Output]]) -> "UnsignedOrder":
        self._check_open()
        self._inputs.extend(to_token_permissions(i) for i in inputs)
        return self

    def with_output(
        self, token: str, amount: int, recipient: str, chain_id: int
    ) -> "UnsignedOrder":
        """Add a desired delivery."""
        self._check_open()
        self._outputs.append(
            Output(token=token, amount=amount, recipient=recipient, chain_id=chain_id)
        )
        return self

    @property
    def inputs(self) -> tuple:
        return tuple(self._inputs)

    async def sign(
        self, signer: TypedDataSigner, account: Optional[str] = None
    ) -> SignedOrder:
        """Sign the order.

        Args:
            signer: Wallet able to sign EIP-712 typed data
            account: Account to sign with (defaults to the signer's address)

        Returns:
            The signed order

        Raises:
            ConfigurationError: If the chain or account is missing, or the
                builder was already signed
            ValidationError: If no deadline was set
        """
        self._check_open()
        self._require_chain()
        if self._deadline is None:
            raise ValidationError(
                "Order deadline not set. Call with_deadline() first.",
                ErrorCode.DEADLINE_NOT_SET,
                field="deadline",
            )

        permit = await self._sign_permit(signer, account, self.inputs, self._deadline)
        logger.debug("Signed order for %s with nonce %s", permit.owner, permit.permit.nonce)
        return SignedOrder(permit=permit, outputs=self.outputs)


class UnsignedFill(_Builder):
    """Builder for filler fills.

    The permitted transfers mirror the outputs index by index. Without an
    explicit deadline a fill expires one slot after signing.
    """

    def __init__(self):
        super().__init__()
        self._constants: Optional[SignetSystemConstants] = None

    @classmethod
    def new(cls) -> "UnsignedFill":
        return cls()

    def with_constants(self, constants: SignetSystemConstants) -> "UnsignedFill":
        """Set the system constants used for the default deadline."""
        self._check_open()
        self._constants = constants
        return self

    async def sign(
        self, signer: TypedDataSigner, account: Optional[str] = None
    ) -> SignedFill:
        """Sign the fill.

        Raises:
            ConfigurationError: If the chain or account is missing, or the
                builder was already signed
        """
        self._check_open()
        self._require_chain()
        if self._deadline is not None:
            deadline = self._deadline
        else:
            slot_time = self._constants.slot_time if self._constants else DEFAULT_SLOT_TIME
            deadline = now_seconds() + slot_time

        permitted = tuple(to_token_permissions(o) for o in self._outputs)
        permit = await self._sign_permit(signer, account, permitted, deadline)
        logger.debug("Signed fill for %s with nonce %s", permit.owner, permit.permit.nonce)
        return SignedFill(permit=permit, outputs=self.outputs)
