"""Signet Orders Client.

Ties configuration, chain reads and the order builders together so callers
don't have to thread system constants and readers through every call.
"""

import logging
from typing import Optional

from .chain import ChainReader, Web3ChainReader
from .config import ResolvedSignetConfig, SignetConfig, resolve_config
from .errors import ConfigurationError, ErrorCode
from .orders import feasibility, nonce
from .orders.builders import UnsignedFill, UnsignedOrder
from .orders.feasibility import FeasibilityResult
from .orders.types import ChainConfig, SignedArtifact, chain_config_for

logger = logging.getLogger(__name__)


class SignetOrdersClient:
    """Client for building and checking Signet orders on one network.

    Example:
        ```python
        client = SignetOrdersClient({
            "network": "mainnet",
            "rpc_url": "https://rpc.signet.sh",
        })

        order = await (
            client.new_order()
            .with_input(weth, 10**18)
            .with_output(usdc, 3_000 * 10**6, recipient, chain_id=1)
            .with_deadline(now_seconds() + 600)
            .sign(signer)
        )

        result = await client.check_order_feasibility(order)
        if not result.feasible:
            for issue in result.issues:
                print(issue.message)
        ```
    """

    def __init__(
        self,
        config: Optional[SignetConfig] = None,
        reader: Optional[ChainReader] = None,
    ):
        """Initialize the client.

        Args:
            config: Optional configuration (defaults to mainnet, no RPC)
            reader: Chain reader to use instead of one built from ``rpc_url``
        """
        self._config = resolve_config(config)
        self._reader = reader

    def get_config(self) -> ResolvedSignetConfig:
        return self._config

    @property
    def reader(self) -> ChainReader:
        """The chain reader, created from ``rpc_url`` on first use."""
        if self._reader is None:
            if not self._config.rpc_url:
                raise ConfigurationError(
                    "No chain reader available. Pass rpc_url or a reader to the client.",
                    ErrorCode.CHAIN_NOT_CONFIGURED,
                )
            logger.debug("Connecting chain reader to %s", self._config.rpc_url)
            self._reader = Web3ChainReader.from_url(
                self._config.rpc_url, timeout=self._config.read_timeout
            )
        return self._reader

    def chain_config(self, chain_id: Optional[int] = None) -> ChainConfig:
        """ChainConfig for ``chain_id``, defaulting to the rollup."""
        constants = self._config.constants
        if chain_id is None:
            chain_id = constants.rollup_chain_id
        return chain_config_for(constants, chain_id)

    def new_order(self, chain_id: Optional[int] = None) -> UnsignedOrder:
        """Start an order targeting ``chain_id`` (default: the rollup)."""
        return UnsignedOrder.new().with_chain(self.chain_config(chain_id))

    def new_fill(self, chain_id: Optional[int] = None) -> UnsignedFill:
        """Start a fill targeting ``chain_id`` (default: the rollup)."""
        return (
            UnsignedFill.new()
            .with_chain(self.chain_config(chain_id))
            .with_constants(self._config.constants)
        )

    async def check_order_feasibility(
        self, order: SignedArtifact, now: Optional[int] = None
    ) -> FeasibilityResult:
        return await feasibility.check_order_feasibility(self.reader, order, now=now)

    async def is_nonce_used(self, owner: str, nonce_value: int) -> bool:
        return await nonce.is_nonce_used(self.reader, owner, nonce_value)
