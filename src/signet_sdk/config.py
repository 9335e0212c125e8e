"""Client configuration for the Signet SDK.

Configuration is a plain ``SignetConfig`` dict; ``resolve_config`` applies
defaults and looks up the network's system constants. The result is
read-only and safe to share between concurrent operations.
"""

import os
from dataclasses import dataclass
from typing import Optional, TypedDict

from dotenv import load_dotenv

from .constants import NETWORKS, SignetSystemConstants
from .errors import ConfigurationError, ErrorCode

DEFAULT_NETWORK = "mainnet"
DEFAULT_READ_TIMEOUT = 10.0


class SignetConfig(TypedDict, total=False):
    """Client configuration."""

    network: str
    """Network name ("mainnet" or "parmigiana"). Default: mainnet"""

    rpc_url: str
    """JSON-RPC endpoint used for chain reads (optional)"""

    read_timeout: float
    """Seconds before a chain read is abandoned. Default: 10"""

    slot_time: int
    """Override the network's slot time (fill deadline offset)"""


@dataclass(frozen=True)
class ResolvedSignetConfig:
    """Configuration with all defaults applied."""

    network: str
    constants: SignetSystemConstants
    rpc_url: Optional[str]
    read_timeout: float


def resolve_config(config: Optional[SignetConfig] = None) -> ResolvedSignetConfig:
    """Apply defaults to a configuration.

    Raises:
        ConfigurationError: If the network is unknown
    """
    config = config or {}
    network = config.get("network", DEFAULT_NETWORK)
    if network not in NETWORKS:
        raise ConfigurationError(
            f"Unknown network: {network}. Expected one of: {', '.join(NETWORKS)}",
            ErrorCode.UNKNOWN_NETWORK,
        )

    constants = NETWORKS[network]
    if "slot_time" in config:
        constants = SignetSystemConstants(
            **{**constants.__dict__, "slot_time": config["slot_time"]}
        )

    return ResolvedSignetConfig(
        network=network,
        constants=constants,
        rpc_url=config.get("rpc_url"),
        read_timeout=config.get("read_timeout", DEFAULT_READ_TIMEOUT),
    )


def load_config_from_env(dotenv_path: Optional[str] = None) -> SignetConfig:
    """Read configuration from ``SIGNET_*`` environment variables.

    A ``.env`` file is loaded first if present; real environment variables
    take precedence over it.
    """
    load_dotenv(dotenv_path)

    config: SignetConfig = {}
    if os.environ.get("SIGNET_NETWORK"):
        config["network"] = os.environ["SIGNET_NETWORK"]
    if os.environ.get("SIGNET_RPC_URL"):
        config["rpc_url"] = os.environ["SIGNET_RPC_URL"]
    if os.environ.get("SIGNET_READ_TIMEOUT"):
        config["read_timeout"] = float(os.environ["SIGNET_READ_TIMEOUT"])
    if os.environ.get("SIGNET_SLOT_TIME"):
        config["slot_time"] = int(os.environ["SIGNET_SLOT_TIME"])
    return config
