"""Signet SDK.

Build, sign, hash and check Signet orders and fills authorized through
Permit2 witness transfers.
"""

from .client import SignetOrdersClient
from .config import SignetConfig, ResolvedSignetConfig, resolve_config, load_config_from_env
from .constants import (
    MAINNET,
    PARMIGIANA,
    NETWORKS,
    PERMIT2_ADDRESS,
    SignetSystemConstants,
    get_orders_contract,
)
from .errors import (
    ErrorCode,
    SignetError,
    ConfigurationError,
    ValidationError,
    RangeError,
)
from .chain import ChainReader, Web3ChainReader

__version__ = "0.1.0"

__all__ = [
    "SignetOrdersClient",
    # Config
    "SignetConfig",
    "ResolvedSignetConfig",
    "resolve_config",
    "load_config_from_env",
    # Constants
    "MAINNET",
    "PARMIGIANA",
    "NETWORKS",
    "PERMIT2_ADDRESS",
    "SignetSystemConstants",
    "get_orders_contract",
    # Errors
    "ErrorCode",
    "SignetError",
    "ConfigurationError",
    "ValidationError",
    "RangeError",
    # Chain
    "ChainReader",
    "Web3ChainReader",
    "__version__",
]
