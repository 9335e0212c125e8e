"""Error types for the Signet SDK.

Every error raised by the SDK carries an ``ErrorCode`` so callers can branch
on the category instead of matching message text.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Distinguishing code attached to every SDK error."""

    # Configuration
    CHAIN_NOT_CONFIGURED = "chain_not_configured"
    MISSING_ACCOUNT = "missing_account"
    UNKNOWN_NETWORK = "unknown_network"
    BUILDER_CONSUMED = "builder_consumed"

    # Validation
    DEADLINE_EXPIRED = "expired"
    DEADLINE_NOT_SET = "deadline_not_set"
    LENGTH_MISMATCH = "length_mismatch"
    TOKEN_MISMATCH = "token_mismatch"
    AMOUNT_MISMATCH = "amount_mismatch"
    INVALID_ADDRESS = "invalid_address"
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_HEX = "invalid_hex"
    OUT_OF_RANGE = "out_of_range"


class SignetError(Exception):
    """Base exception for SDK operations."""

    def __init__(self, message: str, code: ErrorCode):
        self.message = message
        self.code = code
        super().__init__(message)


class ConfigurationError(SignetError):
    """A required piece of configuration (chain, account) is missing."""


class ValidationError(SignetError, ValueError):
    """An artifact or input failed validation.

    ``field``, ``index``, ``expected`` and ``actual`` identify what failed
    when that context exists.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        field: Optional[str] = None,
        index: Optional[int] = None,
        expected: Any = None,
        actual: Any = None,
    ):
        super().__init__(message, code)
        self.field = field
        self.index = index
        self.expected = expected
        self.actual = actual


class RangeError(ValidationError):
    """An integer does not fit the width of its ABI type."""

    def __init__(self, message: str, field: Optional[str] = None, actual: Any = None):
        super().__init__(message, ErrorCode.OUT_OF_RANGE, field=field, actual=actual)
