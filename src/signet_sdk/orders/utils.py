"""Utility helpers for Signet orders."""

import time

from eth_utils import is_address, to_checksum_address

from ..constants import DEFAULT_SLOT_TIME, PERMIT2_ADDRESS, PERMIT2_NAME, ZERO_ADDRESS
from ..errors import ErrorCode, ValidationError

__all__ = [
    "DEFAULT_SLOT_TIME",
    "PERMIT2_ADDRESS",
    "PERMIT2_NAME",
    "ZERO_ADDRESS",
    "now_seconds",
    "checksum_address",
    "addresses_equal",
]


def now_seconds() -> int:
    """Current unix time in whole seconds."""
    return int(time.time())


def checksum_address(address: str, field: str = "address") -> str:
    """Validate an address and return its checksum form.

    Raises:
        ValidationError: If the address is invalid
    """
    if not isinstance(address, str) or not is_address(address):
        raise ValidationError(
            f"Invalid {field}: {address}",
            ErrorCode.INVALID_ADDRESS,
            field=field,
            actual=address,
        )
    return to_checksum_address(address)


def addresses_equal(a: str, b: str) -> bool:
    """Compare two addresses ignoring checksum casing."""
    return a.lower() == b.lower()
