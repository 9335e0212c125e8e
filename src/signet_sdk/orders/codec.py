"""Primitive codec shared by the hashing and serialization code.

ABI head encoding is delegated to ``eth_abi``; this module adds the range
checks and the minimal hex quantity form used on the wire.
"""

from typing import Optional

from eth_abi import encode
from eth_utils import is_address, is_hexstr, to_canonical_address

from ..errors import ErrorCode, RangeError, ValidationError

UINT256_MAX = 2**256 - 1
UINT32_MAX = 2**32 - 1


def _check_uint(value: int, bits: int, field: Optional[str]) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise RangeError(
            f"Invalid {field or 'value'}: expected an integer, got {type(value).__name__}",
            field=field,
            actual=value,
        )
    if value < 0 or value >= 2**bits:
        raise RangeError(
            f"Invalid {field or 'value'}: {value} is outside uint{bits} range",
            field=field,
            actual=value,
        )
    return value


def check_uint256(value: int, field: Optional[str] = None) -> int:
    """Return ``value`` unchanged if it fits in a uint256, else raise RangeError."""
    return _check_uint(value, 256, field)


def check_uint32(value: int, field: Optional[str] = None) -> int:
    """Return ``value`` unchanged if it fits in a uint32, else raise RangeError."""
    return _check_uint(value, 32, field)


def encode_uint256(value: int) -> bytes:
    """Encode an integer as 32 big-endian bytes.

    Raises:
        RangeError: If ``value`` is negative or not below 2**256
    """
    return encode(["uint256"], [check_uint256(value)])


def encode_uint32(value: int) -> bytes:
    """Encode a uint32 (e.g. a chain id) as its 32-byte ABI slot.

    Raises:
        RangeError: If ``value`` is negative or not below 2**32
    """
    return encode(["uint32"], [check_uint32(value)])


def encode_address(address: str) -> bytes:
    """Return the 20 raw bytes of an address.

    Raises:
        ValidationError: If ``address`` is not a valid address
    """
    if not is_address(address):
        raise ValidationError(
            f"Invalid address: {address}", ErrorCode.INVALID_ADDRESS, actual=address
        )
    return to_canonical_address(address)


def to_hex_quantity(value: int) -> str:
    """Hex form without padding: ``0x0`` for zero, ``0x3e8`` for 1000."""
    return hex(check_uint256(value))


def from_hex_quantity(value: str, field: Optional[str] = None) -> int:
    """Parse a ``0x``-prefixed hex quantity back into a uint256.

    Raises:
        ValidationError: If ``value`` is not ``0x``-prefixed hex
        RangeError: If the parsed value exceeds uint256
    """
    if not isinstance(value, str) or not value.startswith(("0x", "0X")) or len(value) < 3:
        raise ValidationError(
            f"Invalid hex quantity for {field or 'value'}: {value!r}",
            ErrorCode.INVALID_HEX,
            field=field,
            actual=value,
        )
    if not is_hexstr(value):
        raise ValidationError(
            f"Invalid hex quantity for {field or 'value'}: {value!r}",
            ErrorCode.INVALID_HEX,
            field=field,
            actual=value,
        )
    return check_uint256(int(value, 16), field)
