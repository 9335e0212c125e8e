"""ECDSA signature canonicalization.

A valid ECDSA signature may carry either of two ``s`` values. The canonical
one is the lower, with ``v`` flipped to compensate; Signet hashes and
submits only the canonical form.
"""

from typing import Tuple, Union

from eth_utils import decode_hex, is_hexstr

from ..errors import ErrorCode, ValidationError

# secp256k1 group order
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
SECP256K1_HALF_N = SECP256K1_N // 2

SIGNATURE_LENGTH = 65


def signature_bytes(signature: Union[str, bytes]) -> bytes:
    """Return the raw bytes of a 65-byte signature.

    Raises:
        ValidationError: If the signature is not hex or not 65 bytes long
    """
    if isinstance(signature, str):
        if not is_hexstr(signature):
            raise ValidationError(
                f"Invalid signature: {signature!r} is not hex",
                ErrorCode.INVALID_SIGNATURE,
                field="signature",
                actual=signature,
            )
        raw = decode_hex(signature)
    else:
        raw = bytes(signature)

    if len(raw) != SIGNATURE_LENGTH:
        raise ValidationError(
            f"Invalid signature length: expected {SIGNATURE_LENGTH} bytes, got {len(raw)}",
            ErrorCode.INVALID_SIGNATURE,
            field="signature",
            expected=SIGNATURE_LENGTH,
            actual=len(raw),
        )
    return raw


def parse_signature(signature: Union[str, bytes]) -> Tuple[int, int, int]:
    """Split a signature into ``(r, s, v)``."""
    raw = signature_bytes(signature)
    r = int.from_bytes(raw[:32], "big")
    s = int.from_bytes(raw[32:64], "big")
    return r, s, raw[64]


def serialize_signature(r: int, s: int, v: int) -> str:
    """Join ``(r, s, v)`` back into 0x-prefixed hex, each field at full width."""
    return "0x" + r.to_bytes(32, "big").hex() + s.to_bytes(32, "big").hex() + bytes([v]).hex()


def normalize_signature(signature: Union[str, bytes]) -> str:
    """Return the low-S form of a 65-byte signature.

    If ``s > N/2`` then ``s`` becomes ``N - s`` and ``v`` flips between 27
    and 28. The result is always lowercase 0x-prefixed hex, whatever form the
    input took.

    Raises:
        ValidationError: If the signature is not 65 bytes of hex
    """
    r, s, v = parse_signature(signature)

    if s > SECP256K1_HALF_N:
        return serialize_signature(r, SECP256K1_N - s, 28 if v == 27 else 27)

    return serialize_signature(r, s, v)


def is_normalized(signature: Union[str, bytes]) -> bool:
    """True if the signature is already in low-S form."""
    _, s, _ = parse_signature(signature)
    return s <= SECP256K1_HALF_N
