"""Permit2 nonce generation and consumption checks."""

import secrets
from typing import Tuple, Union

from eth_utils import keccak

from ..chain import ChainReader, read_nonce_bitmap
from .codec import check_uint256


def random_nonce() -> int:
    """Draw a uniformly random uint256 nonce from the OS CSPRNG."""
    return int.from_bytes(secrets.token_bytes(32), "big")


def nonce_from_seed(seed: Union[str, int]) -> int:
    """Derive a deterministic nonce from a seed.

    Integers are converted to their decimal string first, so ``12345`` and
    ``"12345"`` yield the same nonce. Other Signet SDKs derive seeded nonces
    the same way, so this must not change.

    Args:
        seed: String or integer seed (empty string allowed)

    Returns:
        keccak256 of the UTF-8 seed, as an integer

    Raises:
        TypeError: If the seed is neither a string nor an integer
    """
    if isinstance(seed, bool) or not isinstance(seed, (str, int)):
        raise TypeError(f"Invalid seed type: {type(seed).__name__}")
    return int.from_bytes(keccak(text=str(seed)), "big")


def nonce_bitmap_position(nonce: int) -> Tuple[int, int]:
    """Split a nonce into its ``(word_position, bit_position)``."""
    check_uint256(nonce, "nonce")
    return nonce >> 8, nonce & 0xFF


def is_nonce_bit_set(bitmap: int, bit_position: int) -> bool:
    return (bitmap >> bit_position) & 1 == 1


async def is_nonce_used(reader: ChainReader, owner: str, nonce: int) -> bool:
    """Check whether Permit2 has already consumed ``nonce`` for ``owner``.

    Args:
        reader: Chain reader for the chain the permit lives on
        owner: Permit owner address
        nonce: Permit2 nonce

    Returns:
        True if the nonce's bit is set in the owner's bitmap
    """
    word_position, bit_position = nonce_bitmap_position(nonce)
    bitmap = await read_nonce_bitmap(reader, owner, word_position)
    return is_nonce_bit_set(bitmap, bit_position)
