"""
Word Arithmetic

Fixed-width unsigned word helpers shared by SHA-256 (32-bit words)
and SHA-512 (64-bit words).

Python integers are unbounded, so every result is masked back into
range explicitly. Byte order is always big-endian, as mandated by
FIPS 180-4, independent of the host machine.
"""

from typing import List


SUPPORTED_WIDTHS = (32, 64)


def mask(bits: int) -> int:
    """Return the all-ones mask for a word of the given width."""
    return (1 << bits) - 1


def add_modulo(a: int, b: int, bits: int) -> int:
    """Add two words with wraparound (mod 2**bits)."""
    return (a + b) & mask(bits)


def rotr(x: int, n: int, bits: int) -> int:
    """Right rotate a word by n positions."""
    return ((x >> n) | (x << (bits - n))) & mask(bits)


def shr(x: int, n: int, bits: int) -> int:
    """Logical right shift of a word."""
    return (x & mask(bits)) >> n


def word_from_bytes(buffer: bytes, bits: int) -> int:
    """
    Decode one big-endian word.

    Args:
        buffer: Exactly bits // 8 bytes
        bits: Word width (32 or 64)

    Returns:
        The decoded unsigned word

    Raises:
        ValueError: If the buffer does not hold exactly one word
    """
    if len(buffer) != bits // 8:
        raise ValueError(
            f"Expected {bits // 8} bytes for a {bits}-bit word, got {len(buffer)}"
        )
    return int.from_bytes(buffer, byteorder='big')


def word_to_bytes(word: int, bits: int) -> bytes:
    """Encode one word as big-endian bytes."""
    return word.to_bytes(bits // 8, byteorder='big')


def words_from_block(block: bytes, bits: int) -> List[int]:
    """Split a block into consecutive big-endian words."""
    size = bits // 8
    if len(block) % size:
        raise ValueError(f"Block length {len(block)} is not a multiple of {size}")
    return [
        word_from_bytes(block[i:i + size], bits)
        for i in range(0, len(block), size)
    ]
