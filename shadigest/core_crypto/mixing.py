"""
SHA-2 Bit-Mixing Functions

The boolean and rotation functions of FIPS 180-4 section 4.1.2/4.1.3:
- Ch: choose bits of y or z depending on x
- Maj: bitwise majority vote
- Big sigma (Σ0, Σ1): three rotations, used in the compression round
- Little sigma (σ0, σ1): two rotations and a shift, used in the
  message schedule

The functions are generic over the word width and rotation amounts.
MixingFunctions bundles the six of them, already bound to one variant.
"""

from dataclasses import dataclass
from functools import partial
from typing import Callable, Tuple

from .words import mask, rotr, shr


Rotations = Tuple[int, int, int]


def ch(x: int, y: int, z: int, bits: int) -> int:
    """Choice function: if x then y else z (bitwise)."""
    return (x & y) ^ (~x & z & mask(bits))


def maj(x: int, y: int, z: int, bits: int) -> int:
    """Majority function: majority vote of bits."""
    return (x & y) ^ (x & z) ^ (y & z)


def big_sigma(x: int, rotations: Rotations, bits: int) -> int:
    """Uppercase Sigma: rotr(A) ^ rotr(B) ^ rotr(C)."""
    a, b, c = rotations
    return rotr(x, a, bits) ^ rotr(x, b, bits) ^ rotr(x, c, bits)


def little_sigma(x: int, rotations: Rotations, bits: int) -> int:
    """Lowercase sigma: rotr(A) ^ rotr(B) ^ shr(C)."""
    a, b, c = rotations
    return rotr(x, a, bits) ^ rotr(x, b, bits) ^ shr(x, c, bits)


@dataclass(frozen=True)
class MixingFunctions:
    """
    The six mixing operations bound to one word width and one set of
    rotation triples. Immutable, safe to share between engines.
    """
    ch: Callable[[int, int, int], int]
    maj: Callable[[int, int, int], int]
    big_sigma0: Callable[[int], int]
    big_sigma1: Callable[[int], int]
    small_sigma0: Callable[[int], int]
    small_sigma1: Callable[[int], int]


def bind_mixing_functions(
    bits: int,
    big0: Rotations,
    big1: Rotations,
    small0: Rotations,
    small1: Rotations
) -> MixingFunctions:
    """
    Bind the generic functions to a word width and rotation amounts.

    Args:
        bits: Word width (32 or 64)
        big0: Rotations for Σ0
        big1: Rotations for Σ1
        small0: (rot, rot, shift) for σ0
        small1: (rot, rot, shift) for σ1

    Returns:
        MixingFunctions whose members take only word arguments
    """
    return MixingFunctions(
        ch=partial(ch, bits=bits),
        maj=partial(maj, bits=bits),
        big_sigma0=partial(big_sigma, rotations=big0, bits=bits),
        big_sigma1=partial(big_sigma, rotations=big1, bits=bits),
        small_sigma0=partial(little_sigma, rotations=small0, bits=bits),
        small_sigma1=partial(little_sigma, rotations=small1, bits=bits),
    )
