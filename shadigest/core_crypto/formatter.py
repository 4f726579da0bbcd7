"""Hex rendering of a digest state."""

from typing import Sequence


def format_state(state: Sequence[int], bits: int) -> str:
    """
    Render each state word as zero-padded lowercase hex and concatenate.

    Args:
        state: The 8 digest words
        bits: Word width (32 or 64)

    Returns:
        64 hex characters for 32-bit words, 128 for 64-bit words
    """
    width = 2 * (bits // 8)
    return ''.join(f"{word:0{width}x}" for word in state)
