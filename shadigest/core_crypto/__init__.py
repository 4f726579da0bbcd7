# Core Cryptography Module
"""
Generic SHA-2 digest engine including:
- Word arithmetic (32/64-bit, big-endian)
- Bit-mixing functions (Ch, Maj, Σ, σ)
- SHA-256 and SHA-512 variant configuration
- Digest engine (buffering, padding, schedule, compression)
- Hex digest formatting
"""

from .engine import (
    ByteSourceContractError,
    DigestEngine,
    EngineState,
    EngineStateError,
)
from .formatter import format_state
from .variants import SHA256, SHA512, VARIANTS, Variant, get_variant

__all__ = [
    'ByteSourceContractError',
    'DigestEngine',
    'EngineState',
    'EngineStateError',
    'format_state',
    'SHA256',
    'SHA512',
    'VARIANTS',
    'Variant',
    'get_variant',
]
