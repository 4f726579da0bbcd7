"""
Hashing helpers

Thin wrappers around DigestEngine for in-memory data and streams of
known length.
"""

import io
from typing import BinaryIO, Union

from .core_crypto.engine import DigestEngine
from .core_crypto.variants import SHA256, SHA512, Variant


DEFAULT_VARIANT = "sha256"


def hash_stream(
    message_length: int,
    source: BinaryIO,
    variant: Union[Variant, str] = DEFAULT_VARIANT
) -> str:
    """
    Hash a blocking byte stream.

    Args:
        message_length: Total number of bytes the stream will yield
        source: Stream with readinto(), positioned at the message start
        variant: Variant or variant name

    Returns:
        Lowercase hex digest
    """
    engine = DigestEngine(variant)
    engine.consume(message_length, source)
    return engine.to_hex_string()


def hash_bytes(data: bytes, variant: Union[Variant, str] = DEFAULT_VARIANT) -> str:
    """Hex digest of an in-memory message."""
    return hash_stream(len(data), io.BytesIO(data), variant)


def _digest(data: bytes, variant: Variant) -> bytes:
    engine = DigestEngine(variant)
    engine.consume(len(data), io.BytesIO(data))
    return engine.digest()


def sha256(data: bytes) -> bytes:
    """
    Compute the SHA-256 hash of the input data.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return _digest(data, SHA256)


def sha256_hex(data: bytes) -> str:
    """SHA-256 as a 64-character hex string."""
    return hash_bytes(data, SHA256)


def sha256_string(text: str, encoding: str = 'utf-8') -> bytes:
    """SHA-256 of an encoded string."""
    return sha256(text.encode(encoding))


def sha512(data: bytes) -> bytes:
    """Compute the SHA-512 hash of the input data (64 bytes)."""
    return _digest(data, SHA512)


def sha512_hex(data: bytes) -> str:
    """SHA-512 as a 128-character hex string."""
    return hash_bytes(data, SHA512)
