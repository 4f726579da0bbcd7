# shadigest
"""
SHA-256 / SHA-512 digests computed by a generic, from-scratch SHA-2 engine.

- core_crypto: digest engine, variants, mixing functions, formatting
- hashing: one-call helpers (sha256_hex, sha512_hex, hash_stream, ...)
- vectors: NIST CAVP response-file reader and checker
"""

# Lazy imports to avoid RuntimeWarning when running modules directly
def __getattr__(name):
    """Resolve the convenience helpers on first access."""
    if name in __all__:
        from . import hashing
        return getattr(hashing, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    'hash_bytes',
    'hash_stream',
    'sha256',
    'sha256_hex',
    'sha256_string',
    'sha512',
    'sha512_hex',
]
