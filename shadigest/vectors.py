"""
NIST CAVP Test Vectors

Reader for the SHA-2 response files published by the NIST
Cryptographic Algorithm Validation Program (SHA256ShortMsg.rsp,
SHA512LongMsg.rsp, ...), and a checker that runs every vector
through DigestEngine.

File format:
    # comment
    [L = 32]

    Len = 24
    Msg = 616263
    MD = ba7816bf...

Len is in bits. For Len = 0 the Msg line holds a "00" placeholder,
which is ignored.
"""

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .core_crypto.engine import DigestEngine
from .core_crypto.variants import Variant


logger = logging.getLogger(__name__)


class VectorFormatError(ValueError):
    """Raised when a response file cannot be parsed."""

    def __init__(self, line_number: int, message: str):
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number


@dataclass(frozen=True)
class VectorCase:
    """One Len/Msg/MD triple."""
    length_bits: int
    message: bytes
    digest: str


@dataclass(frozen=True)
class VectorMismatch:
    """A vector whose computed digest differs from the expected one."""
    case: VectorCase
    actual: str


def _value(line: str) -> str:
    """Return the trimmed text after the '=' sign."""
    return line.split('=', 1)[1].strip()


def parse_rsp(lines: Iterable[str]) -> List[VectorCase]:
    """
    Parse the lines of a response file.

    Args:
        lines: Text lines (with or without trailing newlines)

    Returns:
        The vectors in file order

    Raises:
        VectorFormatError: On malformed or non-byte-aligned entries
    """
    cases: List[VectorCase] = []
    length_bits: Optional[int] = None
    message: Optional[bytes] = None
    number = 0

    for number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith('#') or line.startswith('['):
            continue

        if line.startswith('Len'):
            try:
                length_bits = int(_value(line))
            except ValueError:
                raise VectorFormatError(number, f"invalid length: {line!r}") from None
            if length_bits < 0 or length_bits % 8:
                raise VectorFormatError(
                    number, f"length {length_bits} is not a whole number of bytes"
                )
            message = None

        elif line.startswith('Msg'):
            if length_bits is None:
                raise VectorFormatError(number, "Msg without preceding Len")
            try:
                data = bytes.fromhex(_value(line))
            except ValueError:
                raise VectorFormatError(number, f"invalid hex message: {line!r}") from None
            if length_bits == 0:
                data = b''
            elif len(data) * 8 != length_bits:
                raise VectorFormatError(
                    number,
                    f"message has {len(data) * 8} bits, Len says {length_bits}"
                )
            message = data

        elif line.startswith('MD'):
            if length_bits is None or message is None:
                raise VectorFormatError(number, "MD without preceding Len and Msg")
            cases.append(VectorCase(length_bits, message, _value(line).lower()))
            length_bits = None
            message = None

        else:
            logger.debug("Skipping unrecognised line %d: %s", number, line)

    if length_bits is not None:
        raise VectorFormatError(number, "file ends before the MD of the last entry")

    return cases


def load_rsp(path: Union[str, Path]) -> List[VectorCase]:
    """Parse a response file from disk."""
    with open(path, 'r', encoding='ascii') as f:
        cases = parse_rsp(f)
    logger.info("Loaded %d vectors from %s", len(cases), path)
    return cases


def check_vectors(
    cases: Iterable[VectorCase],
    variant: Union[Variant, str]
) -> List[VectorMismatch]:
    """
    Hash every vector with a fresh engine.

    Returns:
        The mismatching vectors (empty when all pass)
    """
    mismatches: List[VectorMismatch] = []
    for case in cases:
        engine = DigestEngine(variant)
        engine.consume(len(case.message), io.BytesIO(case.message))
        actual = engine.to_hex_string()
        if actual != case.digest:
            logger.warning(
                "Vector mismatch for Len = %d: expected %s, got %s",
                case.length_bits, case.digest, actual
            )
            mismatches.append(VectorMismatch(case, actual))
    return mismatches
