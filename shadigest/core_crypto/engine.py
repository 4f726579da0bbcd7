"""
Generic SHA-2 Digest Engine

One engine type serves both SHA-256 and SHA-512; the variant supplies
word width, block size, round count, IV, round constants and the bound
mixing functions.

Components:
- Block buffer: one fixed-size bytearray, refilled in place per block
- Padding: 0x80 terminator, zero fill, 64-bit big-endian bit length
- Message schedule: expands 16 words to 64 (SHA-256) or 80 (SHA-512)
- Compression: one round per schedule word, then state += working vars

Lifecycle of one message:
    EMPTY -> ACCUMULATING -> FINALIZING -> DONE

The engine reads from a blocking byte source, i.e. any object with a
``readinto(buffer) -> int`` method returning 0 at end of input
(io.BytesIO, files opened in binary mode, socket.makefile('rb'), ...).
"""

import logging
from enum import Enum
from typing import List, Optional, Tuple, Union

from .formatter import format_state
from .variants import BLOCK_WORDS, LENGTH_FIELD_SIZE, Variant, get_variant
from .words import add_modulo, mask, word_to_bytes, words_from_block


logger = logging.getLogger(__name__)

# The bit-length trailer is a 64-bit field
MAX_MESSAGE_BYTES = (1 << 64) // 8 - 1


class ByteSourceContractError(RuntimeError):
    """Raised when a byte source reports an impossible read count."""
    pass


class EngineStateError(RuntimeError):
    """Raised when an engine operation is used in the wrong lifecycle state."""
    pass


class EngineState(Enum):
    """Lifecycle of one message computation."""

    EMPTY = "empty"
    ACCUMULATING = "accumulating"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


class DigestEngine:
    """
    Stateful SHA-2 digest computation over one message.

    Example:
        >>> import io
        >>> engine = DigestEngine("sha256")
        >>> engine.consume(3, io.BytesIO(b"abc"))
        >>> engine.to_hex_string()[:16]
        'ba7816bf8f01cfea'
    """

    def __init__(self, variant: Union[Variant, str]):
        """
        Create an engine in the EMPTY state.

        Args:
            variant: A Variant instance or a name accepted by get_variant
        """
        if isinstance(variant, str):
            variant = get_variant(variant)
        self._variant = variant
        self._bits = variant.word_bits
        self._mask = mask(variant.word_bits)
        self._k = variant.round_constants
        self._mix = variant.mixing
        self._block = bytearray(variant.block_size)
        self._hash: List[int] = list(variant.iv)
        self._state = EngineState.EMPTY
        self._blocks_compressed = 0

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def variant(self) -> Variant:
        return self._variant

    @property
    def engine_state(self) -> EngineState:
        return self._state

    @property
    def state(self) -> Tuple[int, ...]:
        """Snapshot of the 8 running hash words."""
        return tuple(self._hash)

    @property
    def block(self) -> bytes:
        """Copy of the current block buffer."""
        return bytes(self._block)

    @property
    def blocks_compressed(self) -> int:
        """Number of compression rounds run since the last reset."""
        return self._blocks_compressed

    def reset(self) -> None:
        """Return to EMPTY: IV restored, block buffer zeroed."""
        self._hash = list(self._variant.iv)
        self._block[:] = bytes(len(self._block))
        self._state = EngineState.EMPTY
        self._blocks_compressed = 0

    # ------------------------------------------------------------------
    # Message processing
    # ------------------------------------------------------------------

    def consume(self, message_length: int, source) -> None:
        """
        Hash a whole message read from a blocking byte source.

        Args:
            message_length: Total message length in bytes, used for the
                padding trailer
            source: Object with readinto(buffer) -> int, 0 at end of input

        Raises:
            EngineStateError: If the engine is not EMPTY
            ValueError: If message_length does not fit the 64-bit trailer
            ByteSourceContractError: If the source over-reports a read
            Exception: Any error raised by the source, unchanged
        """
        if self._state is not EngineState.EMPTY:
            raise EngineStateError(
                f"consume() requires an EMPTY engine, state is {self._state.value}"
            )
        if not 0 <= message_length <= MAX_MESSAGE_BYTES:
            raise ValueError(f"Message length out of range: {message_length}")

        block_size = len(self._block)
        self._state = EngineState.ACCUMULATING
        try:
            filled = 0
            total_read = 0
            while True:
                bytes_read = self._fill(source, filled)
                if bytes_read == 0:
                    break
                filled += bytes_read
                total_read += bytes_read
                if filled == block_size:
                    self.compress_block(self._block)
                    filled = 0

            if total_read != message_length:
                logger.warning(
                    "%s: declared length %d bytes but source yielded %d",
                    self._variant.name, message_length, total_read
                )

            self._state = EngineState.FINALIZING
            spillover = self.pad_block(filled, message_length)
            self.compress_block(self._block)
            if spillover is not None:
                self.compress_block(spillover)
        except BaseException:
            self._state = EngineState.FAILED
            raise

        self._state = EngineState.DONE
        logger.debug(
            "%s: %d bytes hashed in %d blocks",
            self._variant.name, message_length, self._blocks_compressed
        )

    def _fill(self, source, offset: int) -> int:
        """Read into the free tail of the block buffer."""
        free = memoryview(self._block)[offset:]
        try:
            bytes_read = source.readinto(free)
        finally:
            free.release()
        offered = len(self._block) - offset
        if bytes_read is None:
            raise ByteSourceContractError(
                "Byte source returned None; a blocking source is required"
            )
        if not isinstance(bytes_read, int) or isinstance(bytes_read, bool):
            raise ByteSourceContractError(
                f"Byte source returned a non-integer count: {bytes_read!r}"
            )
        if bytes_read < 0 or bytes_read > offered:
            raise ByteSourceContractError(
                f"Byte source reported {bytes_read} bytes for a {offered}-byte buffer"
            )
        return bytes_read

    def pad_block(self, bytes_read: int, message_length: int) -> Optional[bytearray]:
        """
        Pad the current block after its first bytes_read valid bytes.

        Appends the 0x80 terminator and zero fill. The 64-bit big-endian
        bit length goes into the last 8 bytes of this block when the
        terminator lands before the reserved region; otherwise this block
        is only zero-filled and a second block carrying the length is
        returned. The caller compresses this block first, then the
        returned one.

        Args:
            bytes_read: Valid prefix length of the block (0..B-1)
            message_length: Total message length in bytes

        Returns:
            The spillover block, or None if the length fit
        """
        self._require_open()
        block_size = len(self._block)
        if not 0 <= bytes_read < block_size:
            raise ValueError(
                f"bytes_read must be in 0..{block_size - 1}, got {bytes_read}"
            )

        length_field = (message_length * 8).to_bytes(LENGTH_FIELD_SIZE, byteorder='big')
        lower_bound = self._variant.length_field_offset

        self._block[bytes_read] = 0x80
        self._block[bytes_read + 1:] = bytes(block_size - bytes_read - 1)

        if bytes_read < lower_bound:
            self._block[-LENGTH_FIELD_SIZE:] = length_field
            return None

        logger.debug(
            "%s: terminator at byte %d, length field spills into a new block",
            self._variant.name, bytes_read
        )
        spillover = bytearray(block_size)
        spillover[-LENGTH_FIELD_SIZE:] = length_field
        return spillover

    def message_schedule(self, block: bytes) -> List[int]:
        """
        Expand one block into the R-word message schedule.

        For i from 16 to R-1:
            W[i] = σ1(W[i-2]) + W[i-7] + σ0(W[i-15]) + W[i-16]
        """
        m = self._mask
        sigma0 = self._mix.small_sigma0
        sigma1 = self._mix.small_sigma1

        w = words_from_block(block, self._bits)
        for i in range(BLOCK_WORDS, self._variant.rounds):
            w.append((w[i - 16] + sigma0(w[i - 15]) + w[i - 7] + sigma1(w[i - 2])) & m)
        return w

    def compress_block(self, block: bytes) -> None:
        """
        Run one compression round over a full block and fold the result
        into the running hash state.
        """
        self._require_open()
        if len(block) != len(self._block):
            raise ValueError(
                f"Expected {len(self._block)}-byte block, got {len(block)}"
            )

        m = self._mask
        k = self._k
        mix = self._mix
        ch, maj = mix.ch, mix.maj
        big_sigma0, big_sigma1 = mix.big_sigma0, mix.big_sigma1

        w = self.message_schedule(block)
        a, b, c, d, e, f, g, h = self._hash

        for i in range(self._variant.rounds):
            t1 = (h + big_sigma1(e) + ch(e, f, g) + k[i] + w[i]) & m
            t2 = (big_sigma0(a) + maj(a, b, c)) & m

            h = g
            g = f
            f = e
            e = (d + t1) & m
            d = c
            c = b
            b = a
            a = (t1 + t2) & m

        for i, value in enumerate((a, b, c, d, e, f, g, h)):
            self._hash[i] = add_modulo(self._hash[i], value, self._bits)
        self._blocks_compressed += 1

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _require_open(self) -> None:
        if self._state in (EngineState.DONE, EngineState.FAILED):
            raise EngineStateError(
                f"Engine is {self._state.value}; reset() before feeding more blocks"
            )

    def _require_done(self) -> None:
        if self._state is not EngineState.DONE:
            raise EngineStateError(
                f"Digest not available, engine state is {self._state.value}"
            )

    def to_hex_string(self) -> str:
        """Lowercase hex digest (64 or 128 chars). Valid only once DONE."""
        self._require_done()
        return format_state(self._hash, self._bits)

    def digest(self) -> bytes:
        """Raw big-endian digest (32 or 64 bytes). Valid only once DONE."""
        self._require_done()
        return b''.join(word_to_bytes(word, self._bits) for word in self._hash)

    def __repr__(self) -> str:
        return (
            f"DigestEngine(variant={self._variant.name!r}, "
            f"state={self._state.value!r}, blocks={self._blocks_compressed})"
        )
