"""
Unit tests for Core Crypto building blocks.

Tests:
- Word arithmetic
- Bit-mixing functions
- Variant configuration
- Digest formatting
"""

import pytest
from shadigest.core_crypto.words import (
    add_modulo, rotr, shr, word_from_bytes, word_to_bytes, words_from_block
)
from shadigest.core_crypto.mixing import (
    ch, maj, big_sigma, little_sigma, bind_mixing_functions
)
from shadigest.core_crypto.variants import (
    SHA256, SHA512, SHA256_IV, SHA256_K, Variant, get_variant
)
from shadigest.core_crypto.formatter import format_state


class TestWordArithmetic:
    """Unit tests for modular word helpers."""

    def test_add_wraps_32(self):
        """Addition should wrap at 2**32."""
        assert add_modulo(0xFFFFFFFF, 1, 32) == 0
        assert add_modulo(0xFFFFFFFF, 0xFFFFFFFF, 32) == 0xFFFFFFFE

    def test_add_wraps_64(self):
        """Addition should wrap at 2**64."""
        assert add_modulo(2**64 - 1, 2, 64) == 1

    def test_add_no_wrap(self):
        assert add_modulo(2, 3, 32) == 5

    def test_word_from_bytes_big_endian(self):
        """Decoding is big-endian."""
        assert word_from_bytes(b"\x01\x02\x03\x04", 32) == 0x01020304
        assert word_from_bytes(bytes(range(1, 9)), 64) == 0x0102030405060708

    def test_word_from_bytes_wrong_length(self):
        """Wrong buffer size is a precondition violation."""
        with pytest.raises(ValueError):
            word_from_bytes(b"\x01\x02\x03", 32)
        with pytest.raises(ValueError):
            word_from_bytes(b"\x00" * 4, 64)

    def test_word_to_bytes(self):
        assert word_to_bytes(0x01020304, 32) == b"\x01\x02\x03\x04"

    def test_words_from_block(self):
        """A 64-byte block splits into 16 words."""
        block = bytes(range(64))
        words = words_from_block(block, 32)
        assert len(words) == 16
        assert words[0] == 0x00010203
        assert words[15] == 0x3c3d3e3f

    def test_words_from_block_misaligned(self):
        with pytest.raises(ValueError):
            words_from_block(bytes(10), 64)

    def test_rotr(self):
        """Right rotation moves low bits to the top."""
        assert rotr(1, 1, 32) == 0x80000000
        assert rotr(0x80000000, 31, 32) == 1
        assert rotr(1, 1, 64) == 1 << 63

    def test_shr(self):
        assert shr(0x80000000, 31, 32) == 1
        assert shr(1, 1, 64) == 0


class TestMixingFunctions:
    """Unit tests for Ch, Maj and the sigma functions."""

    def test_ch_selects(self):
        """Ch picks y where x is set and z elsewhere."""
        assert ch(0xFFFFFFFF, 0x12345678, 0x9ABCDEF0, 32) == 0x12345678
        assert ch(0, 0x12345678, 0x9ABCDEF0, 32) == 0x9ABCDEF0
        assert ch(0x0F0F0F0F, 0x12345678, 0x9ABCDEF0, 32) == 0x92B4D6F8

    def test_ch_stays_in_range(self):
        assert 0 <= ch(0, 0xFFFFFFFFFFFFFFFF, 0xFFFFFFFFFFFFFFFF, 64) < 2**64

    def test_maj(self):
        """Maj is a bitwise majority vote."""
        assert maj(0xFF00, 0x0FF0, 0x00FF, 32) == 0x0FF0
        assert maj(0xABCD, 0xABCD, 0x1234, 32) == 0xABCD

    def test_big_sigma(self):
        # rotr(1,2) ^ rotr(1,13) ^ rotr(1,22)
        assert big_sigma(1, (2, 13, 22), 32) == 0x40080400

    def test_little_sigma(self):
        # rotr(x,7) ^ rotr(x,18) ^ (x >> 3)
        assert little_sigma(0x80000000, (7, 18, 3), 32) == 0x11002000

    def test_little_sigma_64(self):
        assert little_sigma(1, (1, 8, 7), 64) == (1 << 63) | (1 << 56)

    def test_bound_functions_match_generic(self):
        """Bound functions should agree with the generic ones."""
        mix = bind_mixing_functions(32, (2, 13, 22), (6, 11, 25), (7, 18, 3), (17, 19, 10))
        x = 0xDEADBEEF
        assert mix.big_sigma0(x) == big_sigma(x, (2, 13, 22), 32)
        assert mix.big_sigma1(x) == big_sigma(x, (6, 11, 25), 32)
        assert mix.small_sigma0(x) == little_sigma(x, (7, 18, 3), 32)
        assert mix.small_sigma1(x) == little_sigma(x, (17, 19, 10), 32)
        assert mix.ch(x, 1, 2) == ch(x, 1, 2, 32)
        assert mix.maj(x, 1, 2) == maj(x, 1, 2, 32)

    def test_mixing_is_immutable(self):
        """Bound mixing functions cannot be swapped out."""
        with pytest.raises(AttributeError):
            SHA256.mixing.ch = None


class TestVariants:
    """Unit tests for SHA-256 / SHA-512 configuration."""

    def test_sha256_geometry(self):
        assert SHA256.word_bits == 32
        assert SHA256.block_size == 64
        assert SHA256.rounds == 64
        assert SHA256.length_field_offset == 56
        assert SHA256.digest_size == 32
        assert SHA256.hex_length == 64

    def test_sha512_geometry(self):
        assert SHA512.word_bits == 64
        assert SHA512.block_size == 128
        assert SHA512.rounds == 80
        assert SHA512.length_field_offset == 112
        assert SHA512.digest_size == 64
        assert SHA512.hex_length == 128

    def test_constant_tables(self):
        """Round tables hold exactly R words."""
        assert len(SHA256.round_constants) == 64
        assert len(SHA512.round_constants) == 80
        assert SHA256.round_constants[-1] == 0xc67178f2
        assert SHA512.round_constants[-1] == 0x6c44198c4a475817
        assert SHA512.iv[0] == 0x6a09e667f3bcc908

    def test_sha512_constants_extend_sha256(self):
        """The top halves of the SHA-512 constants are the SHA-256 ones."""
        for k512, k256 in zip(SHA512.round_constants, SHA256.round_constants):
            assert k512 >> 32 == k256
        for h512, h256 in zip(SHA512.iv, SHA256.iv):
            assert h512 >> 32 == h256

    def test_words_fit_width(self):
        for variant in (SHA256, SHA512):
            limit = 1 << variant.word_bits
            assert all(0 <= k < limit for k in variant.round_constants)
            assert all(0 <= h < limit for h in variant.iv)

    def test_mixing_is_shared(self):
        """Bound mixing functions are built once per variant."""
        assert SHA256.mixing is SHA256.mixing

    @pytest.mark.parametrize("name", ["256", "sha256", "SHA-256", "Sha_256"])
    def test_get_variant_sha256(self, name):
        assert get_variant(name) is SHA256

    @pytest.mark.parametrize("name", ["512", "sha512", "SHA-512"])
    def test_get_variant_sha512(self, name):
        assert get_variant(name) is SHA512

    def test_unknown_variant(self):
        with pytest.raises(KeyError):
            get_variant("md5")

    def test_bad_round_table_rejected(self):
        """Variant validates its constant tables."""
        with pytest.raises(ValueError):
            Variant(
                name="broken", word_bits=32, rounds=64,
                iv=SHA256_IV, round_constants=SHA256_K[:63],
                big_sigma0=(2, 13, 22), big_sigma1=(6, 11, 25),
                small_sigma0=(7, 18, 3), small_sigma1=(17, 19, 10),
            )

    def test_bad_width_rejected(self):
        with pytest.raises(ValueError):
            Variant(
                name="broken", word_bits=16, rounds=64,
                iv=SHA256_IV, round_constants=SHA256_K,
                big_sigma0=(2, 13, 22), big_sigma1=(6, 11, 25),
                small_sigma0=(7, 18, 3), small_sigma1=(17, 19, 10),
            )


class TestFormatter:
    """Unit tests for hex digest rendering."""

    def test_iv_rendering(self):
        """The SHA-256 IV renders as its familiar hex string."""
        assert format_state(SHA256_IV, 32) == (
            "6a09e667bb67ae853c6ef372a54ff53a510e527f9b05688c1f83d9ab5be0cd19"
        )

    def test_zero_padding(self):
        """Words are zero-padded to full width."""
        assert format_state([0] * 8, 32) == "0" * 64
        assert format_state([1] * 8, 64) == ("0" * 15 + "1") * 8

    def test_lowercase(self):
        assert format_state([0xABCDEF01] * 8, 32) == "abcdef01" * 8
