"""
Security tests for ECIES.

Tests specifically for security-related scenarios:
- Single-bit tampering of every envelope segment
- Wrong shared info / associated data
- Wrong recipient and wrong curve
- Truncated and malformed envelopes
"""

import os

import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from ecies.core_crypto.curves import get_profile
from ecies.core_crypto.keys import generate_key
from ecies.core_crypto.symmetric import NONCE_SIZE, TAG_SIZE
from ecies.errors import (
    DecryptionError, EmptyMessageError, InvalidPublicKeyError, MessageTooShortError,
    TagMismatchError,
)
from ecies.messaging.scheme import decrypt, encrypt


def flip_bit(data: bytes, byte_pos: int, bit_pos: int) -> bytes:
    modified = bytearray(data)
    modified[byte_pos] ^= (1 << bit_pos)
    return bytes(modified)


@pytest.fixture
def p256_key():
    return generate_key(ec.SECP256R1())


class TestTampering:
    """Any single bit flip must make decryption fail."""

    def test_tag_bit_flips(self, p256_key):
        """Every bit of the tag is checked."""
        data = encrypt(p256_key.public_key, b"Sensitive data")
        tag_start = len(data) - TAG_SIZE
        for byte_pos in range(tag_start, len(data)):
            for bit_pos in range(8):
                with pytest.raises(TagMismatchError):
                    decrypt(p256_key, flip_bit(data, byte_pos, bit_pos))

    def test_body_bit_flips(self, p256_key):
        """Every bit of nonce and ciphertext is authenticated."""
        data = encrypt(p256_key.public_key, b"secret")
        for byte_pos in range(65, len(data) - TAG_SIZE):
            for bit_pos in range(8):
                with pytest.raises(TagMismatchError):
                    decrypt(p256_key, flip_bit(data, byte_pos, bit_pos))

    @pytest.mark.parametrize("curve,point_size", [(ec.SECP256R1(), 65), (ec.SECP521R1(), 133)])
    def test_ephemeral_key_bit_flips(self, curve, point_size):
        """Flipping any bit of the ephemeral key is detected."""
        key = generate_key(curve)
        data = encrypt(key.public_key, b"secret")
        for byte_pos in range(point_size):
            with pytest.raises(DecryptionError):
                decrypt(key, flip_bit(data, byte_pos, byte_pos % 8))

    def test_no_plaintext_on_failure(self, p256_key):
        """A failed decryption returns nothing."""
        data = encrypt(p256_key.public_key, b"secret")
        result = None
        with pytest.raises(DecryptionError):
            result = decrypt(p256_key, flip_bit(data, 70, 0))
        assert result is None


class TestContextBinding:
    """Shared info and associated data must match."""

    def test_wrong_s1(self, p256_key):
        """Different KDF shared info gives different keys."""
        data = encrypt(p256_key.public_key, b"message", s1=b"A")
        with pytest.raises(TagMismatchError):
            decrypt(p256_key, data, s1=b"B")

    def test_missing_s1(self, p256_key):
        """Dropping the shared info fails."""
        data = encrypt(p256_key.public_key, b"message", s1=b"A")
        with pytest.raises(TagMismatchError):
            decrypt(p256_key, data)

    def test_wrong_s2(self, p256_key):
        """Different associated data fails the tag."""
        data = encrypt(p256_key.public_key, b"message", s2=b"A")
        with pytest.raises(TagMismatchError):
            decrypt(p256_key, data, s2=b"B")

    def test_added_s2(self, p256_key):
        """Associated data that was not used at encryption fails."""
        data = encrypt(p256_key.public_key, b"message")
        with pytest.raises(TagMismatchError):
            decrypt(p256_key, data, s2=b"extra")


class TestWrongKey:
    """Only the intended recipient can decrypt."""

    def test_wrong_recipient(self):
        """Another key on the same curve fails authentication."""
        alice = generate_key(ec.SECP256R1())
        eve = generate_key(ec.SECP256R1())
        data = encrypt(alice.public_key, b"for alice")
        with pytest.raises(TagMismatchError):
            decrypt(eve, data)

    def test_wrong_curve(self):
        """A P-521 envelope does not decrypt with a P-256 key."""
        p521 = generate_key(ec.SECP521R1())
        p256 = generate_key(ec.SECP256R1())
        data = encrypt(p521.public_key, b"message")
        with pytest.raises(DecryptionError):
            decrypt(p256, data)


class TestMalformedEnvelopes:
    """Malformed input must fail cleanly."""

    def test_empty(self, p256_key):
        """Empty input is rejected."""
        with pytest.raises(EmptyMessageError):
            decrypt(p256_key, b"")

    def test_every_truncation(self, p256_key):
        """Every prefix shorter than key + nonce + tag is too short."""
        data = encrypt(p256_key.public_key, b"")
        assert len(data) == 65 + NONCE_SIZE + TAG_SIZE
        for length in range(1, len(data)):
            with pytest.raises(MessageTooShortError):
                decrypt(p256_key, data[:length])

    def test_truncated_ciphertext(self, p256_key):
        """Dropping ciphertext bytes breaks the tag."""
        data = encrypt(p256_key.public_key, b"test message")
        with pytest.raises(TagMismatchError):
            decrypt(p256_key, data[:70] + data[71:])

    def test_ephemeral_x_above_field_prime(self, p256_key):
        """An ephemeral x-coordinate of p + 1 is an invalid public key."""
        data = encrypt(p256_key.public_key, b"message")
        x = (get_profile(ec.SECP256R1()).field_prime + 1).to_bytes(32, "big")
        with pytest.raises(InvalidPublicKeyError):
            decrypt(p256_key, data[:1] + x + data[33:])

    def test_random_garbage(self, p256_key):
        """Random bytes never decrypt."""
        for _ in range(20):
            data = b"\x04" + os.urandom(200)
            with pytest.raises(DecryptionError):
                decrypt(p256_key, data)
