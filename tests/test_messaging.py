"""
Unit tests for the ECIES messaging module.

Tests:
- Envelope parsing and serialization
- Encrypt/decrypt round trips on P-256 and P-521
- Optional shared info (s1) and associated data (s2)
- ECIESCipher convenience wrapper
"""

import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from ecies.core_crypto.keys import PublicKey, generate_key
from ecies.core_crypto.symmetric import NONCE_SIZE, TAG_SIZE
from ecies.errors import (
    DecryptionError, EmptyMessageError, InvalidCurveError, InvalidPublicKeyError,
    InvalidPublicKeyPrefixError, MessageTooShortError,
)
from ecies.messaging.envelope import Envelope
from ecies.messaging.scheme import ECIESCipher, decrypt, encrypt


CURVES = [ec.SECP256R1(), ec.SECP521R1()]
PLAINTEXTS = [b"", b"a", b"abc123", b"x" * 1000]
CONTEXTS = [
    (None, None),
    (b"shared info", None),
    (None, b"associated data"),
    (b"shared info", b"associated data"),
]


class TestEnvelope:
    """Tests for envelope parsing."""

    def test_segments(self):
        """An envelope splits into key, body and tag."""
        key = generate_key(ec.SECP256R1())
        data = encrypt(key.public_key, b"hello")
        envelope = Envelope.from_bytes(data, ec.SECP256R1())

        assert len(envelope.ephemeral_key) == 65
        assert len(envelope.nonce) == NONCE_SIZE
        assert len(envelope.ciphertext) == 5
        assert len(envelope.tag) == TAG_SIZE
        assert envelope.to_bytes() == data

    def test_p521_point_size(self):
        """P-521 envelopes carry a 133-byte ephemeral key."""
        key = generate_key(ec.SECP521R1())
        data = encrypt(key.public_key, b"hello")
        envelope = Envelope.from_bytes(data, ec.SECP521R1())
        assert len(envelope.ephemeral_key) == 133
        assert envelope.ephemeral_public_key(ec.SECP521R1()) is not None

    def test_empty_message(self):
        """Empty input is rejected."""
        with pytest.raises(EmptyMessageError):
            Envelope.from_bytes(b"", ec.SECP256R1())

    def test_invalid_prefix(self):
        """The first byte must be a point format tag."""
        with pytest.raises(InvalidPublicKeyPrefixError):
            Envelope.from_bytes(b"\x05" + bytes(200), ec.SECP256R1())

    def test_too_short(self):
        """Input must hold key, nonce and tag."""
        with pytest.raises(MessageTooShortError):
            Envelope.from_bytes(b"\x04" + bytes(65 + NONCE_SIZE + TAG_SIZE - 2), ec.SECP256R1())

    def test_minimum_length_accepted(self):
        """Key, nonce and tag with no ciphertext parse fine."""
        envelope = Envelope.from_bytes(
            b"\x04" + bytes(64 + NONCE_SIZE + TAG_SIZE), ec.SECP256R1()
        )
        assert envelope.ciphertext == b""

    def test_compressed_prefix_not_decodable(self):
        """A compressed-point prefix passes parsing but not point decoding."""
        key = generate_key(ec.SECP256R1())
        data = bytearray(encrypt(key.public_key, b"hello"))
        data[0] = 0x02
        envelope = Envelope.from_bytes(bytes(data), ec.SECP256R1())
        with pytest.raises(InvalidPublicKeyError):
            envelope.ephemeral_public_key(ec.SECP256R1())

    def test_hex_roundtrip(self):
        """Hex serialization round-trips."""
        key = generate_key(ec.SECP256R1())
        envelope = Envelope.from_bytes(encrypt(key.public_key, b"hello"), ec.SECP256R1())
        assert Envelope.from_hex(envelope.to_hex(), ec.SECP256R1()) == envelope


class TestEncryptDecrypt:
    """Tests for the ECIES round trip."""

    @pytest.mark.parametrize("curve", CURVES)
    @pytest.mark.parametrize("plaintext", PLAINTEXTS)
    @pytest.mark.parametrize("s1,s2", CONTEXTS)
    def test_roundtrip(self, curve, plaintext, s1, s2):
        """Decrypt(Encrypt(m)) == m for every curve, message and context."""
        key = generate_key(curve)
        data = encrypt(key.public_key, plaintext, s1, s2)
        assert decrypt(key, data, s1, s2) == plaintext

    def test_abc123(self):
        """The reference message survives a P-256 round trip."""
        key = generate_key(ec.SECP256R1())
        data = encrypt(key.public_key, b"abc123", None, None)
        assert decrypt(key, data, None, None).decode() == "abc123"

    def test_off_curve_recipient(self):
        """A raw recipient point off the curve is refused before encrypting."""
        recipient = PublicKey(ec.SECP256R1(), 1, 1)
        with pytest.raises(InvalidCurveError) as excinfo:
            encrypt(recipient, b"x")
        assert isinstance(excinfo.value, DecryptionError)

    @pytest.mark.parametrize("curve,point_size", [(ec.SECP256R1(), 65), (ec.SECP521R1(), 133)])
    def test_envelope_length(self, curve, point_size):
        """Envelope = point + nonce + plaintext + tag."""
        key = generate_key(curve)
        data = encrypt(key.public_key, b"x" * 37)
        assert len(data) == point_size + NONCE_SIZE + 37 + TAG_SIZE

    def test_fresh_envelopes(self):
        """Two encryptions of the same message differ but both decrypt."""
        key = generate_key(ec.SECP256R1())
        data1 = encrypt(key.public_key, b"same message")
        data2 = encrypt(key.public_key, b"same message")

        assert data1 != data2
        assert data1[:65] != data2[:65]
        assert decrypt(key, data1) == decrypt(key, data2) == b"same message"

    def test_ciphertext_hides_plaintext(self):
        """Plaintext does not appear in the envelope."""
        key = generate_key(ec.SECP256R1())
        message = b"a very recognisable secret message"
        assert message not in encrypt(key.public_key, message)


class TestECIESCipher:
    """Tests for the key-bound wrapper."""

    def test_send_receive(self):
        """Messages encrypted to a cipher's public key decrypt with it."""
        bob = ECIESCipher.generate()
        data = ECIESCipher.encrypt_to(bob.public_key, b"Hello Bob!")
        assert bob.decrypt(data) == b"Hello Bob!"

    def test_encrypt_to_self(self):
        """A cipher can encrypt to its own key."""
        alice = ECIESCipher.generate(ec.SECP521R1())
        assert alice.decrypt(alice.encrypt(b"note", s2=b"ctx"), s2=b"ctx") == b"note"

    def test_public_bytes(self):
        """Public bytes are the uncompressed point."""
        cipher = ECIESCipher.generate()
        assert len(cipher.public_bytes) == 65
        assert cipher.public_bytes[0] == 0x04
