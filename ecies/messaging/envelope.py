"""
ECIES Envelope Codec

Wire format (no version field, no length prefixes):

    [ephemeral public key | nonce (16) | ciphertext | tag (16)]

The ephemeral public key length is fixed by the recipient's curve:
65 bytes for P-256, 133 bytes for P-521. Everything between the key and
the trailing tag is the symmetric output (nonce || ciphertext), which is
also what the tag authenticates.
"""

from dataclasses import dataclass

from cryptography.hazmat.primitives.asymmetric import ec

from ..core_crypto.curves import get_profile
from ..core_crypto.keys import PublicKey
from ..core_crypto.symmetric import NONCE_SIZE, TAG_SIZE, Tag
from ..errors import (
    EmptyMessageError,
    InvalidPublicKeyPrefixError,
    MessageTooShortError,
)


# Leading byte of an X9.62 point: compressed (even / odd y) or uncompressed
POINT_PREFIXES = (0x02, 0x03, 0x04)


@dataclass
class Envelope:
    """
    Parsed ECIES envelope.

    Format: [ephemeral_key | body | tag] where body = nonce || ciphertext
    """
    ephemeral_key: bytes    # Encoded point, curve-dependent length
    body: bytes             # nonce (16) || ciphertext
    tag: Tag                # 16 bytes

    @property
    def nonce(self) -> bytes:
        return self.body[:NONCE_SIZE]

    @property
    def ciphertext(self) -> bytes:
        return self.body[NONCE_SIZE:]

    def to_bytes(self) -> bytes:
        return self.ephemeral_key + self.body + self.tag

    @classmethod
    def from_bytes(cls, data: bytes, curve: ec.EllipticCurve) -> 'Envelope':
        """
        Split serialized envelope bytes into their segments.

        Only lengths and the point prefix are checked here; the point
        itself is decoded by ephemeral_public_key().

        Args:
            data: Serialized envelope
            curve: Recipient's curve (fixes the point length)

        Returns:
            Envelope

        Raises:
            EmptyMessageError: If data is empty
            InvalidPublicKeyPrefixError: If the first byte is not 2, 3 or 4
            MessageTooShortError: If data cannot hold point, nonce and tag
        """
        if len(data) == 0:
            raise EmptyMessageError("Invalid empty message")

        if data[0] not in POINT_PREFIXES:
            raise InvalidPublicKeyPrefixError(
                f"Invalid public key prefix 0x{data[0]:02x}"
            )

        point_size = get_profile(curve).encoded_point_size
        if len(data) < point_size + NONCE_SIZE + TAG_SIZE:
            raise MessageTooShortError(
                f"Message of {len(data)} bytes is too short for "
                f"{point_size}-byte key, nonce and tag"
            )

        body_end = len(data) - TAG_SIZE
        return cls(
            ephemeral_key=bytes(data[:point_size]),
            body=bytes(data[point_size:body_end]),
            tag=Tag(data[body_end:]),
        )

    def ephemeral_public_key(self, curve: ec.EllipticCurve) -> PublicKey:
        """
        Decode the sender's ephemeral point.

        Raises:
            InvalidPublicKeyError: If the bytes do not decode to a point
            InvalidCurveError: If the point is not on the curve
        """
        return PublicKey.from_bytes(curve, self.ephemeral_key)

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    @classmethod
    def from_hex(cls, hex_str: str, curve: ec.EllipticCurve) -> 'Envelope':
        return cls.from_bytes(bytes.fromhex(hex_str), curve)
