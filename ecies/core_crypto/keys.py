"""
ECIES Key Types and Key Agreement

Implements:
- PublicKey / PrivateKey value types (curve + point, plus scalar)
- Key generation from an injectable entropy source
- ECDH shared secret derivation

Point arithmetic, point validation and encoding are delegated to the
cryptography library. The shared secret is the big-endian x-coordinate of
the ECDH result WITHOUT leading zero padding, so its length varies.
"""

from dataclasses import dataclass, field

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from ..errors import (
    CurveMismatchError,
    InfinityResultError,
    InvalidCurveError,
    InvalidPublicKeyError,
    KeyTooLongError,
)
from .curves import get_profile, same_curve
from .entropy import DEFAULT_ENTROPY, EntropySource, read_random


UNCOMPRESSED_PREFIX = 0x04


def encode_point(key: ec.EllipticCurvePublicKey) -> bytes:
    """Uncompressed point bytes (0x04 || X || Y) of a library public key."""
    return key.public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint
    )


def _derive_private(curve: ec.EllipticCurve, d: int) -> ec.EllipticCurvePrivateKey:
    scalar = d % get_profile(curve).order
    if scalar == 0:
        raise InfinityResultError("Private scalar is zero modulo the curve order")
    return ec.derive_private_key(scalar, curve, default_backend())


@dataclass(frozen=True, eq=False)
class PublicKey:
    """
    Curve identifier plus a point.

    Holds no secret material. Coordinates supplied directly are trusted;
    from_bytes() is the validating constructor.
    """
    curve: ec.EllipticCurve
    x: int
    y: int

    def __eq__(self, other) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return (
            same_curve(self.curve, other.curve) and
            self.x == other.x and
            self.y == other.y
        )

    def __hash__(self) -> int:
        return hash((self.curve.name, self.x, self.y))

    def to_cryptography(self) -> ec.EllipticCurvePublicKey:
        """
        Build the library key object.

        Raises:
            InvalidCurveError: If the point is not on the curve
        """
        try:
            return ec.EllipticCurvePublicNumbers(self.x, self.y, self.curve).public_key(
                default_backend()
            )
        except ValueError as exc:
            raise InvalidCurveError(f"Point is not on {self.curve.name}") from exc

    def to_bytes(self) -> bytes:
        """Encode as an uncompressed X9.62 point."""
        return encode_point(self.to_cryptography())

    @classmethod
    def from_cryptography(cls, key: ec.EllipticCurvePublicKey) -> 'PublicKey':
        numbers = key.public_numbers()
        return cls(key.curve, numbers.x, numbers.y)

    @classmethod
    def from_bytes(cls, curve: ec.EllipticCurve, data: bytes) -> 'PublicKey':
        """
        Decode an uncompressed point and check it lies on the curve.

        Args:
            curve: Curve the point must belong to
            data: 0x04 || X || Y

        Returns:
            Validated PublicKey

        Raises:
            InvalidPublicKeyError: If the bytes are not an uncompressed point,
                or a coordinate is not below the field prime
            InvalidCurveError: If the point is not on the curve
        """
        profile = get_profile(curve)
        size = profile.field_size
        if len(data) != 1 + 2 * size or data[0] != UNCOMPRESSED_PREFIX:
            raise InvalidPublicKeyError(
                f"Not an uncompressed {profile.name} point ({len(data)} bytes)"
            )
        x = int.from_bytes(data[1:1 + size], 'big')
        y = int.from_bytes(data[1 + size:], 'big')
        if x >= profile.field_prime or y >= profile.field_prime:
            raise InvalidPublicKeyError(f"Coordinate out of range for {profile.name}")
        try:
            key = ec.EllipticCurvePublicKey.from_encoded_point(curve, bytes(data))
        except ValueError as exc:
            raise InvalidCurveError(f"Point is not on {profile.name}") from exc
        return cls.from_cryptography(key)


@dataclass(frozen=True)
class PrivateKey:
    """
    Public key plus the secret scalar D.

    D is excluded from repr so it never ends up in logs or tracebacks.
    """
    public_key: PublicKey
    d: int = field(repr=False)

    @property
    def curve(self) -> ec.EllipticCurve:
        return self.public_key.curve

    def to_bytes(self) -> bytes:
        """Big-endian scalar without leading zeros."""
        return self.d.to_bytes((self.d.bit_length() + 7) // 8, 'big')

    def to_cryptography(self) -> ec.EllipticCurvePrivateKey:
        """
        Build the library key object from the scalar reduced mod the curve order.

        Raises:
            InfinityResultError: If the scalar is a multiple of the order
        """
        return _derive_private(self.curve, self.d)

    def public_bytes(self) -> bytes:
        return self.public_key.to_bytes()

    @classmethod
    def from_scalar(cls, curve: ec.EllipticCurve, d: int) -> 'PrivateKey':
        """Rebuild a full key pair from its scalar, computing the public point."""
        key = _derive_private(curve, d)
        return cls(PublicKey.from_cryptography(key.public_key()), d)

    @classmethod
    def from_bytes(cls, curve: ec.EllipticCurve, data: bytes) -> 'PrivateKey':
        """Rebuild a full key pair from raw big-endian scalar bytes."""
        return cls.from_scalar(curve, int.from_bytes(data, 'big'))


def generate_key(curve: ec.EllipticCurve, rand: EntropySource = DEFAULT_ENTROPY) -> PrivateKey:
    """
    Generate a key pair on `curve`.

    Draws field-size bytes, masks the bits above the curve size and
    retries until the scalar falls in [1, order - 1]. The public point is
    the base point multiplied by that scalar.

    Args:
        curve: Curve to generate on
        rand: Entropy source (defaults to the OS CSPRNG)

    Returns:
        New PrivateKey with its public point

    Raises:
        EntropyError: If the entropy source fails
    """
    profile = get_profile(curve)
    mask = 0xFF >> (8 * profile.field_size - profile.bit_size)

    while True:
        buf = bytearray(read_random(rand, profile.field_size))
        buf[0] &= mask
        d = int.from_bytes(buf, 'big')
        if 0 < d < profile.order:
            return PrivateKey.from_scalar(curve, d)


def derive_shared(private: PrivateKey, public: PublicKey, key_size: int) -> bytes:
    """
    Derive the ECDH shared secret.

    Args:
        private: Own private key
        public: Peer public key
        key_size: Symmetric key size the secret will feed (2 * key_size
            must fit in the curve's field)

    Returns:
        x-coordinate of private.d * public, big-endian, unpadded

    Raises:
        CurveMismatchError: If the keys are on different curves
        KeyTooLongError: If the curve cannot supply 2 * key_size bytes
        InvalidCurveError: If the public point is not on the curve
        InfinityResultError: If the result is the point at infinity
    """
    if not same_curve(private.curve, public.curve):
        raise CurveMismatchError(
            f"Curves don't match: {private.curve.name} vs {public.curve.name}"
        )
    if 2 * key_size > get_profile(public.curve).field_size:
        raise KeyTooLongError(f"Shared key length {2 * key_size} is too long")

    peer = public.to_cryptography()
    own = private.to_cryptography()
    try:
        shared = own.exchange(ec.ECDH(), peer)
    except ValueError as exc:
        raise InfinityResultError("Scalar multiplication resulted in infinity") from exc

    return shared.lstrip(b'\x00')
