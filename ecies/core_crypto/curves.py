"""
Curve Profiles

Binds every supported NIST curve to the fixed protocol parameters that
depend on it:

    Curve   Hash      Field bytes   Encoded point   AES key
    P-224   SHA-256   28            57              (rejected: KeyTooLong)
    P-256   SHA-256   32            65              AES-128
    P-384   SHA-256   48            97              AES-128
    P-521   SHA-512   66            133             AES-256

The encoded point length follows the generic (bits + 7) // 4 formula,
except for P-521 whose uncompressed encoding is one byte longer than the
formula predicts. That correction is a table entry, not a special case.
"""

from dataclasses import dataclass
from typing import Callable, Dict

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from ..errors import UnsupportedCurveError


@dataclass(frozen=True)
class CurveProfile:
    """Fixed protocol parameters for one curve."""
    name: str
    curve_name: str
    curve_factory: Callable[[], ec.EllipticCurve]
    hash_factory: Callable[[], hashes.HashAlgorithm]
    field_size: int
    field_prime: int
    order: int
    point_size_adjust: int = 0

    @property
    def curve(self) -> ec.EllipticCurve:
        return self.curve_factory()

    @property
    def bit_size(self) -> int:
        return self.curve.key_size

    def hash_algorithm(self) -> hashes.HashAlgorithm:
        return self.hash_factory()

    @property
    def key_size(self) -> int:
        """Length of the symmetric key: half of the KDF output."""
        return self.hash_algorithm().digest_size // 2

    @property
    def encoded_point_size(self) -> int:
        """Length of the ephemeral public key at the head of an envelope."""
        return (self.bit_size + 7) // 4 + self.point_size_adjust


PROFILES: Dict[str, CurveProfile] = {
    profile.curve_name: profile
    for profile in (
        CurveProfile(
            name="P-224",
            curve_name="secp224r1",
            curve_factory=ec.SECP224R1,
            hash_factory=hashes.SHA256,
            field_size=28,
            field_prime=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF000000000000000000000001,
            order=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFF16A2E0B8F03E13DD29455C5C2A3D,
        ),
        CurveProfile(
            name="P-256",
            curve_name="secp256r1",
            curve_factory=ec.SECP256R1,
            hash_factory=hashes.SHA256,
            field_size=32,
            field_prime=0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFF,
            order=0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
        ),
        CurveProfile(
            name="P-384",
            curve_name="secp384r1",
            curve_factory=ec.SECP384R1,
            hash_factory=hashes.SHA256,
            field_size=48,
            field_prime=int(
                "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFE"
                "FFFFFFFF0000000000000000FFFFFFFF", 16
            ),
            order=int(
                "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFC7634D81F4372DDF"
                "581A0DB248B0A77AECEC196ACCC52973", 16
            ),
        ),
        CurveProfile(
            name="P-521",
            curve_name="secp521r1",
            curve_factory=ec.SECP521R1,
            hash_factory=hashes.SHA512,
            field_size=66,
            field_prime=2 ** 521 - 1,
            order=int(
                "01FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF"
                "FA51868783BF2F966B7FCC0148F709A5D03BB5C9B8899C47AEBB6FB71E91386409", 16
            ),
            point_size_adjust=1,
        ),
    )
}

# Names accepted by curve_by_name, besides the cryptography curve names
_ALIASES = {
    "p-224": "secp224r1", "p224": "secp224r1",
    "p-256": "secp256r1", "p256": "secp256r1",
    "p-384": "secp384r1", "p384": "secp384r1",
    "p-521": "secp521r1", "p521": "secp521r1",
}


def get_profile(curve: ec.EllipticCurve) -> CurveProfile:
    """
    Look up the protocol parameters for a curve.

    Raises:
        UnsupportedCurveError: If the curve has no profile
    """
    try:
        return PROFILES[curve.name]
    except KeyError:
        raise UnsupportedCurveError(f"No ECIES profile for curve {curve.name}") from None


def curve_by_name(name: str) -> ec.EllipticCurve:
    """
    Resolve a curve from a user-facing name such as "P-256", "P521" or "secp256r1".
    """
    key = name.strip().lower()
    key = _ALIASES.get(key, key)
    if key not in PROFILES:
        raise UnsupportedCurveError(f"Unknown curve name: {name!r}")
    return PROFILES[key].curve


def same_curve(a: ec.EllipticCurve, b: ec.EllipticCurve) -> bool:
    """Curve identity is by name; cryptography hands out fresh instances."""
    return a.name == b.name
