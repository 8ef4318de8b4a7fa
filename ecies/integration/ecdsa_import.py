"""
ECDSA Key Import

Converts keys from the cryptography library's generic EC representation
(as loaded from PEM/DER, or used for ECDSA signing) into ECIES key types.
Only P-256 keys are accepted.

Private import copies the scalar AND the public coordinates, so the
result is always a complete key pair.
"""

from typing import Union

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from ..core_crypto.keys import PrivateKey, PublicKey
from ..errors import UnsupportedCurveError


SUPPORTED_CURVE = ec.SECP256R1.name


def _check_curve(curve: ec.EllipticCurve, caller: str) -> None:
    if curve.name != SUPPORTED_CURVE:
        raise UnsupportedCurveError(
            f"{caller}: only ECDSA P256 is supported, got {curve.name}"
        )


def import_ecdsa(key: ec.EllipticCurvePrivateKey) -> PrivateKey:
    """
    Import an ECDSA private key.

    Raises:
        UnsupportedCurveError: If the key is not on P-256
    """
    _check_curve(key.curve, "import_ecdsa")
    numbers = key.private_numbers()
    public = PublicKey(
        key.curve,
        numbers.public_numbers.x,
        numbers.public_numbers.y,
    )
    return PrivateKey(public, numbers.private_value)


def import_ecdsa_public(key: ec.EllipticCurvePublicKey) -> PublicKey:
    """
    Import an ECDSA public key.

    Raises:
        UnsupportedCurveError: If the key is not on P-256
    """
    _check_curve(key.curve, "import_ecdsa_public")
    return PublicKey.from_cryptography(key)


def _as_bytes(pem: Union[str, bytes]) -> bytes:
    return pem.encode() if isinstance(pem, str) else pem


def private_key_from_pem(pem: Union[str, bytes]) -> ec.EllipticCurvePrivateKey:
    """
    Load an unencrypted EC private key from PEM (SEC1 or PKCS#8).

    Raises:
        ValueError: If no key is found or it is not an EC key
    """
    key = serialization.load_pem_private_key(
        _as_bytes(pem).strip(), password=None, backend=default_backend()
    )
    if not isinstance(key, ec.EllipticCurvePrivateKey):
        raise ValueError("private_key_from_pem: not an EC private key")
    return key


def public_key_from_pem(pem: Union[str, bytes]) -> ec.EllipticCurvePublicKey:
    """
    Load an EC public key from PEM (SubjectPublicKeyInfo).

    Raises:
        ValueError: If no key is found or it is not an EC key
    """
    key = serialization.load_pem_public_key(
        _as_bytes(pem).strip(), backend=default_backend()
    )
    if not isinstance(key, ec.EllipticCurvePublicKey):
        raise ValueError("public_key_from_pem: not an ECDSA public key")
    return key
