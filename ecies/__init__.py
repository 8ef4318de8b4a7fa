"""
ECIES - Elliptic Curve Integrated Encryption Scheme

Hybrid public-key encryption: ephemeral ECDH + hash KDF + AES-CTR + Poly1305.

Entry points:
    generate_key(curve, rand)                    -> PrivateKey
    encrypt(public_key, plaintext, s1, s2, rand) -> envelope bytes
    decrypt(private_key, envelope, s1, s2)       -> plaintext
    import_ecdsa(key) / import_ecdsa_public(key) -> ECIES keys (P-256 only)
"""

__version__ = "1.0.0"

from .core_crypto.curves import curve_by_name, get_profile
from .core_crypto.keys import PrivateKey, PublicKey, derive_shared, generate_key
from .errors import (
    CipherInitError,
    CurveMismatchError,
    DecryptionError,
    ECIESError,
    EmptyMessageError,
    EntropyError,
    InfinityResultError,
    InvalidCurveError,
    InvalidPublicKeyError,
    InvalidPublicKeyPrefixError,
    KeyTooLongError,
    MessageTooShortError,
    TagMismatchError,
    UnsupportedCurveError,
)
from .integration.ecdsa_import import import_ecdsa, import_ecdsa_public
from .messaging.scheme import ECIESCipher, decrypt, encrypt

__all__ = [
    'PrivateKey',
    'PublicKey',
    'ECIESCipher',
    'generate_key',
    'derive_shared',
    'encrypt',
    'decrypt',
    'import_ecdsa',
    'import_ecdsa_public',
    'curve_by_name',
    'get_profile',
    'ECIESError',
    'DecryptionError',
    'EntropyError',
    'UnsupportedCurveError',
    'CipherInitError',
    'CurveMismatchError',
    'KeyTooLongError',
    'InfinityResultError',
    'EmptyMessageError',
    'MessageTooShortError',
    'InvalidPublicKeyPrefixError',
    'InvalidPublicKeyError',
    'InvalidCurveError',
    'TagMismatchError',
]
