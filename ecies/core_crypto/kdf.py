"""
Key Derivation

Single-round hash KDF:  K = H(shared || s1)

K is split in half: the first half is the AES key Ke, the second half is
the Poly1305 key Km. Poly1305 needs exactly 32 bytes, so a shorter Km
(SHA-256 gives 16) is stretched by hashing it once more.
"""

from typing import Optional, Tuple

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes

from .symmetric import MAC_KEY_SIZE, MacKey


def digest(algorithm: hashes.HashAlgorithm, *segments: Optional[bytes]) -> bytes:
    """Hash the concatenation of the given segments, skipping None."""
    h = hashes.Hash(algorithm, default_backend())
    for segment in segments:
        if segment:
            h.update(segment)
    return h.finalize()


def kdf(algorithm: hashes.HashAlgorithm, shared: bytes, s1: Optional[bytes] = None) -> bytes:
    """
    Derive key material from a shared secret.

    Args:
        algorithm: Hash bound to the curve (SHA-256 or SHA-512)
        shared: ECDH shared secret
        s1: Optional shared info mixed into the derivation

    Returns:
        digest_size bytes of key material
    """
    return digest(algorithm, shared, s1)


def derive_keys(algorithm: hashes.HashAlgorithm,
                shared: bytes,
                key_size: int,
                s1: Optional[bytes] = None) -> Tuple[bytes, MacKey]:
    """
    Derive the encryption key Ke and the MAC key Km.

    Returns:
        Tuple of (Ke, Km) where Ke is key_size bytes and Km is 32 bytes
    """
    k = kdf(algorithm, shared, s1)
    ke = k[:key_size]
    km = k[key_size:]
    if len(km) < MAC_KEY_SIZE:
        km = digest(algorithm, km)
    return ke, MacKey(km)
