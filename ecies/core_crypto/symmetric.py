"""
Symmetric Layer: AES-CTR + Poly1305

AES in counter mode provides confidentiality only. Integrity comes from a
one-time Poly1305 tag computed separately over (nonce || ciphertext || s2).

Output of encrypt_symmetric:
    [nonce (16 bytes) | ciphertext (len(plaintext) bytes)]

Key sizes:
- Ke: 16 bytes (AES-128) or 32 bytes (AES-256), depending on the curve
- Km: exactly 32 bytes (Poly1305 requirement)
"""

from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.poly1305 import Poly1305

from ..errors import CipherInitError
from .entropy import DEFAULT_ENTROPY, EntropySource, read_random


# Constants
NONCE_SIZE = 16         # AES block size
TAG_SIZE = 16           # Poly1305 tag
MAC_KEY_SIZE = 32       # Poly1305 key


class FixedBytes(bytes):
    """
    Byte string of one exact length.

    Constructing it is the only length check; code that takes a FixedBytes
    subclass can rely on the size.
    """
    SIZE = 0

    def __new__(cls, data: bytes):
        if len(data) != cls.SIZE:
            raise ValueError(
                f"{cls.__name__} must be {cls.SIZE} bytes, got {len(data)}"
            )
        return super().__new__(cls, data)


class MacKey(FixedBytes):
    """One-time Poly1305 key."""
    SIZE = MAC_KEY_SIZE

    def __repr__(self) -> str:
        return "MacKey(<redacted>)"


class Tag(FixedBytes):
    """Poly1305 authentication tag."""
    SIZE = TAG_SIZE


def _aes(key: bytes) -> algorithms.AES:
    try:
        return algorithms.AES(key)
    except ValueError as exc:
        raise CipherInitError(f"Invalid AES key: {exc}") from exc


def encrypt_symmetric(plaintext: bytes, key: bytes,
                      rand: EntropySource = DEFAULT_ENTROPY) -> bytes:
    """
    Encrypt with AES-CTR under a fresh random nonce.

    Args:
        plaintext: Data to encrypt (may be empty)
        key: AES key Ke
        rand: Entropy source for the nonce

    Returns:
        nonce || ciphertext

    Raises:
        CipherInitError: If the key length is invalid for AES
    """
    algorithm = _aes(key)
    nonce = read_random(rand, NONCE_SIZE)
    encryptor = Cipher(algorithm, modes.CTR(nonce), default_backend()).encryptor()
    return nonce + encryptor.update(plaintext) + encryptor.finalize()


def decrypt_symmetric(data: bytes, key: bytes) -> bytes:
    """
    Decrypt nonce || ciphertext with AES-CTR.

    No integrity check happens here; verify the tag first.
    """
    if len(data) < NONCE_SIZE:
        raise ValueError(f"Data must hold at least a {NONCE_SIZE}-byte nonce")
    nonce = data[:NONCE_SIZE]
    decryptor = Cipher(_aes(key), modes.CTR(nonce), default_backend()).decryptor()
    return decryptor.update(data[NONCE_SIZE:]) + decryptor.finalize()


def sum_tag(data: bytes, s2: Optional[bytes], km: MacKey) -> Tag:
    """Poly1305 tag over data || s2."""
    return Tag(Poly1305.generate_tag(km, data + (s2 or b"")))


def verify_tag(tag: Tag, data: bytes, s2: Optional[bytes], km: MacKey) -> bool:
    """
    Verify a Poly1305 tag over data || s2.

    The comparison is constant-time (done inside Poly1305.verify_tag).
    """
    try:
        Poly1305.verify_tag(km, data + (s2 or b""), tag)
        return True
    except InvalidSignature:
        return False
