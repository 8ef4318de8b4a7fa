"""
ECIES Encrypt / Decrypt

Hybrid public-key encryption:
- Ephemeral ECDH against the recipient's static key
- Single-round hash KDF (SHA-256, or SHA-512 on P-521)
- AES-CTR for confidentiality (AES-128 / AES-256)
- Poly1305 one-time tag over nonce || ciphertext || s2

Parameters:
    s1: optional shared info, mixed into the KDF
    s2: optional associated data, authenticated by the tag

Envelope format:
    [ephemeral public key | nonce (16) | ciphertext | tag (16)]

Security features:
- Fresh ephemeral key and nonce per message
- Tag verified BEFORE decryption
- Every decrypt failure raises a DecryptionError subclass, no plaintext
"""

from typing import Optional

from cryptography.hazmat.primitives.asymmetric import ec

from ..core_crypto.curves import get_profile
from ..core_crypto.entropy import DEFAULT_ENTROPY, EntropySource
from ..core_crypto.kdf import derive_keys
from ..core_crypto.keys import PrivateKey, PublicKey, derive_shared, generate_key
from ..core_crypto.symmetric import (
    decrypt_symmetric,
    encrypt_symmetric,
    sum_tag,
    verify_tag,
)
from ..errors import TagMismatchError
from .envelope import Envelope


def encrypt(public_key: PublicKey,
            plaintext: bytes,
            s1: Optional[bytes] = None,
            s2: Optional[bytes] = None,
            rand: EntropySource = DEFAULT_ENTROPY) -> bytes:
    """
    Encrypt plaintext to the holder of public_key's private key.

    Args:
        public_key: Recipient's public key
        plaintext: Data to encrypt (may be empty)
        s1: Optional KDF shared info
        s2: Optional associated data bound into the tag
        rand: Entropy source for the ephemeral key and nonce

    Returns:
        Serialized envelope

    Raises:
        UnsupportedCurveError: If public_key's curve has no profile
        InvalidCurveError: If public_key was built from raw coordinates that
            are not on its curve. This is a DecryptionError subclass.
        EntropyError: If the entropy source fails
    """
    curve = public_key.curve
    profile = get_profile(curve)
    ephemeral = generate_key(curve, rand)

    algorithm = profile.hash_algorithm()
    key_size = profile.key_size

    shared = derive_shared(ephemeral, public_key, key_size)
    ke, km = derive_keys(algorithm, shared, key_size, s1)

    body = encrypt_symmetric(plaintext, ke, rand)
    tag = sum_tag(body, s2, km)

    envelope = Envelope(ephemeral.public_bytes(), body, tag)
    return envelope.to_bytes()


def decrypt(private_key: PrivateKey,
            data: bytes,
            s1: Optional[bytes] = None,
            s2: Optional[bytes] = None) -> bytes:
    """
    Verify and decrypt an envelope produced by encrypt().

    Args:
        private_key: Recipient's private key
        data: Serialized envelope
        s1: KDF shared info used at encryption
        s2: Associated data used at encryption

    Returns:
        Decrypted plaintext

    Raises:
        DecryptionError: Malformed envelope, bad ephemeral key, or tag mismatch
    """
    curve = private_key.curve
    profile = get_profile(curve)
    envelope = Envelope.from_bytes(data, curve)
    ephemeral = envelope.ephemeral_public_key(curve)

    algorithm = profile.hash_algorithm()
    key_size = profile.key_size

    shared = derive_shared(private_key, ephemeral, key_size)
    ke, km = derive_keys(algorithm, shared, key_size, s1)

    if not verify_tag(envelope.tag, envelope.body, s2, km):
        raise TagMismatchError("Message tags don't match")

    return decrypt_symmetric(envelope.body, ke)


class ECIESCipher:
    """
    ECIES bound to one recipient key pair.

    Example:
        >>> bob = ECIESCipher.generate()
        >>> envelope = ECIESCipher.encrypt_to(bob.public_key, b"Hello Bob!")
        >>> bob.decrypt(envelope)
        b'Hello Bob!'
    """

    def __init__(self, private_key: PrivateKey):
        self._private_key = private_key

    @classmethod
    def generate(cls, curve: Optional[ec.EllipticCurve] = None,
                 rand: EntropySource = DEFAULT_ENTROPY) -> 'ECIESCipher':
        """Create a cipher around a fresh key pair (P-256 by default)."""
        return cls(generate_key(curve or ec.SECP256R1(), rand))

    @property
    def private_key(self) -> PrivateKey:
        return self._private_key

    @property
    def public_key(self) -> PublicKey:
        return self._private_key.public_key

    @property
    def public_bytes(self) -> bytes:
        return self._private_key.public_bytes()

    @staticmethod
    def encrypt_to(public_key: PublicKey, plaintext: bytes,
                   s1: Optional[bytes] = None, s2: Optional[bytes] = None,
                   rand: EntropySource = DEFAULT_ENTROPY) -> bytes:
        return encrypt(public_key, plaintext, s1, s2, rand)

    def encrypt(self, plaintext: bytes,
                s1: Optional[bytes] = None, s2: Optional[bytes] = None) -> bytes:
        """Encrypt to this cipher's own public key."""
        return encrypt(self.public_key, plaintext, s1, s2)

    def decrypt(self, data: bytes,
                s1: Optional[bytes] = None, s2: Optional[bytes] = None) -> bytes:
        return decrypt(self._private_key, data, s1, s2)


# Self-test when run directly
if __name__ == "__main__":
    print("ECIES Module Test")
    print("=" * 70)

    for curve in (ec.SECP256R1(), ec.SECP521R1()):
        name = get_profile(curve).name
        print(f"\n[{name}] Round trip")
        bob = ECIESCipher.generate(curve)
        message = b"abc123"
        envelope = ECIESCipher.encrypt_to(bob.public_key, message)
        decrypted = bob.decrypt(envelope)
        passed = decrypted == message
        print(f"  Envelope size: {len(envelope)} bytes")
        print(f"  Decrypted:     {decrypted}")
        print(f"  Status: {'✓ PASS' if passed else '✗ FAIL'}")
