# Secure Messaging Module
"""
ECIES encryption to a recipient's public key:
- Ephemeral ECDH (P-256 or P-521)
- Hash KDF (SHA-256 / SHA-512)
- AES-CTR + Poly1305 tag

Message format: [ephemeral public key | nonce | ciphertext | tag]
"""

from .envelope import Envelope, POINT_PREFIXES
from .scheme import ECIESCipher, encrypt, decrypt

__all__ = [
    'Envelope',
    'POINT_PREFIXES',
    'ECIESCipher',
    'encrypt',
    'decrypt',
]
