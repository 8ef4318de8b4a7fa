# Core Cryptography Module
"""
Building blocks of the scheme, all on top of the cryptography library:
- Curve profiles (curve -> hash, field size, point length)
- Key types, key generation and ECDH agreement
- Hash KDF with Km stretching
- AES-CTR encryption and Poly1305 tags
"""
