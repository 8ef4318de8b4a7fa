# Integration Module
"""
Adapters between ECIES key types and the generic EC keys of the
cryptography library (PEM loading, ECDSA key import).
"""

from .ecdsa_import import (
    import_ecdsa,
    import_ecdsa_public,
    private_key_from_pem,
    public_key_from_pem,
)

__all__ = [
    'import_ecdsa',
    'import_ecdsa_public',
    'private_key_from_pem',
    'public_key_from_pem',
]
