"""
ECIES Error Types

Every failure of the scheme is raised as a subclass of ECIESError.
Envelope parsing and authentication failures additionally share
DecryptionError so callers can treat them identically.
"""


class ECIESError(Exception):
    """Base class for all ECIES failures."""
    pass


class EntropyError(ECIESError):
    """Raised when the entropy source fails or runs dry."""
    pass


class UnsupportedCurveError(ECIESError):
    """Raised when a curve has no profile, or import is asked for a non P-256 key."""
    pass


class CipherInitError(ECIESError):
    """Raised when the block cipher rejects its key."""
    pass


# ============================================================================
# Key agreement
# ============================================================================

class CurveMismatchError(ECIESError):
    """Raised when the two agreement operands live on different curves."""
    pass


class KeyTooLongError(ECIESError):
    """Raised when more key material is requested than the curve can provide."""
    pass


class InfinityResultError(ECIESError):
    """Raised when scalar multiplication lands on the point at infinity."""
    pass


# ============================================================================
# Decryption
# ============================================================================

class DecryptionError(ECIESError):
    """Base class for malformed or unauthenticated envelopes."""
    pass


class EmptyMessageError(DecryptionError):
    pass


class MessageTooShortError(DecryptionError):
    pass


class InvalidPublicKeyPrefixError(DecryptionError):
    pass


class InvalidPublicKeyError(DecryptionError):
    pass


class InvalidCurveError(DecryptionError):
    """Raised when a decoded point does not lie on the expected curve."""
    pass


class TagMismatchError(DecryptionError):
    """Raised when the Poly1305 tag does not authenticate the envelope."""
    pass
