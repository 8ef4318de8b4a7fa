"""
Entropy Source

Randomness is injected as a callable taking a byte count and returning
that many bytes. os.urandom and secrets.token_bytes both qualify, as does
the read method of a file-like object (useful for deterministic tests).
"""

import os
from typing import Callable

from ..errors import EntropyError


EntropySource = Callable[[int], bytes]

DEFAULT_ENTROPY: EntropySource = os.urandom


def read_random(rand: EntropySource, size: int) -> bytes:
    """
    Read exactly `size` bytes from an entropy source.

    Raises:
        EntropyError: If the source errors or returns fewer bytes
    """
    try:
        data = rand(size)
    except OSError as exc:
        raise EntropyError(f"Entropy source failed: {exc}") from exc
    if data is None or len(data) < size:
        raise EntropyError(f"Entropy source exhausted: wanted {size} bytes")
    return bytes(data[:size])
