"""
File and Hex Helpers

Reading and writing key files and message files for the command line tool.
Keys are stored hex-encoded; messages are stored raw or hex-encoded.
"""

import binascii
import logging
import os
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

FILE_MODE = 0o664


def read_file(path: PathLike) -> bytes:
    """Read a whole file as bytes."""
    data = Path(path).read_bytes()
    logger.debug("read %d bytes from %s", len(data), path)
    return data


def write_file(data: bytes, path: PathLike) -> None:
    """Write bytes to a file, creating it with mode 0664."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
    with open(fd, 'wb') as f:
        f.write(data)
    logger.debug("wrote %d bytes to %s", len(data), path)


def encode_hex(data: bytes) -> bytes:
    return binascii.hexlify(data)


def decode_hex(data: Union[str, bytes]) -> bytes:
    """
    Decode hex text, ignoring surrounding whitespace.

    Raises:
        ValueError: If the text is not valid hex
    """
    if isinstance(data, str):
        data = data.encode()
    try:
        return binascii.unhexlify(data.strip())
    except binascii.Error as exc:
        raise ValueError(f"Invalid hex data: {exc}") from exc


def read_hex_file(path: PathLike) -> bytes:
    return decode_hex(read_file(path))


def write_hex_file(data: bytes, path: PathLike) -> None:
    write_file(encode_hex(data), path)
