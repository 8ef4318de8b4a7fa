# File Helpers Module
"""
File and hex I/O used by the command line tool:
- Raw file read/write
- Hex encoding of keys and envelopes
"""

# Lazy imports to avoid RuntimeWarning when running module directly
def __getattr__(name):
    """Lazy import to avoid circular import issues when running module directly."""
    from . import file_io
    return getattr(file_io, name)

__all__ = [
    'read_file',
    'write_file',
    'encode_hex',
    'decode_hex',
    'read_hex_file',
    'write_hex_file',
]
