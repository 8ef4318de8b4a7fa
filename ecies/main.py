"""
ECIES - Command Line Entry Point

Usage:
    ecies --generate-key-pair [--mode P256|P521] [--prv key.pem] [--pub key.pub]
    ecies -e --in file.txt --out out.out [--pub key.pub] [--hex]
    ecies -d --in out.out --out file.txt [--prv key.pem] [--hex]

Modes:
    P256  P-256 / AES-128 / SHA-256
    P521  P-521 / AES-256 / SHA-512

Key files are hex: the private scalar, and the uncompressed public point.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .core_crypto.curves import curve_by_name
from .core_crypto.keys import PrivateKey, PublicKey, generate_key
from .errors import ECIESError
from .files.file_io import read_file, read_hex_file, write_file, write_hex_file
from .messaging.scheme import decrypt, encrypt

logger = logging.getLogger(__name__)

# Defaults
DEFAULT_INPUT = "file.txt"
DEFAULT_OUTPUT = "out.out"
DEFAULT_PRIVATE_KEY = "key.pem"
DEFAULT_PUBLIC_KEY = "key.pub"
DEFAULT_MODE = "P256"
MODES = ("P256", "P521")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecies",
        description="Elliptic Curve Integrated Encryption Scheme",
    )
    action = parser.add_mutually_exclusive_group()
    action.add_argument("-e", "--encrypt", action="store_true", help="Encrypt")
    action.add_argument("-d", "--decrypt", action="store_true", help="Decrypt")
    parser.add_argument("--generate-key-pair", action="store_true",
                        help="Generate private-public key pair")
    parser.add_argument("--in", dest="input", default=DEFAULT_INPUT,
                        help="Path to input file.")
    parser.add_argument("--out", dest="output", default=DEFAULT_OUTPUT,
                        help="Path to output file.")
    parser.add_argument("--prv", default=DEFAULT_PRIVATE_KEY, help="Path to private key.")
    parser.add_argument("--pub", default=DEFAULT_PUBLIC_KEY, help="Path to public key.")
    parser.add_argument("--mode", choices=MODES, default=DEFAULT_MODE,
                        help="P256 (P-256, AES-128, SHA-256) or P521 (P-521, AES-256, SHA-512).")
    parser.add_argument("--hex", action="store_true", help="Encode to/from hex.")
    parser.add_argument("--s1", help="Shared info mixed into key derivation.")
    parser.add_argument("--s2", help="Associated data bound into the tag.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def _optional_bytes(value: Optional[str]) -> Optional[bytes]:
    return value.encode("utf-8") if value is not None else None


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate a key pair into --prv and --pub."""
    curve = curve_by_name(args.mode)
    private = generate_key(curve)
    write_hex_file(private.to_bytes(), args.prv)
    write_hex_file(private.public_bytes(), args.pub)
    print(f"Key successfully generated into {args.prv} and {args.pub}")
    return 0


def cmd_encrypt(args: argparse.Namespace) -> int:
    """Encrypt --in to the public key in --pub."""
    curve = curve_by_name(args.mode)
    public = PublicKey.from_bytes(curve, read_hex_file(args.pub))
    plaintext = read_file(args.input)

    envelope = encrypt(public, plaintext, _optional_bytes(args.s1), _optional_bytes(args.s2))
    logger.info("encrypted %d bytes into a %d-byte envelope", len(plaintext), len(envelope))

    if args.hex:
        write_hex_file(envelope, args.output)
    else:
        write_file(envelope, args.output)
    print(f"Encrypted {args.input} into {args.output}")
    return 0


def cmd_decrypt(args: argparse.Namespace) -> int:
    """Decrypt --in with the private key in --prv."""
    curve = curve_by_name(args.mode)
    private = PrivateKey.from_bytes(curve, read_hex_file(args.prv))
    data = read_hex_file(args.input) if args.hex else read_file(args.input)

    plaintext = decrypt(private, data, _optional_bytes(args.s1), _optional_bytes(args.s2))
    logger.info("decrypted %d-byte envelope", len(data))

    write_file(plaintext, args.output)
    print(f"Decrypted {args.input} into {args.output}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the ECIES command line tool."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not (args.generate_key_pair or args.encrypt or args.decrypt):
        print('Did you forget to specify encrypt "-e" or decrypt "-d"?')
        return 2

    try:
        if args.generate_key_pair:
            cmd_generate(args)
        if args.encrypt:
            return cmd_encrypt(args)
        if args.decrypt:
            return cmd_decrypt(args)
        return 0
    except (ECIESError, OSError, ValueError) as exc:
        logger.debug("operation failed", exc_info=True)
        print(f"Error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
