"""
pbkdf2key Command Line

Derives a key from a password read on stdin and prints it hex or base64
encoded. The password is read from the first line of stdin, or prompted for
when stdin is a terminal.
"""

import argparse
import base64
import getpass
import logging
import sys
from typing import List, Optional

from .algorithms import available_hashes
from .config import get_settings
from .derivation import derive_key_from_passphrase
from .exceptions import KeyDerivationError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pbkdf2key",
        description="Derive a key from a password with PBKDF2-HMAC.",
    )
    parser.add_argument(
        "--hash",
        dest="algorithm",
        default=None,
        help="underlying hash (default: configured default hash)",
    )
    parser.add_argument("-i", "--iterations", type=int, help="PRF iterations per block")
    parser.add_argument("-l", "--length", type=int, help="derived key length in bytes")
    
    salt = parser.add_mutually_exclusive_group()
    salt.add_argument("--salt", help="salt as text")
    salt.add_argument("--salt-hex", help="salt as hex")
    
    parser.add_argument(
        "--format",
        choices=("hex", "base64"),
        default="hex",
        help="output encoding (default: hex)",
    )
    parser.add_argument(
        "--list-hashes",
        action="store_true",
        help="print the supported hash names and exit",
    )
    return parser


def _read_password() -> str:
    if sys.stdin.isatty():
        return getpass.getpass("Password: ")
    return sys.stdin.readline().rstrip("\r\n")


def _encode(key: bytes, fmt: str) -> str:
    if fmt == "base64":
        return base64.b64encode(key).decode("ascii")
    return key.hex()


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    
    parser = build_parser()
    args = parser.parse_args(argv)
    
    if args.list_hashes:
        for name in available_hashes():
            print(name)
        return 0
    
    if args.iterations is None or args.length is None:
        parser.error("--iterations and --length are required")
    
    if args.salt_hex is not None:
        try:
            salt = bytes.fromhex(args.salt_hex)
        except ValueError:
            parser.error(f"invalid hex salt: {args.salt_hex!r}")
    elif args.salt is not None:
        try:
            salt = args.salt.encode(settings.passphrase_encoding)
        except UnicodeEncodeError:
            parser.error(f"salt cannot be encoded as {settings.passphrase_encoding}")
    else:
        parser.error("one of --salt or --salt-hex is required")
    
    password = _read_password()
    
    try:
        key = derive_key_from_passphrase(
            password,
            salt,
            args.iterations,
            args.length,
            args.algorithm,
        )
    except KeyDerivationError as e:
        logger.error("Key derivation failed: %s", e)
        return 2
    
    print(_encode(key, args.format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
