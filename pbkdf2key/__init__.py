"""
pbkdf2key Package

PBKDF2-HMAC key derivation over cryptography (or hashlib) hash primitives.
"""

from .algorithms import available_hashes, get_hash_factory, resolve_hash
from .derivation import (
    derive_key,
    derive_key_hex,
    derive_key_from_passphrase,
    verify_key,
)
from .exceptions import (
    KeyDerivationError,
    InvalidParameterError,
    PrimitiveError,
    UnsupportedHashError,
)
from .prf import HmacPrf

__version__ = "1.0.0"

__all__ = [
    "derive_key",
    "derive_key_hex",
    "derive_key_from_passphrase",
    "verify_key",
    "available_hashes",
    "get_hash_factory",
    "resolve_hash",
    "HmacPrf",
    "KeyDerivationError",
    "InvalidParameterError",
    "PrimitiveError",
    "UnsupportedHashError",
]
