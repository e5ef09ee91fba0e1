"""
PBKDF2 Key Derivation

Derives fixed-length key material from a password, a salt and an iteration
count using PBKDF2 with an HMAC pseudorandom function (RFC 8018, section 5.2).

For each block i = 1..num_blocks:
    U_1 = PRF(password, salt || BE32(i))
    U_n = PRF(password, U_(n-1))
    T_i = U_1 ^ U_2 ^ ... ^ U_iterations

The derived key is T_1 || T_2 || ... truncated to the requested length.
"""

import logging
import secrets
import struct
from typing import Optional, Union

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives import hashes

from .algorithms import resolve_hash
from .exceptions import InvalidParameterError
from .prf import BytesLike, HashFactory, HmacPrf

logger = logging.getLogger(__name__)

MAX_BLOCKS = 2**32 - 1

_BLOCK_INDEX = struct.Struct(">I")


def _check_bytes(name: str, value: object) -> None:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes-like, got {type(value).__name__}")


def _check_positive(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 1:
        raise InvalidParameterError(f"{name} must be at least 1, got {value}")


def _derive_block(prf: HmacPrf, salt: bytes, index: int, iterations: int) -> bytes:
    prf.reset()
    prf.update(salt)
    prf.update(_BLOCK_INDEX.pack(index))
    u = prf.finalize()
    t = int.from_bytes(u, "big")
    
    for _ in range(2, iterations + 1):
        prf.reset()
        prf.update(u)
        u = prf.finalize()
        t ^= int.from_bytes(u, "big")
    
    return t.to_bytes(len(u), "big")


def derive_key(
    password: BytesLike,
    salt: BytesLike,
    iterations: int,
    length: int,
    hash_factory: HashFactory = hashes.SHA1,
) -> bytes:
    """
    Derive a key using PBKDF2-HMAC.
    
    Args:
        password: Secret used as the HMAC key
        salt: Public salt mixed into the first PRF call of every block
        iterations: Number of chained PRF applications per block (>= 1)
        length: Number of bytes to derive (>= 1)
        hash_factory: Zero-argument callable returning the underlying hash,
            e.g. hashes.SHA256 or hashlib.sha256
    
    Returns:
        Exactly `length` bytes of derived key material
    
    Raises:
        InvalidParameterError: If iterations or length is out of range
        PrimitiveError: If hash_factory does not yield a usable hash
    """
    _check_bytes("password", password)
    _check_bytes("salt", salt)
    _check_positive("iterations", iterations)
    _check_positive("length", length)
    
    prf = HmacPrf(hash_factory, password)
    digest_size = prf.digest_size
    
    num_blocks = (length + digest_size - 1) // digest_size
    if num_blocks > MAX_BLOCKS:
        raise InvalidParameterError(
            f"Derived key too long: {length} bytes needs {num_blocks} blocks "
            f"of {digest_size} bytes, limit is {MAX_BLOCKS}"
        )
    tail_length = length - (num_blocks - 1) * digest_size
    
    logger.debug(
        "Deriving %d bytes with PBKDF2-HMAC-%s: %d blocks, %d iterations",
        length, prf.name, num_blocks, iterations,
    )
    
    salt = bytes(salt)
    derived = bytearray()
    for index in range(1, num_blocks + 1):
        block = _derive_block(prf, salt, index, iterations)
        if index == num_blocks:
            derived += block[:tail_length]
        else:
            derived += block
    
    return bytes(derived)


def derive_key_hex(
    password: BytesLike,
    salt: BytesLike,
    iterations: int,
    length: int,
    hash_factory: HashFactory = hashes.SHA1,
) -> str:
    """Derive a key and return it as a lowercase hex string."""
    return derive_key(password, salt, iterations, length, hash_factory).hex()


def derive_key_from_passphrase(
    passphrase: str,
    salt: BytesLike,
    iterations: int,
    length: int,
    algorithm: Optional[Union[str, HashFactory]] = None,
) -> bytes:
    """
    Derive a key from a text passphrase.
    
    The passphrase is encoded with the configured passphrase encoding. The
    algorithm may be a hash factory or a registry name ("sha256",
    "SHA-512", ...); when omitted the configured default hash is used.
    """
    from .config import get_settings
    
    if not isinstance(passphrase, str):
        raise TypeError(f"passphrase must be str, got {type(passphrase).__name__}")
    
    encoding = get_settings().passphrase_encoding
    try:
        password = passphrase.encode(encoding)
    except UnicodeEncodeError as e:
        raise InvalidParameterError(
            f"Passphrase cannot be encoded as {encoding}: {e.reason}"
        ) from e
    return derive_key(password, salt, iterations, length, resolve_hash(algorithm))


def verify_key(
    password: BytesLike,
    salt: BytesLike,
    iterations: int,
    expected_key: BytesLike,
    hash_factory: HashFactory = hashes.SHA1,
) -> None:
    """
    Check that a password derives to an expected key.
    
    The comparison is constant-time over the derived bytes.
    
    Raises:
        cryptography.exceptions.InvalidKey: If the keys do not match
        InvalidParameterError: If expected_key is empty
    """
    _check_bytes("expected_key", expected_key)
    derived = derive_key(password, salt, iterations, len(expected_key), hash_factory)
    if not secrets.compare_digest(derived, bytes(expected_key)):
        raise InvalidKey("Derived key does not match expected key")
