"""
HMAC Pseudorandom Function

Keyed PRF handle used by the derivation loop. One handle is created per
derivation call and keyed once with the password; it is reset, never
re-keyed, between PRF computations.

Two kinds of hash factories are accepted:
- cryptography hash algorithms (e.g. hashes.SHA256), driven through
  cryptography.hazmat.primitives.hmac
- hashlib-style constructors (e.g. hashlib.sha256), driven through
  the stdlib hmac module
"""

import hmac
from typing import Any, Callable, Union

from cryptography.exceptions import AlreadyFinalized, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac

from .exceptions import PrimitiveError

HashFactory = Callable[[], Any]
BytesLike = Union[bytes, bytearray, memoryview]


def _hash_name(algorithm: Any) -> str:
    return getattr(algorithm, "name", type(algorithm).__name__)


class HmacPrf:
    """
    HMAC state keyed with a single secret.
    
    The keyed template is never fed any data; every computation works on a
    copy of it, so reset() costs one copy and keeps the key schedule.
    """
    
    def __init__(self, hash_factory: HashFactory, key: BytesLike):
        if not callable(hash_factory):
            raise PrimitiveError(
                f"Hash factory must be callable, got {type(hash_factory).__name__}"
            )
        
        try:
            algorithm = hash_factory()
        except TypeError as e:
            raise PrimitiveError(
                f"Hash factory could not be called without arguments: {e}"
            ) from e
        is_cryptography = isinstance(algorithm, hashes.HashAlgorithm)
        
        if not is_cryptography and not callable(getattr(algorithm, "update", None)):
            raise PrimitiveError(
                f"Hash factory returned unsupported object {type(algorithm).__name__}"
            )
        
        digest_size = getattr(algorithm, "digest_size", None)
        if not isinstance(digest_size, int) or digest_size < 1:
            raise PrimitiveError(
                f"Hash {_hash_name(algorithm)} has no usable digest size: {digest_size!r}"
            )
        
        key = bytes(key)
        if is_cryptography:
            try:
                self._template = crypto_hmac.HMAC(key, algorithm)
            except UnsupportedAlgorithm as e:
                raise PrimitiveError(
                    f"Hash {_hash_name(algorithm)} cannot be used with HMAC: {e}"
                ) from e
        else:
            self._template = hmac.new(key, digestmod=hash_factory)
        
        self._cryptography = is_cryptography
        self.name = _hash_name(algorithm)
        self.digest_size = digest_size
        self._state = self._template.copy()
        self._finalized = False
    
    def update(self, data: BytesLike) -> None:
        self._state.update(bytes(data))
    
    def finalize(self) -> bytes:
        """
        Return the MAC over everything fed since the last reset.
        
        The handle must be reset() before it is used again.
        """
        if self._finalized:
            raise AlreadyFinalized("Context was already finalized.")
        self._finalized = True
        if self._cryptography:
            return self._state.finalize()
        return self._state.digest()
    
    def reset(self) -> None:
        """Discard accumulated input, keeping the key."""
        self._state = self._template.copy()
        self._finalized = False
    
    def __repr__(self) -> str:
        return f"HmacPrf(name={self.name!r}, digest_size={self.digest_size})"
