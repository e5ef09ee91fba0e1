"""
Key Derivation Exceptions
"""


class KeyDerivationError(Exception):
    """Base exception for key derivation failures."""
    pass


class InvalidParameterError(KeyDerivationError, ValueError):
    """Iteration count, key length or derived key size out of range."""
    pass


class PrimitiveError(KeyDerivationError):
    """Hash factory does not yield a usable hash primitive."""
    pass


class UnsupportedHashError(PrimitiveError):
    """Hash name not present in the algorithm registry."""
    pass
