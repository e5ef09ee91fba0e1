"""
Hash Algorithm Registry

Maps hash names to cryptography hash factories so callers and the CLI can
select the PRF's underlying hash by name.
"""

from typing import Dict, List, Optional, Union

from cryptography.hazmat.primitives import hashes

from .exceptions import PrimitiveError, UnsupportedHashError
from .prf import HashFactory

HASH_ALGORITHMS: Dict[str, HashFactory] = {
    "sha1": hashes.SHA1,
    "sha224": hashes.SHA224,
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
    "sha512_224": hashes.SHA512_224,
    "sha512_256": hashes.SHA512_256,
    "sha3_224": hashes.SHA3_224,
    "sha3_256": hashes.SHA3_256,
    "sha3_384": hashes.SHA3_384,
    "sha3_512": hashes.SHA3_512,
}

# "SHA-256", "sha_256" and "sha256" all collapse to "sha256"
_LOOKUP = {name.replace("_", ""): name for name in HASH_ALGORITHMS}


def _compact(name: str) -> str:
    return name.strip().lower().replace("-", "").replace("_", "")


def canonical_hash_name(name: str) -> str:
    """
    Return the registry name for a hash, e.g. "SHA-256" -> "sha256".
    
    Raises:
        UnsupportedHashError: If the name is not registered
    """
    canonical = _LOOKUP.get(_compact(name))
    if canonical is None:
        raise UnsupportedHashError(
            f"Unsupported hash: {name!r}. Available: {', '.join(available_hashes())}"
        )
    return canonical


def get_hash_factory(name: str) -> HashFactory:
    return HASH_ALGORITHMS[canonical_hash_name(name)]


def available_hashes() -> List[str]:
    return sorted(HASH_ALGORITHMS)


def resolve_hash(hash_or_name: Optional[Union[str, HashFactory]] = None) -> HashFactory:
    """
    Turn a hash name or factory into a factory.
    
    Args:
        hash_or_name: Registry name, hash factory, or None for the
            configured default hash
    
    Returns:
        Zero-argument callable producing a hash algorithm
    """
    if hash_or_name is None:
        from .config import get_settings
        hash_or_name = get_settings().default_hash
    
    if isinstance(hash_or_name, str):
        return get_hash_factory(hash_or_name)
    
    if callable(hash_or_name):
        return hash_or_name
    
    raise PrimitiveError(
        f"Expected hash name or factory, got {type(hash_or_name).__name__}"
    )
