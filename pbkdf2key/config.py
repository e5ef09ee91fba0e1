"""
pbkdf2key Configuration

Environment-driven defaults for the convenience wrappers and the CLI.
Iteration counts, salts and key lengths are always supplied by the caller.
"""

import codecs
from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .algorithms import canonical_hash_name
from .exceptions import UnsupportedHashError


class Settings(BaseSettings):
    """Library settings with environment variable support."""
    
    model_config = SettingsConfigDict(
        env_prefix="PBKDF2KEY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # Derivation defaults
    default_hash: str = "sha256"
    passphrase_encoding: str = "utf-8"
    
    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    
    @field_validator("default_hash")
    @classmethod
    def validate_default_hash(cls, v: str) -> str:
        """Normalize to the registry name."""
        try:
            return canonical_hash_name(v)
        except UnsupportedHashError as e:
            raise ValueError(str(e)) from e
    
    @field_validator("passphrase_encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        try:
            return codecs.lookup(v).name
        except LookupError as e:
            raise ValueError(f"Unknown passphrase encoding: {v}") from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

