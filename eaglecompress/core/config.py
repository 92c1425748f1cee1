# core/config.py
"""
Configuration settings for Eagle Compress.
"""
from functools import lru_cache
from typing import List, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """
    Centralized settings for the compression layer and the demo server.
    All settings can be overridden by environment variables or a .env file.
    """
    # --- Application ---
    APP_NAME: str = "Eagle Compress"
    DEBUG: bool = False

    # --- Server ---
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    RELOAD: bool = False
    WORKERS: int = 1

    # --- Compression ---
    COMPRESSION_ENABLED: bool = True
    COMPRESSION_ALGORITHMS: List[str] = ["gzip", "deflate"]
    COMPRESSION_LEVEL: int = 6  # 0 = store only, 9 = best
    COMPRESSIBLE_TYPES: Optional[List[str]] = None  # None keeps the built-in list
    DEFER_ENCODING_HEADER: bool = True
    COMPRESSION_CHUNK_SIZE: int = 64 * 1024

    # --- Timing ---
    TIMING_ENABLED: bool = True

    @field_validator("COMPRESSION_ALGORITHMS", "COMPRESSIBLE_TYPES", mode="before")
    def parse_comma_separated(cls, v):
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("COMPRESSION_ALGORITHMS")
    def normalize_algorithms(cls, v):
        return [token.lower() for token in v]

    @field_validator("COMPRESSION_LEVEL")
    def validate_level(cls, v):
        if not 0 <= v <= 9:
            raise ValueError("COMPRESSION_LEVEL must be between 0 and 9")
        return v

    @field_validator("COMPRESSION_CHUNK_SIZE")
    def validate_chunk_size(cls, v):
        if v <= 0:
            raise ValueError("COMPRESSION_CHUNK_SIZE must be positive")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get application settings with caching."""
    return Settings()


# Global settings instance
settings = get_settings()

__all__ = ["Settings", "settings", "get_settings"]
