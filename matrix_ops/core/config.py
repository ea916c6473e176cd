"""
Library configuration.

Centralized configuration management with environment variables
(prefixed ``MATRIX_OPS_``) and an optional ``.env`` file.
"""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_FORMATS = ("json", "text")
DETERMINANT_METHODS = ("cofactor", "numpy")


class Settings(BaseSettings):
    """Library settings"""

    model_config = SettingsConfigDict(
        env_prefix="MATRIX_OPS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "matrix-ops"

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = "text"  # json or text
    LOG_FILE: Optional[str] = None

    # Numerics
    COMPARE_TOLERANCE: float = 1e-9
    DETERMINANT_METHOD: str = "cofactor"  # cofactor or numpy
    COFACTOR_WARN_SIZE: int = 8  # cofactor expansion is O(n!)

    # Rendering
    FORMAT_SPEC: str = "g"

    @field_validator("LOG_FORMAT")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in LOG_FORMATS:
            raise ValueError(f"LOG_FORMAT must be one of {LOG_FORMATS}, got {value!r}")
        return value

    @field_validator("DETERMINANT_METHOD")
    @classmethod
    def _check_determinant_method(cls, value: str) -> str:
        value = value.lower()
        if value not in DETERMINANT_METHODS:
            raise ValueError(
                f"DETERMINANT_METHOD must be one of {DETERMINANT_METHODS}, got {value!r}"
            )
        return value

    @field_validator("COMPARE_TOLERANCE")
    @classmethod
    def _check_tolerance(cls, value: float) -> float:
        if value <= 0:
            raise ValueError(f"COMPARE_TOLERANCE must be positive, got {value}")
        return value

    @field_validator("COFACTOR_WARN_SIZE")
    @classmethod
    def _check_warn_size(cls, value: int) -> int:
        if value < 1:
            raise ValueError(f"COFACTOR_WARN_SIZE must be at least 1, got {value}")
        return value


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
