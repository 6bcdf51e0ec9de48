"""
Configuration module for the memory server.

This module handles loading configuration from environment variables and default settings.
It covers the backing document store connection, identity resolution and deployment settings.
"""

import os
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

ENV_PREFIX = "MEMORY_SERVER_"

class Environment(str, Enum):
    """Supported deployment environments."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

class BackendType(str, Enum):
    """Supported document store backends."""
    REDIS = "redis"
    MEMORY = "memory"  # Process-local, for development and tests

class Config(BaseModel):
    """
    Configuration settings for the memory server.
    """
    model_config = ConfigDict(use_enum_values=True, validate_assignment=True, validate_default=True)

    # Application settings
    app_name: str = Field(default="Memory Server")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug_mode: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Server settings
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Document store settings
    backend_type: BackendType = Field(default=BackendType.REDIS)
    redis_url: str = Field(default="redis://localhost:6379/0")
    redis_timeout: float = Field(default=5.0)  # Seconds, per store call

    # Memory settings
    key_namespace: str = Field(default="memory")
    identity_header: str = Field(default="x-user-email")
    atomic_append: bool = Field(default=True)

    # Security settings
    cors_origins: List[str] = Field(default=["*"])

    @field_validator("environment", "backend_type", mode="before")
    @classmethod
    def lowercase_enum_values(cls, v):
        """Environment variables are often upper-cased."""
        return v.lower() if isinstance(v, str) else v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case."""
        return str(v).upper() if v else "INFO"

    @field_validator("identity_header", mode="before")
    @classmethod
    def validate_identity_header(cls, v):
        """Header names are matched case-insensitively, store them lowercased."""
        if not v or not str(v).strip():
            raise ValueError("identity_header must not be empty")
        return str(v).strip().lower()

    @field_validator("key_namespace")
    @classmethod
    def validate_key_namespace(cls, v):
        """The namespace is joined to the identity with ':' and must not contain it."""
        if not v or ":" in v:
            raise ValueError("key_namespace must be non-empty and must not contain ':'")
        return v


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _read_env_overrides() -> dict:
    """Collect MEMORY_SERVER_* environment variables that map onto Config fields."""
    overrides = {}
    for field_name, field_info in Config.model_fields.items():
        raw = os.getenv(f"{ENV_PREFIX}{field_name.upper()}")
        if raw is None:
            continue
        if field_info.annotation is bool:
            overrides[field_name] = _env_bool(raw)
        elif field_name == "cors_origins":
            overrides[field_name] = [origin.strip() for origin in raw.split(",") if origin.strip()]
        else:
            overrides[field_name] = raw
    return overrides


def load_config() -> Config:
    """
    Load configuration from environment variables and default settings.

    Returns:
        Config: Configuration object
    """
    # Load environment-specific settings
    env = os.getenv(f"{ENV_PREFIX}ENVIRONMENT", "development").lower()

    overrides = _read_env_overrides()

    # Environment defaults apply unless explicitly overridden
    if env == "production":
        defaults = {"debug_mode": False, "log_level": "WARNING"}
    elif env == "staging":
        defaults = {"debug_mode": True, "log_level": "INFO"}
    else:  # development
        defaults = {"debug_mode": True, "log_level": "DEBUG"}

    defaults.update(overrides)
    return Config(**defaults)
