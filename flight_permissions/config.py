"""Configuration models and YAML loading."""

from __future__ import annotations

import os
from typing import Literal, Optional

import yaml
from pydantic import BaseModel


class RedisConfig(BaseModel):
    """Configuration for the Redis resolver cache."""

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: Optional[str] = None
    prefix: str = "flight_permissions:"


class CacheConfig(BaseModel):
    """Resolver cache settings."""

    backend: Literal["none", "memory", "sqlite", "redis"] = "none"
    path: str = "flight_permissions_cache.db"
    redis: RedisConfig = RedisConfig()
    ttl: int = 0


class PermissionsConfig(BaseModel):
    """Top-level configuration model."""

    cache: CacheConfig = CacheConfig()
    cache_hit: Literal["replace", "merge"] = "replace"
    default_role: str = ""


def load_config(path: Optional[str] = None) -> PermissionsConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to the
            FLIGHT_PERMISSIONS_CONFIG env variable or 'flight_permissions.yaml'
            in the current directory.
    """

    config_path = path or os.getenv("FLIGHT_PERMISSIONS_CONFIG", "flight_permissions.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        return PermissionsConfig(**data)
    return PermissionsConfig()
