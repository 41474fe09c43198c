"""TENANTCAT Shard Registry Interface Package"""

from .errors import (
    MappingConflict,
    MappingNotFound,
    ShardNotRegistered,
    ShardRegistryError,
)
from .shard_registry import ShardRegistry

__all__ = [
    "MappingConflict",
    "MappingNotFound",
    "ShardNotRegistered",
    "ShardRegistry",
    "ShardRegistryError",
]
