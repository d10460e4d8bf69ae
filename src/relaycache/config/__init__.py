"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache policy configuration models and loaders.
"""

from .loader import (
    ENV_PREFIX,
    build_policy_from_env,
    load_config_from_env,
    load_config_from_file,
    load_config_from_mapping,
)
from .models import (
    FLAT_FIELDS,
    BroadcastCacheConfig,
    CacheLimitsConfig,
    CachePolicyConfig,
    GroupCacheConfig,
    TrackCacheConfig,
)

__all__ = [
    "CachePolicyConfig",
    "BroadcastCacheConfig",
    "TrackCacheConfig",
    "GroupCacheConfig",
    "CacheLimitsConfig",
    "FLAT_FIELDS",
    "ENV_PREFIX",
    "load_config_from_env",
    "load_config_from_mapping",
    "load_config_from_file",
    "build_policy_from_env",
]
