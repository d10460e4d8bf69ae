"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache admission and retention policy engine for live-media relays.

The relay cache manager holds one policy and consults it before admitting a
broadcast, track, group or frame, and before evicting a backup broadcast.

Quick start::

    from relaycache import CachePolicyConfig

    policy = CachePolicyConfig.from_flat(
        {"cache_patterns": ["live/**"], "min_priority": 64}
    ).build()

    if policy.should_cache_track("live/cam1", "video", 128).should_cache():
        ...
"""

from .config import (
    BroadcastCacheConfig,
    CacheLimitsConfig,
    CachePolicyConfig,
    GroupCacheConfig,
    TrackCacheConfig,
    build_policy_from_env,
    load_config_from_env,
    load_config_from_file,
    load_config_from_mapping,
)
from .errors import CachePolicyConfigError, CachePolicyError, PatternCompileError
from .policy import (
    ALWAYS_CACHE,
    NEVER_CACHE,
    AlwaysCachePolicy,
    BroadcastPath,
    CacheDecision,
    CachePolicy,
    CachePolicyHandle,
    GlobPattern,
    NeverCachePolicy,
    PatternBasedCachePolicy,
)

__all__ = [
    "CacheDecision",
    "CachePolicy",
    "BroadcastPath",
    "AlwaysCachePolicy",
    "NeverCachePolicy",
    "ALWAYS_CACHE",
    "NEVER_CACHE",
    "PatternBasedCachePolicy",
    "GlobPattern",
    "CachePolicyHandle",
    "CachePolicyConfig",
    "BroadcastCacheConfig",
    "TrackCacheConfig",
    "GroupCacheConfig",
    "CacheLimitsConfig",
    "load_config_from_env",
    "load_config_from_mapping",
    "load_config_from_file",
    "build_policy_from_env",
    "CachePolicyError",
    "CachePolicyConfigError",
    "PatternCompileError",
]
