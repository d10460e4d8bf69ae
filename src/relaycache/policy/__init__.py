"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache policy variants and the decision primitive.
"""

from .constant import ALWAYS_CACHE, NEVER_CACHE, AlwaysCachePolicy, NeverCachePolicy
from .handle import CachePolicyHandle
from .pattern_based import PatternBasedCachePolicy
from .patterns import GlobPattern, compile_patterns
from .types import BroadcastPath, CacheDecision, CachePolicy

__all__ = [
    "BroadcastPath",
    "CacheDecision",
    "CachePolicy",
    "AlwaysCachePolicy",
    "NeverCachePolicy",
    "ALWAYS_CACHE",
    "NEVER_CACHE",
    "PatternBasedCachePolicy",
    "GlobPattern",
    "compile_patterns",
    "CachePolicyHandle",
]
