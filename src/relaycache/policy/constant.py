"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Constant-decision cache policies.
"""

from __future__ import annotations

from dataclasses import dataclass

from .types import BroadcastPath, CacheDecision


@dataclass(frozen=True, slots=True)
class AlwaysCachePolicy:
    """Cache everything and keep every backup. Default relay behavior."""

    def should_cache_broadcast(self, path: BroadcastPath) -> CacheDecision:
        _ = path
        return CacheDecision.CACHE

    def should_cache_track(
        self, broadcast_path: BroadcastPath, track_name: str, priority: int
    ) -> CacheDecision:
        _ = broadcast_path
        _ = track_name
        _ = priority
        return CacheDecision.CACHE

    def should_cache_group(
        self, sequence: int, estimated_size: int | None = None
    ) -> CacheDecision:
        _ = sequence
        _ = estimated_size
        return CacheDecision.CACHE

    def should_cache_frame(self, frame_size: int) -> CacheDecision:
        _ = frame_size
        return CacheDecision.CACHE

    def should_keep_backup(self, age_seconds: int, backup_count: int) -> bool:
        _ = age_seconds
        _ = backup_count
        return True


@dataclass(frozen=True, slots=True)
class NeverCachePolicy:
    """Cache nothing and drop every backup (memory saving mode)."""

    def should_cache_broadcast(self, path: BroadcastPath) -> CacheDecision:
        _ = path
        return CacheDecision.NO_CACHE

    def should_cache_track(
        self, broadcast_path: BroadcastPath, track_name: str, priority: int
    ) -> CacheDecision:
        _ = broadcast_path
        _ = track_name
        _ = priority
        return CacheDecision.NO_CACHE

    def should_cache_group(
        self, sequence: int, estimated_size: int | None = None
    ) -> CacheDecision:
        _ = sequence
        _ = estimated_size
        return CacheDecision.NO_CACHE

    def should_cache_frame(self, frame_size: int) -> CacheDecision:
        _ = frame_size
        return CacheDecision.NO_CACHE

    def should_keep_backup(self, age_seconds: int, backup_count: int) -> bool:
        _ = age_seconds
        _ = backup_count
        return False


ALWAYS_CACHE = AlwaysCachePolicy()
NEVER_CACHE = NeverCachePolicy()
