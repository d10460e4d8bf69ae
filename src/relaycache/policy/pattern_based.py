"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Pattern-based cache policy with configurable thresholds.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from .patterns import MATCH_EVERYTHING, GlobPattern, compile_patterns, matches_any
from .types import BroadcastPath, CacheDecision


def _match_everything() -> tuple[GlobPattern, ...]:
    return (GlobPattern.compile(MATCH_EVERYTHING),)


@dataclass(frozen=True, slots=True)
class PatternBasedCachePolicy:
    """
    Cache policy driven by broadcast glob patterns and size/priority limits.

    Attributes:
        cache_patterns: Broadcasts matching any of these are cached.
        exclude_patterns: Broadcasts matching any of these are never cached.
            Exclusion wins over inclusion.
        min_track_priority: Lowest track priority still cached (0-255).
        backup_max_age_seconds: Backups at or past this age are evicted
            (0 = unlimited).
        backup_max_count: Backups beyond this count are evicted
            (0 = unlimited).
        max_groups_per_track: Groups to retain per track. Enforced by the
            cache manager, which owns the group counters.
        max_frames_per_group: Frames to retain per group (0 = unlimited).
            Enforced by the cache manager, which owns the frame counters.
        max_frame_size_bytes: Largest frame (or estimated group) size still
            cached (0 = unlimited).
    """

    cache_patterns: tuple[GlobPattern, ...] = field(default_factory=_match_everything)
    exclude_patterns: tuple[GlobPattern, ...] = ()
    min_track_priority: int = 0
    backup_max_age_seconds: int = 0
    backup_max_count: int = 0
    # Only the latest group by default.
    max_groups_per_track: int = 1
    max_frames_per_group: int = 0
    max_frame_size_bytes: int = 0

    def with_cache_patterns(self, patterns: Iterable[str]) -> PatternBasedCachePolicy:
        """Return a copy including broadcasts that match `patterns`."""
        return replace(self, cache_patterns=compile_patterns(patterns))

    def with_exclude_patterns(
        self, patterns: Iterable[str]
    ) -> PatternBasedCachePolicy:
        """Return a copy excluding broadcasts that match `patterns`."""
        return replace(self, exclude_patterns=compile_patterns(patterns))

    def with_min_track_priority(self, priority: int) -> PatternBasedCachePolicy:
        return replace(self, min_track_priority=priority)

    def with_backup_max_age(self, seconds: int) -> PatternBasedCachePolicy:
        return replace(self, backup_max_age_seconds=seconds)

    def with_backup_max_count(self, count: int) -> PatternBasedCachePolicy:
        return replace(self, backup_max_count=count)

    def with_max_groups_per_track(self, limit: int) -> PatternBasedCachePolicy:
        return replace(self, max_groups_per_track=limit)

    def with_max_frames_per_group(self, limit: int) -> PatternBasedCachePolicy:
        return replace(self, max_frames_per_group=limit)

    def with_max_frame_size(self, size_bytes: int) -> PatternBasedCachePolicy:
        return replace(self, max_frame_size_bytes=size_bytes)

    def should_cache_broadcast(self, path: BroadcastPath) -> CacheDecision:
        if self.exclude_patterns and matches_any(path, self.exclude_patterns):
            return CacheDecision.NO_CACHE
        return CacheDecision.from_bool(matches_any(path, self.cache_patterns))

    def should_cache_track(
        self, broadcast_path: BroadcastPath, track_name: str, priority: int
    ) -> CacheDecision:
        # Track names are reserved for per-track patterns.
        _ = track_name
        if not self.should_cache_broadcast(broadcast_path).should_cache():
            return CacheDecision.NO_CACHE
        return CacheDecision.from_bool(priority >= self.min_track_priority)

    def should_cache_group(
        self, sequence: int, estimated_size: int | None = None
    ) -> CacheDecision:
        # Group and frame counts are enforced by the cache manager at
        # insertion time; only the size limit applies here.
        _ = sequence
        if estimated_size is not None and self._exceeds_frame_size(estimated_size):
            return CacheDecision.NO_CACHE
        return CacheDecision.CACHE

    def should_cache_frame(self, frame_size: int) -> CacheDecision:
        return CacheDecision.from_bool(not self._exceeds_frame_size(frame_size))

    def should_keep_backup(self, age_seconds: int, backup_count: int) -> bool:
        # Evict exactly at the age limit, but only beyond the count limit.
        if self.backup_max_age_seconds > 0 and age_seconds >= self.backup_max_age_seconds:
            return False
        if self.backup_max_count > 0 and backup_count > self.backup_max_count:
            return False
        return True

    def _exceeds_frame_size(self, size: int) -> bool:
        return self.max_frame_size_bytes > 0 and size > self.max_frame_size_bytes
