"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Decision primitive and the query protocol every cache policy implements.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

# Hierarchical broadcast identifier such as `live/stream1`. Never parsed here.
BroadcastPath = str


class CacheDecision(Enum):
    """Outcome of one cache admission query."""

    CACHE = "cache"
    NO_CACHE = "no-cache"

    def should_cache(self) -> bool:
        """Return `True` iff the item should be cached."""
        return self is CacheDecision.CACHE

    @classmethod
    def from_bool(cls, flag: bool) -> CacheDecision:
        return cls.CACHE if flag else cls.NO_CACHE


@runtime_checkable
class CachePolicy(Protocol):
    """
    Synchronous decision surface consulted by the relay cache manager.

    Implementations are immutable once built and safe to share across
    threads without locking. No query performs I/O or raises.
    """

    def should_cache_broadcast(self, path: BroadcastPath) -> CacheDecision:
        """Check whether a broadcast should be cached."""

    def should_cache_track(
        self, broadcast_path: BroadcastPath, track_name: str, priority: int
    ) -> CacheDecision:
        """Check whether a track of a broadcast should be cached."""

    def should_cache_group(
        self, sequence: int, estimated_size: int | None = None
    ) -> CacheDecision:
        """Check whether a group should be cached."""

    def should_cache_frame(self, frame_size: int) -> CacheDecision:
        """Check whether a frame should be cached."""

    def should_keep_backup(self, age_seconds: int, backup_count: int) -> bool:
        """Check whether an aged backup broadcast should be kept."""
