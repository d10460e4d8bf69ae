"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Relay cache policy configuration and the config-to-policy builder.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..errors import CachePolicyConfigError
from ..policy.constant import ALWAYS_CACHE, NEVER_CACHE
from ..policy.pattern_based import PatternBasedCachePolicy
from ..policy.patterns import MATCH_EVERYTHING
from ..policy.types import CachePolicy

logger = logging.getLogger("relaycache.config")

_MAX_PRIORITY = 255


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class BroadcastCacheConfig(_Section):
    """Broadcast-level rules: which paths are cached and how long backups live."""

    cache_patterns: list[str] = Field(default_factory=lambda: [MATCH_EVERYTHING])
    exclude_patterns: list[str] = Field(default_factory=list)
    # 0 disables the TTL.
    backup_max_age_seconds: int = Field(default=0, ge=0)
    # Backups kept per path; 0 keeps all.
    backup_max_count: int = Field(default=0, ge=0)

    @field_validator("cache_patterns", "exclude_patterns", mode="before")
    @classmethod
    def _split_delimited(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value


class TrackCacheConfig(_Section):
    """Track-level rules."""

    # Reserved; the engine does not limit tracks per broadcast.
    max_tracks_per_broadcast: int = Field(default=0, ge=0)
    min_priority: int = Field(default=0, ge=0, le=_MAX_PRIORITY)


class GroupCacheConfig(_Section):
    """Group-level limits, enforced by the cache manager."""

    max_groups_per_track: int = Field(default=1, ge=0)
    max_frames_per_group: int = Field(default=0, ge=0)


class CacheLimitsConfig(_Section):
    """Size limits in bytes (0 = unlimited)."""

    # Global and per-broadcast budgets belong to the cache manager.
    max_cache_size_bytes: int = Field(default=0, ge=0)
    max_broadcast_size_bytes: int = Field(default=0, ge=0)
    max_frame_size_bytes: int = Field(default=0, ge=0)


_SECTIONS: dict[str, type[_Section]] = {
    "broadcast": BroadcastCacheConfig,
    "track": TrackCacheConfig,
    "group": GroupCacheConfig,
    "limits": CacheLimitsConfig,
}

# Flat record field -> owning section.
FLAT_FIELDS: dict[str, str] = {
    name: section
    for section, model in _SECTIONS.items()
    for name in model.model_fields
}


class CachePolicyConfig(BaseModel):
    """
    Relay cache policy configuration.

    Attributes:
        cache_enabled: Global switch; when off nothing is cached.
        broadcast: Broadcast patterns and backup retention limits.
        track: Track priority threshold.
        group: Group and frame count limits.
        limits: Byte size limits.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    cache_enabled: bool = True
    broadcast: BroadcastCacheConfig = Field(default_factory=BroadcastCacheConfig)
    track: TrackCacheConfig = Field(default_factory=TrackCacheConfig)
    group: GroupCacheConfig = Field(default_factory=GroupCacheConfig)
    limits: CacheLimitsConfig = Field(default_factory=CacheLimitsConfig)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CachePolicyConfig:
        """
        Validate a nested mapping (`{"broadcast": {...}, ...}`).

        Raises:
            CachePolicyConfigError: When any value is invalid.
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise CachePolicyConfigError(f"Invalid cache policy config: {exc}") from exc

    @classmethod
    def from_flat(cls, data: Mapping[str, Any]) -> CachePolicyConfig:
        """
        Validate a flat record such as `{"cache_enabled": True, "min_priority": 64}`.

        Raises:
            CachePolicyConfigError: On unknown keys or invalid values.
        """
        nested: dict[str, Any] = {}
        for key, value in data.items():
            if key == "cache_enabled":
                nested[key] = value
                continue
            section = FLAT_FIELDS.get(key)
            if section is None:
                raise CachePolicyConfigError(f"Unknown cache policy field '{key}'")
            nested.setdefault(section, {})[key] = value
        return cls.from_mapping(nested)

    def flat(self) -> dict[str, Any]:
        """Return the flat record form of this configuration."""
        record: dict[str, Any] = {"cache_enabled": self.cache_enabled}
        for section in _SECTIONS:
            record.update(getattr(self, section).model_dump())
        return record

    def is_default_policy(self) -> bool:
        """Whether enabled settings reduce to caching everything."""
        return (
            self.broadcast.cache_patterns == [MATCH_EVERYTHING]
            and not self.broadcast.exclude_patterns
            and self.track.min_priority == 0
            and self.broadcast.backup_max_age_seconds == 0
            and self.broadcast.backup_max_count == 0
            and self.limits.max_frame_size_bytes == 0
        )

    def build(self) -> CachePolicy:
        """
        Create the cache policy selected by this configuration.

        Raises:
            PatternCompileError: When a broadcast pattern is malformed.
        """
        if not self.cache_enabled:
            logger.debug("Caching disabled; using never-cache policy")
            return NEVER_CACHE

        if self.is_default_policy():
            logger.debug("Default cache settings; using always-cache policy")
            return ALWAYS_CACHE

        policy = (
            PatternBasedCachePolicy()
            .with_cache_patterns(self.broadcast.cache_patterns)
            .with_exclude_patterns(self.broadcast.exclude_patterns)
            .with_min_track_priority(self.track.min_priority)
            .with_backup_max_age(self.broadcast.backup_max_age_seconds)
            .with_backup_max_count(self.broadcast.backup_max_count)
            .with_max_groups_per_track(self.group.max_groups_per_track)
            .with_max_frames_per_group(self.group.max_frames_per_group)
            .with_max_frame_size(self.limits.max_frame_size_bytes)
        )
        logger.debug(
            "Built pattern-based cache policy: %d include, %d exclude patterns",
            len(policy.cache_patterns),
            len(policy.exclude_patterns),
        )
        return policy
