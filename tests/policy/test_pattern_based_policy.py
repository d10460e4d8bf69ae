from __future__ import annotations

import dataclasses

import pytest

from relaycache.errors import PatternCompileError
from relaycache.policy import CacheDecision, CachePolicy, PatternBasedCachePolicy


def test_default_policy_caches_any_path():
    policy = PatternBasedCachePolicy()
    assert isinstance(policy, CachePolicy)
    assert CachePolicy not in PatternBasedCachePolicy.__mro__
    assert policy.should_cache_broadcast("any/path") is CacheDecision.CACHE
    assert policy.max_groups_per_track == 1
    assert policy.max_frames_per_group == 0


def test_cache_patterns():
    policy = PatternBasedCachePolicy().with_cache_patterns(["live/**"])
    assert policy.should_cache_broadcast("live/stream1") is CacheDecision.CACHE
    assert policy.should_cache_broadcast("archive/stream1") is CacheDecision.NO_CACHE


def test_exclude_patterns_take_precedence():
    policy = (
        PatternBasedCachePolicy()
        .with_cache_patterns(["**"])
        .with_exclude_patterns(["*/private/*"])
    )
    assert policy.should_cache_broadcast("live/public/stream") is CacheDecision.CACHE
    assert policy.should_cache_broadcast("live/private/stream") is CacheDecision.NO_CACHE


def test_exclude_wins_even_when_include_names_path_exactly():
    policy = (
        PatternBasedCachePolicy()
        .with_cache_patterns(["live/secret"])
        .with_exclude_patterns(["live/*"])
    )
    assert policy.should_cache_broadcast("live/secret") is CacheDecision.NO_CACHE


def test_empty_exclude_set_never_excludes():
    policy = PatternBasedCachePolicy().with_exclude_patterns([])
    assert policy.exclude_patterns == ()
    assert policy.should_cache_broadcast("live/private/stream") is CacheDecision.CACHE


def test_empty_include_set_caches_nothing():
    policy = PatternBasedCachePolicy().with_cache_patterns([])
    assert policy.should_cache_broadcast("live/stream1") is CacheDecision.NO_CACHE


def test_pattern_order_is_irrelevant():
    first = PatternBasedCachePolicy().with_cache_patterns(["vod/**", "live/**"])
    second = PatternBasedCachePolicy().with_cache_patterns(["live/**", "vod/**"])
    for path in ("live/a", "vod/b", "other/c"):
        assert first.should_cache_broadcast(path) is second.should_cache_broadcast(path)


def test_priority_filtering_is_inclusive():
    policy = PatternBasedCachePolicy().with_min_track_priority(128)
    assert policy.should_cache_track("test", "video", 255) is CacheDecision.CACHE
    assert policy.should_cache_track("test", "audio", 64) is CacheDecision.NO_CACHE
    assert policy.should_cache_track("test", "video", 128) is CacheDecision.CACHE
    assert policy.should_cache_track("test", "video", 127) is CacheDecision.NO_CACHE


def test_zero_min_priority_accepts_all():
    policy = PatternBasedCachePolicy()
    assert policy.should_cache_track("test", "video", 0) is CacheDecision.CACHE


@pytest.mark.parametrize("priority", [0, 64, 128, 255])
@pytest.mark.parametrize("track_name", ["video", "audio", ""])
def test_track_follows_broadcast_exclusion(priority: int, track_name: str):
    policy = (
        PatternBasedCachePolicy()
        .with_cache_patterns(["live/**"])
        .with_exclude_patterns(["*/private/*"])
    )
    for path in ("live/private/stream", "archive/stream1"):
        assert policy.should_cache_broadcast(path) is CacheDecision.NO_CACHE
        assert (
            policy.should_cache_track(path, track_name, priority)
            is CacheDecision.NO_CACHE
        )


def test_frame_size_limit_is_strict():
    policy = PatternBasedCachePolicy().with_max_frame_size(1024)
    assert policy.should_cache_frame(512) is CacheDecision.CACHE
    assert policy.should_cache_frame(1024) is CacheDecision.CACHE
    assert policy.should_cache_frame(1025) is CacheDecision.NO_CACHE
    assert policy.should_cache_frame(2048) is CacheDecision.NO_CACHE


def test_zero_frame_size_means_unlimited():
    policy = PatternBasedCachePolicy()
    assert policy.should_cache_frame(10**12) is CacheDecision.CACHE
    assert policy.should_cache_group(1, 10**12) is CacheDecision.CACHE


def test_group_uses_estimated_size_only():
    policy = (
        PatternBasedCachePolicy()
        .with_max_frame_size(1024)
        .with_max_frames_per_group(2)
        .with_max_groups_per_track(1)
    )
    assert policy.should_cache_group(0, None) is CacheDecision.CACHE
    assert policy.should_cache_group(10**9) is CacheDecision.CACHE
    assert policy.should_cache_group(5, 1024) is CacheDecision.CACHE
    assert policy.should_cache_group(5, 1025) is CacheDecision.NO_CACHE


def test_backup_limits():
    policy = PatternBasedCachePolicy().with_backup_max_age(300).with_backup_max_count(5)
    assert policy.should_keep_backup(100, 3)
    assert not policy.should_keep_backup(400, 3)
    assert not policy.should_keep_backup(100, 6)


def test_backup_age_evicts_at_limit():
    policy = PatternBasedCachePolicy().with_backup_max_age(300)
    assert policy.should_keep_backup(299, 1000)
    assert not policy.should_keep_backup(300, 0)


def test_backup_count_evicts_beyond_limit():
    policy = PatternBasedCachePolicy().with_backup_max_count(5)
    assert policy.should_keep_backup(10**6, 5)
    assert not policy.should_keep_backup(0, 6)


def test_zero_backup_limits_keep_everything():
    policy = PatternBasedCachePolicy()
    assert policy.should_keep_backup(10**9, 10**6)


def test_builders_return_new_instances():
    base = PatternBasedCachePolicy()
    limited = base.with_max_frame_size(10)
    assert base.max_frame_size_bytes == 0
    assert limited.max_frame_size_bytes == 10
    assert limited is not base


def test_policy_is_immutable():
    policy = PatternBasedCachePolicy()
    with pytest.raises(dataclasses.FrozenInstanceError):
        policy.min_track_priority = 10  # type: ignore[misc]


def test_bare_string_patterns_are_rejected():
    with pytest.raises(PatternCompileError) as exc_info:
        PatternBasedCachePolicy().with_exclude_patterns("*/private/*")  # type: ignore[arg-type]
    assert exc_info.value.pattern == "*/private/*"
    with pytest.raises(PatternCompileError):
        PatternBasedCachePolicy().with_cache_patterns("live/**")  # type: ignore[arg-type]


def test_single_exclude_pattern_keeps_other_broadcasts():
    policy = PatternBasedCachePolicy().with_exclude_patterns(["*/private/*"])
    assert policy.should_cache_broadcast("live/public/stream") is CacheDecision.CACHE
    assert policy.should_cache_broadcast("live/private/stream") is CacheDecision.NO_CACHE


def test_invalid_pattern_fails_at_construction():
    with pytest.raises(PatternCompileError):
        PatternBasedCachePolicy().with_cache_patterns(["live/[oops"])
    with pytest.raises(PatternCompileError):
        PatternBasedCachePolicy().with_exclude_patterns(["live**"])
