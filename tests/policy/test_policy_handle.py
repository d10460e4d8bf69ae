from __future__ import annotations

import threading

import pytest

from relaycache.config import CachePolicyConfig
from relaycache.errors import PatternCompileError
from relaycache.policy import (
    ALWAYS_CACHE,
    NEVER_CACHE,
    CacheDecision,
    CachePolicyHandle,
    PatternBasedCachePolicy,
)


def test_handle_defaults_to_always_cache():
    handle = CachePolicyHandle()
    assert handle.current is ALWAYS_CACHE


def test_swap_returns_previous_policy():
    handle = CachePolicyHandle(NEVER_CACHE)
    previous = handle.swap(ALWAYS_CACHE)
    assert previous is NEVER_CACHE
    assert handle.current is ALWAYS_CACHE


def test_reload_installs_built_policy():
    handle = CachePolicyHandle()
    config = CachePolicyConfig.from_flat({"cache_patterns": ["live/**"]})
    policy = handle.reload(config)
    assert isinstance(policy, PatternBasedCachePolicy)
    assert handle.current is policy
    assert handle.current.should_cache_broadcast("vod/x") is CacheDecision.NO_CACHE


def test_reload_keeps_old_policy_on_bad_pattern():
    handle = CachePolicyHandle(NEVER_CACHE)
    config = CachePolicyConfig.from_flat({"cache_patterns": ["live/[bad"]})
    with pytest.raises(PatternCompileError):
        handle.reload(config)
    assert handle.current is NEVER_CACHE


def test_concurrent_readers_see_complete_policies():
    handle = CachePolicyHandle(ALWAYS_CACHE)
    errors: list[str] = []
    stop = threading.Event()

    def reader() -> None:
        while not stop.is_set():
            policy = handle.current
            decision = policy.should_cache_broadcast("live/stream1")
            if policy is ALWAYS_CACHE and decision is not CacheDecision.CACHE:
                errors.append("always-cache refused")
            if policy is NEVER_CACHE and decision is not CacheDecision.NO_CACHE:
                errors.append("never-cache admitted")

    threads = [threading.Thread(target=reader) for _ in range(4)]
    for thread in threads:
        thread.start()
    for idx in range(200):
        handle.swap(NEVER_CACHE if idx % 2 else ALWAYS_CACHE)
    stop.set()
    for thread in threads:
        thread.join()
    assert errors == []
