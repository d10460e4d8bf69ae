"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Shared, swappable reference to the active cache policy.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import TYPE_CHECKING

from .constant import ALWAYS_CACHE
from .types import CachePolicy

if TYPE_CHECKING:
    from ..config.models import CachePolicyConfig

logger = logging.getLogger("relaycache.policy")


class CachePolicyHandle:
    """
    Holder for the one policy instance shared by relay workers.

    Readers call `current` without locking and always see a fully built
    policy. Writers replace the whole instance; policies are never mutated
    in place.
    """

    def __init__(self, policy: CachePolicy | None = None) -> None:
        self._policy: CachePolicy = policy if policy is not None else ALWAYS_CACHE
        self._lock = Lock()

    @property
    def current(self) -> CachePolicy:
        return self._policy

    def swap(self, policy: CachePolicy) -> CachePolicy:
        """Install `policy` and return the one it replaced."""
        with self._lock:
            previous = self._policy
            self._policy = policy
        logger.info(
            "Cache policy swapped: %s -> %s",
            type(previous).__name__,
            type(policy).__name__,
        )
        return previous

    def reload(self, config: CachePolicyConfig) -> CachePolicy:
        """
        Build a policy from `config` and install it.

        The build happens before the swap, so a configuration error leaves
        the current policy in place.
        """
        policy = config.build()
        self.swap(policy)
        return policy
