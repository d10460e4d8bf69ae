"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Helpers for loading cache policy configuration from env, mappings and files.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..errors import CachePolicyConfigError
from ..policy.types import CachePolicy
from .models import FLAT_FIELDS, CachePolicyConfig

logger = logging.getLogger("relaycache.config")

ENV_PREFIX = "RELAYCACHE_"


def _env_key(name: str) -> str:
    return f"{ENV_PREFIX}{name.upper()}"


def load_config_from_env(environ: Mapping[str, str] | None = None) -> CachePolicyConfig:
    """
    Build configuration from `RELAYCACHE_*` environment variables.

    Each flat field maps to one upper-cased variable, for example
    `RELAYCACHE_CACHE_PATTERNS=live/**,vod/**` or `RELAYCACHE_MIN_PRIORITY=64`.
    Empty variables are ignored; unset fields keep their defaults.
    """
    env = os.environ if environ is None else environ
    record: dict[str, Any] = {}
    for name in ("cache_enabled", *FLAT_FIELDS):
        raw = env.get(_env_key(name))
        if raw is None:
            continue
        value = raw.strip()
        if value:
            record[name] = value
    if record:
        logger.debug("Loaded cache policy fields from env: %s", sorted(record))
    return CachePolicyConfig.from_flat(record)


def load_config_from_mapping(data: Mapping[str, Any]) -> CachePolicyConfig:
    """
    Validate a nested or flat configuration mapping.

    A mapping holding any of the section keys (`broadcast`, `track`, `group`,
    `limits`) is treated as nested; otherwise as a flat record.
    """
    if not isinstance(data, Mapping):
        raise CachePolicyConfigError(
            f"Cache policy config must be a mapping, got {type(data).__name__}"
        )
    if set(data) & set(FLAT_FIELDS.values()):
        return CachePolicyConfig.from_mapping(data)
    return CachePolicyConfig.from_flat(data)


def load_config_from_file(path: str | Path) -> CachePolicyConfig:
    """Read a JSON configuration document (nested or flat)."""
    target = Path(path)
    try:
        text = target.read_text(encoding="utf-8")
    except OSError as exc:
        raise CachePolicyConfigError(
            f"Cannot read cache policy config '{target}': {exc}"
        ) from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CachePolicyConfigError(
            f"Cache policy config '{target}' is not valid JSON: {exc}"
        ) from exc
    return load_config_from_mapping(data)


def build_policy_from_env(environ: Mapping[str, str] | None = None) -> CachePolicy:
    """Load configuration from the environment and build the policy."""
    return load_config_from_env(environ).build()
