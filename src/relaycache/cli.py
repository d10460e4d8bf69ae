"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Command line entrypoint for inspecting cache policy decisions.

Examples::

    relaycache --cache-patterns 'live/**' --min-priority 64 show
    relaycache --exclude-patterns '*/private/*' check broadcast live/private/cam
    relaycache --config relay-cache.json check backup 320 2
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, TextIO

from .config import CachePolicyConfig, load_config_from_env, load_config_from_file
from .errors import CachePolicyError
from .policy import CachePolicy

logger = logging.getLogger("relaycache.cli")

# Numeric flat fields exposed as `--kebab-case` override flags.
_INT_FLAGS = (
    "backup_max_age_seconds",
    "backup_max_count",
    "max_tracks_per_broadcast",
    "min_priority",
    "max_groups_per_track",
    "max_frames_per_group",
    "max_cache_size_bytes",
    "max_broadcast_size_bytes",
    "max_frame_size_bytes",
)


def _flag(name: str) -> str:
    return "--" + name.replace("_", "-")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="relaycache", description="Relay cache policy inspection utility"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON config file (defaults to RELAYCACHE_* environment variables)",
    )
    parser.add_argument(
        "--cache-enabled",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Enable caching globally",
    )
    parser.add_argument(
        "--cache-patterns",
        default=None,
        help="Comma-separated glob patterns of broadcasts to cache",
    )
    parser.add_argument(
        "--exclude-patterns",
        default=None,
        help="Comma-separated glob patterns of broadcasts never cached",
    )
    for name in _INT_FLAGS:
        parser.add_argument(_flag(name), dest=name, type=int, default=None)
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("show", help="Print the effective config and policy variant")

    check = commands.add_parser("check", help="Evaluate one policy query")
    queries = check.add_subparsers(dest="query", required=True)

    broadcast = queries.add_parser("broadcast")
    broadcast.add_argument("path")

    track = queries.add_parser("track")
    track.add_argument("path")
    track.add_argument("name")
    track.add_argument("priority", type=int)

    group = queries.add_parser("group")
    group.add_argument("sequence", type=int)
    group.add_argument("--size", type=int, default=None)

    frame = queries.add_parser("frame")
    frame.add_argument("size", type=int)

    backup = queries.add_parser("backup")
    backup.add_argument("age_seconds", type=int)
    backup.add_argument("count", type=int)
    return parser


def resolve_config(args: argparse.Namespace) -> CachePolicyConfig:
    """Load the base config and apply command line overrides on top."""
    base = load_config_from_file(args.config) if args.config else load_config_from_env()
    overrides: dict[str, Any] = {}
    for name in ("cache_enabled", "cache_patterns", "exclude_patterns", *_INT_FLAGS):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    if not overrides:
        return base
    logger.debug("Applying command line overrides: %s", sorted(overrides))
    return CachePolicyConfig.from_flat({**base.flat(), **overrides})


def evaluate(policy: CachePolicy, args: argparse.Namespace) -> str:
    """Run the query named by `args.query` and render its outcome."""
    if args.query == "broadcast":
        return policy.should_cache_broadcast(args.path).value
    if args.query == "track":
        return policy.should_cache_track(args.path, args.name, args.priority).value
    if args.query == "group":
        return policy.should_cache_group(args.sequence, args.size).value
    if args.query == "frame":
        return policy.should_cache_frame(args.size).value
    if args.query == "backup":
        keep = policy.should_keep_backup(args.age_seconds, args.count)
        return "keep" if keep else "evict"
    raise ValueError(f"Unknown query: {args.query}")


def main(argv: list[str] | None = None, *, out: TextIO | None = None) -> int:
    args = build_parser().parse_args(argv)
    stream = out or sys.stdout
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = resolve_config(args)
        policy = config.build()
    except CachePolicyError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.command == "show":
        payload = {"policy": type(policy).__name__, "config": config.flat()}
        print(json.dumps(payload, indent=2, sort_keys=True), file=stream)
        return 0

    print(evaluate(policy, args), file=stream)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
