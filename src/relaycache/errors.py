"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error hierarchy for cache policy construction and configuration.
"""

from __future__ import annotations


class CachePolicyError(RuntimeError):
    """Base cache policy error."""


class PatternCompileError(CachePolicyError):
    """
    Raised when a broadcast glob pattern cannot be compiled.

    Attributes:
        pattern: Offending pattern string.
        reason: Short description of what is malformed.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid cache pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class CachePolicyConfigError(CachePolicyError):
    """Raised when cache policy configuration values are invalid or unreadable."""
