"""Regeneration limit module for the notes API.

Caps AI regenerations per user per local calendar day.
"""

from notes_ai.infrastructure.rate_limit.limiter import (
    DAILY_REGENERATION_LIMIT,
    RegenerationCount,
    RegenerationLimiter,
    local_midnight,
)

__all__ = [
    "DAILY_REGENERATION_LIMIT",
    "RegenerationCount",
    "RegenerationLimiter",
    "local_midnight",
]
