"""Daily AI regeneration limit for the notes API.

Counts regenerations recorded in Supabase since local midnight.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from notes_ai.core.logging import logger
from notes_ai.infrastructure.database.repositories import RegenerationRepository

DAILY_REGENERATION_LIMIT = 10


@dataclass(frozen=True)
class RegenerationCount:
    """Regeneration usage of one user for the current day."""

    current_count: int
    limit: int
    can_regenerate: bool

    @property
    def remaining(self) -> int:
        return max(self.limit - self.current_count, 0)

    def to_dict(self) -> dict:
        return {
            "current_count": self.current_count,
            "limit": self.limit,
            "remaining": self.remaining,
            "can_regenerate": self.can_regenerate,
        }


def local_midnight(now: datetime) -> datetime:
    """Start of the local calendar day containing now (timezone-aware)."""
    if now.tzinfo is None:
        now = now.astimezone()
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


class RegenerationLimiter:
    """Per-user daily cap on AI regenerations.

    Denies when the count cannot be determined. The check and the subsequent
    regeneration are not atomic, so concurrent requests can exceed the cap by
    a small margin (soft limit).
    """

    def __init__(
        self,
        repository: Optional[RegenerationRepository] = None,
        daily_limit: int = DAILY_REGENERATION_LIMIT,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize limiter.

        Args:
            repository: Regeneration history store
            daily_limit: Regenerations allowed per local calendar day
            clock: Returns the current aware datetime (for tests)
        """
        self._repo = repository or RegenerationRepository()
        self._limit = daily_limit
        self._clock = clock or (lambda: datetime.now().astimezone())

    def limit(self) -> int:
        return self._limit

    def count_regenerations_today(self, user_id: str) -> int:
        """Count the user's regenerations since local midnight.

        Raises:
            Exception: If the history store cannot be read
        """
        return self._repo.count_since(user_id, local_midnight(self._clock()))

    def get_status(self, user_id: str) -> RegenerationCount:
        """Current usage; denies with a zero count if the store is unreachable."""
        try:
            count = self.count_regenerations_today(user_id)
        except Exception as e:
            logger.error("regeneration_count_failed", user_id=user_id, error=str(e))
            return RegenerationCount(current_count=0, limit=self._limit, can_regenerate=False)

        allowed = count < self._limit
        if not allowed:
            logger.warning(
                "regeneration_limit_exceeded",
                user_id=user_id,
                count=count,
                limit=self._limit,
            )
        return RegenerationCount(current_count=count, limit=self._limit, can_regenerate=allowed)

    def can_regenerate(self, user_id: str) -> bool:
        return self.get_status(user_id).can_regenerate

    def seconds_until_reset(self) -> int:
        """Seconds until the next local midnight."""
        now = self._clock()
        if now.tzinfo is None:
            now = now.astimezone()
        next_midnight = local_midnight(now) + timedelta(days=1)
        return max(int((next_midnight - now).total_seconds()), 1)
