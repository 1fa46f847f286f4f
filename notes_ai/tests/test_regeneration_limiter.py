"""Unit tests for RegenerationLimiter."""

from datetime import datetime, timedelta, timezone

from notes_ai.infrastructure.rate_limit import (
    DAILY_REGENERATION_LIMIT,
    RegenerationLimiter,
    local_midnight,
)

KST = timezone(timedelta(hours=9))


class CountingRepository:
    def __init__(self, count=0, error=None):
        self.count = count
        self.error = error
        self.since = None

    def count_since(self, user_id, since):
        self.since = since
        if self.error:
            raise self.error
        return self.count


def fixed_clock(hour=15, minute=30):
    return lambda: datetime(2025, 3, 14, hour, minute, tzinfo=KST)


class TestRegenerationLimiter:
    """Test daily regeneration limit."""

    def test_under_limit(self):
        limiter = RegenerationLimiter(CountingRepository(count=3), clock=fixed_clock())

        status = limiter.get_status("user-1")

        assert status.current_count == 3
        assert status.limit == DAILY_REGENERATION_LIMIT == 10
        assert status.can_regenerate is True
        assert status.remaining == 7

    def test_at_limit_denies(self):
        limiter = RegenerationLimiter(CountingRepository(count=10), clock=fixed_clock())

        assert limiter.can_regenerate("user-1") is False
        assert limiter.get_status("user-1").remaining == 0

    def test_read_failure_denies_with_zero_count(self):
        """Test an unreachable store denies instead of allowing unlimited use."""
        limiter = RegenerationLimiter(
            CountingRepository(error=ConnectionError("database unreachable")), clock=fixed_clock()
        )

        status = limiter.get_status("user-1")

        assert status.current_count == 0
        assert status.can_regenerate is False

    def test_counts_since_local_midnight(self):
        """Test the history query starts at local midnight of the current day."""
        repo = CountingRepository()
        RegenerationLimiter(repo, clock=fixed_clock()).count_regenerations_today("user-1")

        assert repo.since == datetime(2025, 3, 14, 0, 0, tzinfo=KST)

    def test_custom_limit(self):
        limiter = RegenerationLimiter(CountingRepository(count=2), daily_limit=2, clock=fixed_clock())

        assert limiter.limit() == 2
        assert limiter.can_regenerate("user-1") is False

    def test_seconds_until_reset(self):
        limiter = RegenerationLimiter(CountingRepository(), clock=fixed_clock(hour=23, minute=0))

        assert limiter.seconds_until_reset() == 3600

    def test_local_midnight_keeps_timezone(self):
        midnight = local_midnight(datetime(2025, 3, 14, 0, 0, 1, tzinfo=KST))

        assert midnight == datetime(2025, 3, 14, tzinfo=KST)
        assert midnight.tzinfo == KST
