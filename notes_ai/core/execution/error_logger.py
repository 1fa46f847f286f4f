"""AI error logging for the notes API.

Persists classified failures with redacted messages and derives statistics,
trends, and alerts from them.
"""

import re
import traceback
from collections import Counter
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from notes_ai.core.execution.error_classifier import AIError, ErrorClassifier
from notes_ai.core.logging import logger
from notes_ai.core.retry_config import ErrorSeverity
from notes_ai.infrastructure.database.models import AIErrorLog
from notes_ai.infrastructure.database.repositories import ErrorLogRepository


@dataclass
class ErrorStats:
    """Aggregate error statistics over a time window."""

    total_errors: int = 0
    errors_by_type: Dict[str, int] = field(default_factory=dict)
    errors_by_severity: Dict[str, int] = field(default_factory=dict)
    recent_errors: int = 0
    resolved_errors: int = 0
    average_resolution_minutes: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ErrorPatterns:
    """Most common error types, per-day trend, and serious error count."""

    most_common_errors: List[Dict[str, object]] = field(default_factory=list)
    error_trends: List[Dict[str, object]] = field(default_factory=list)
    critical_errors: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ErrorAlert:
    should_alert: bool
    message: str
    priority: str


ALERT_PREFIXES = {
    ErrorSeverity.CRITICAL: ("critical", "A critical AI error occurred"),
    ErrorSeverity.HIGH: ("high", "The AI service is having problems"),
    ErrorSeverity.MEDIUM: ("medium", "A problem occurred during AI processing"),
    ErrorSeverity.LOW: ("low", "A warning occurred during AI processing"),
}


_FRACTION = re.compile(r"\.(\d+)")


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    # Postgres trims trailing zeros; fromisoformat before 3.11 wants 3 or 6 digits
    text = _FRACTION.sub(
        lambda m: "." + m.group(1)[:6].ljust(6, "0"), value.replace("Z", "+00:00"), count=1
    )
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class ErrorLogger:
    """Stores and analyzes AI error logs."""

    def __init__(
        self,
        repository: Optional[ErrorLogRepository] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._repo = repository or ErrorLogRepository()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def log_error(
        self,
        error: AIError,
        user_id: str,
        note_id: Optional[str] = None,
        retry_count: int = 0,
        exception: Optional[BaseException] = None,
    ) -> str:
        """Persist a classified error.

        Only the normalized message is stored.

        Returns:
            The log id, or "unknown" if it could not be stored
        """
        stack_trace = None
        if exception is not None:
            stack_trace = ErrorClassifier.normalize(
                "".join(traceback.format_exception(type(exception), exception, exception.__traceback__))
            )

        log_id = self._repo.insert_log(
            {
                "note_id": note_id,
                "user_id": user_id,
                "error_type": error.type.value,
                "error_message": ErrorClassifier.normalize(error.message),
                "stack_trace": stack_trace,
                "severity": error.severity.value,
                "retry_count": str(retry_count),
            }
        )

        logger.error(
            "ai_error_logged",
            log_id=log_id,
            type=error.type.value,
            severity=error.severity.value,
            message=error.message,
            note_id=note_id,
        )
        return log_id or "unknown"

    def mark_resolved(self, log_id: str, user_id: Optional[str] = None) -> bool:
        return self._repo.mark_resolved(log_id, user_id)

    def get_error_logs(
        self, user_id: Optional[str] = None, limit: int = 50, offset: int = 0
    ) -> List[AIErrorLog]:
        return self._repo.list_logs(user_id=user_id, limit=limit, offset=offset)

    def get_error_stats(self, user_id: Optional[str] = None, days: int = 30) -> ErrorStats:
        """Totals by type and severity, last-24h count, and resolution times."""
        now = self._clock()
        logs = self._repo.list_since(now - timedelta(days=days), user_id=user_id)
        one_day_ago = now - timedelta(days=1)

        stats = ErrorStats(total_errors=len(logs))
        stats.errors_by_type = dict(Counter(log.error_type for log in logs))
        stats.errors_by_severity = dict(Counter(log.severity for log in logs))

        resolution_minutes = []
        for log in logs:
            created_at = _parse_timestamp(log.created_at)
            resolved_at = _parse_timestamp(log.resolved_at)

            if created_at and created_at >= one_day_ago:
                stats.recent_errors += 1

            if resolved_at:
                stats.resolved_errors += 1
                if created_at:
                    resolution_minutes.append((resolved_at - created_at).total_seconds() / 60)

        if resolution_minutes:
            stats.average_resolution_minutes = sum(resolution_minutes) / len(resolution_minutes)

        return stats

    def analyze_error_patterns(self, user_id: Optional[str] = None, days: int = 7) -> ErrorPatterns:
        """Top five error types, errors per day, and HIGH/CRITICAL count."""
        now = self._clock()
        logs = self._repo.list_since(now - timedelta(days=days), user_id=user_id)

        type_counts = Counter(log.error_type for log in logs)
        day_counts: Counter = Counter()
        critical = 0
        for log in logs:
            created_at = _parse_timestamp(log.created_at)
            if created_at:
                day_counts[created_at.date().isoformat()] += 1
            if log.severity in (ErrorSeverity.CRITICAL.value, ErrorSeverity.HIGH.value):
                critical += 1

        return ErrorPatterns(
            most_common_errors=[
                {"type": error_type, "count": count}
                for error_type, count in type_counts.most_common(5)
            ],
            error_trends=[
                {"date": day, "count": day_counts[day]} for day in sorted(day_counts)
            ],
            critical_errors=critical,
        )

    @staticmethod
    def generate_error_alert(error: AIError) -> ErrorAlert:
        """Alert for HIGH and CRITICAL errors; lower severities only get a message."""
        priority, prefix = ALERT_PREFIXES[error.severity]
        return ErrorAlert(
            should_alert=error.severity in (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL),
            message=f"{prefix}: {error.user_message}",
            priority=priority,
        )
