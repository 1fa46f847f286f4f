"""Retry policy for AI calls.

Decides whether a classified failure deserves another attempt and how long to
wait before it.
"""

from notes_ai.core.execution.error_classifier import AIError
from notes_ai.core.retry_config import (
    DEFAULT_BASE_DELAY_MS,
    ErrorSeverity,
    ErrorType,
    RetryConfig,
)

MAX_BACKOFF_MS = 30000

# Tighter per-type attempt ceilings; the smaller of these and max_attempts applies.
TYPE_ATTEMPT_CEILINGS = {
    ErrorType.RATE_LIMIT_ERROR: 2,
    ErrorType.NETWORK_ERROR: 5,
    ErrorType.API_ERROR: 3,
}
DEFAULT_ATTEMPT_CEILING = 2


class RetryPolicy:
    """Stateless retry decisions and capped exponential backoff."""

    @staticmethod
    def should_retry(error: AIError, attempt_number: int, max_attempts: int) -> bool:
        """Decide whether another attempt is warranted.

        Args:
            error: Classified failure of the last attempt
            attempt_number: Attempts made so far
            max_attempts: Generic attempt cutoff for the call site

        Returns:
            True if the operation should be attempted again
        """
        if attempt_number >= max_attempts:
            return False

        if not error.can_retry:
            return False

        if error.severity == ErrorSeverity.CRITICAL:
            return False

        ceiling = TYPE_ATTEMPT_CEILINGS.get(error.type, DEFAULT_ATTEMPT_CEILING)
        return attempt_number < ceiling

    @staticmethod
    def delay(attempt_index: int, base_delay: int = DEFAULT_BASE_DELAY_MS) -> int:
        """Capped exponential backoff in milliseconds.

        attempt_index is zero-based: the first retry waits base_delay.
        """
        return min(base_delay * (2 ** attempt_index), MAX_BACKOFF_MS)

    @staticmethod
    def retry_delay(attempt_index: int, config: RetryConfig) -> int:
        """Backoff for a call site, additionally capped at config.max_delay."""
        return min(RetryPolicy.delay(attempt_index, config.base_delay), config.max_delay)

    @staticmethod
    def is_retryable(error: AIError, config: RetryConfig) -> bool:
        """Check the call-site allowlist and the error's own retryability."""
        return error.type in config.retryable_error_types and error.can_retry

    @staticmethod
    def is_recoverable(error: AIError) -> bool:
        """Retryable errors other than CRITICAL ones."""
        return error.can_retry and error.severity != ErrorSeverity.CRITICAL
