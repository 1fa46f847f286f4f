"""Retry executor for AI calls.

Drives repeated invocation of an async operation with exponential backoff and
reports a single outcome.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar

from notes_ai.core.execution.error_classifier import AIError, ErrorClassifier
from notes_ai.core.execution.retry_policy import RetryPolicy
from notes_ai.core.logging import logger
from notes_ai.core.retry_config import RetryConfig

T = TypeVar("T")

OnRetry = Callable[[int, AIError], None]
Sleep = Callable[[float], Awaitable[Any]]


@dataclass
class RetryResult(Generic[T]):
    """Outcome of RetryExecutor.execute.

    On success `data` is set; on failure `error` holds the last classified error.
    """

    success: bool
    attempts: int
    total_time_ms: int
    data: Optional[T] = None
    error: Optional[AIError] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize into the response envelope used by the API."""
        if self.success:
            return {"success": True, "data": self.data, "attempts": self.attempts}
        return {
            "success": False,
            "error": self.error.user_message if self.error else "AI request failed",
            "ai_error": self.error.to_dict() if self.error else None,
            "attempts": self.attempts,
        }


class RetryExecutor:
    """Runs an async operation until it succeeds or retries are exhausted.

    Each call to execute() owns its loop state; share nothing between
    concurrent operations.
    """

    def __init__(self, sleep: Optional[Sleep] = None):
        """Initialize executor.

        Args:
            sleep: Awaitable sleep taking seconds (asyncio.sleep by default)
        """
        self._sleep = sleep or asyncio.sleep

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        config: Optional[RetryConfig] = None,
        on_retry: Optional[OnRetry] = None,
    ) -> RetryResult[T]:
        """Execute operation with automatic retry on retryable failures.

        Uses exponential backoff: delay = base_delay * 2^attempt, capped at
        30 seconds and at config.max_delay.

        Args:
            operation: Zero-argument coroutine function to invoke
            config: Call-site retry configuration (defaults to RetryConfig())
            on_retry: Called with (next_attempt_number, error) before each wait

        Returns:
            RetryResult with data or the final classified error
        """
        config = config or RetryConfig()
        start_time = time.monotonic()
        last_error: Optional[AIError] = None
        attempts = 0

        for attempt in range(config.max_attempts):
            attempts = attempt + 1
            try:
                data = await operation()
            except Exception as e:
                last_error = ErrorClassifier.classify(e)
            else:
                return RetryResult(
                    success=True,
                    data=data,
                    attempts=attempts,
                    total_time_ms=self._elapsed_ms(start_time),
                )

            # Don't retry errors outside the call-site allowlist or CRITICAL ones
            if not RetryPolicy.is_retryable(last_error, config) or not RetryPolicy.is_recoverable(last_error):
                break

            if attempt == config.max_attempts - 1:
                break

            if on_retry is not None:
                on_retry(attempt + 1, last_error)

            delay_ms = RetryPolicy.retry_delay(attempt, config)
            logger.warning(
                "ai_retry_scheduled",
                attempt=attempts,
                max_attempts=config.max_attempts,
                error_type=last_error.type.value,
                delay_ms=delay_ms,
            )
            await self._sleep(delay_ms / 1000)

        logger.error(
            "ai_operation_failed",
            attempts=attempts,
            error_type=last_error.type.value if last_error else None,
            severity=last_error.severity.value if last_error else None,
            message=last_error.message if last_error else None,
        )
        return RetryResult(
            success=False,
            error=last_error,
            attempts=attempts,
            total_time_ms=self._elapsed_ms(start_time),
        )

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((time.monotonic() - start_time) * 1000)
