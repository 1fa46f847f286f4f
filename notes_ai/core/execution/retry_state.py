"""Retry progress state for UI feedback."""

from typing import Optional

from notes_ai.core.execution.error_classifier import AIError
from notes_ai.core.retry_config import DEFAULT_MAX_ATTEMPTS


class RetryState:
    """Tracks attempts, in-progress flag, and last error of one operation.

    Holds no retry logic; decisions live in RetryPolicy.
    """

    def __init__(self):
        self.attempts: int = 0
        self.is_retrying: bool = False
        self.last_error: Optional[AIError] = None

    @property
    def has_error(self) -> bool:
        return self.last_error is not None

    def start_retry(self) -> None:
        self.is_retrying = True
        self.attempts += 1

    def stop_retry(self) -> None:
        self.is_retrying = False

    def set_error(self, error: AIError) -> None:
        self.last_error = error

    def reset(self) -> None:
        self.attempts = 0
        self.is_retrying = False
        self.last_error = None

    def get_retry_progress(self) -> float:
        """Progress in [0, 100] against the default attempt budget."""
        return min(self.attempts / DEFAULT_MAX_ATTEMPTS * 100, 100)

    def tracker(self):
        """Build an on_retry callback for RetryExecutor that updates this state."""

        def on_retry(attempt: int, error: AIError) -> None:
            self.start_retry()
            self.set_error(error)

        return on_retry

    def status_message(self) -> str:
        """Short status line for display."""
        if self.is_retrying:
            return f"Retrying... ({self.attempts}/{DEFAULT_MAX_ATTEMPTS})"

        if self.last_error is not None:
            if self.last_error.can_retry:
                return f"Retry available: {self.last_error.user_message}"
            return f"Retry unavailable: {self.last_error.user_message}"

        return "OK"

    def to_dict(self) -> dict:
        return {
            "attempts": self.attempts,
            "is_retrying": self.is_retrying,
            "progress": self.get_retry_progress(),
            "last_error": self.last_error.to_dict() if self.last_error else None,
            "status": self.status_message(),
        }
