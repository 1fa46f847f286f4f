"""Execution module for AI calls.

Provides error classification, retry policy, retry execution, and error logging.
"""

from notes_ai.core.execution.error_classifier import AIError, ErrorClassifier
from notes_ai.core.execution.error_logger import ErrorLogger, ErrorStats
from notes_ai.core.execution.retry_executor import RetryExecutor, RetryResult
from notes_ai.core.execution.retry_policy import RetryPolicy
from notes_ai.core.execution.retry_state import RetryState

__all__ = [
    "AIError",
    "ErrorClassifier",
    "ErrorLogger",
    "ErrorStats",
    "RetryExecutor",
    "RetryResult",
    "RetryPolicy",
    "RetryState",
]
