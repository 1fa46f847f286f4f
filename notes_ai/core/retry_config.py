"""Retry configuration for AI calls.

Immutable configuration for error retry behavior.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet


class ErrorType(str, Enum):
    """Error types produced by classifying AI failures."""

    API_ERROR = "API_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ErrorSeverity(str, Enum):
    """Coarse priority bucket driving retry eligibility and UI styling.

    - LOW: input problems the user can fix
    - MEDIUM: transient or quota problems
    - HIGH: service problems
    - CRITICAL: never retried (authentication)
    """

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY_MS = 1000
DEFAULT_MAX_DELAY_MS = 30000


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior at a single call site.

    Delays are in milliseconds.
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_delay: int = DEFAULT_BASE_DELAY_MS
    max_delay: int = DEFAULT_MAX_DELAY_MS
    retryable_error_types: FrozenSet[ErrorType] = field(
        default_factory=lambda: frozenset(
            {ErrorType.NETWORK_ERROR, ErrorType.API_ERROR, ErrorType.RATE_LIMIT_ERROR}
        )
    )

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be a positive integer")
        if self.base_delay < 0 or self.base_delay > self.max_delay:
            raise ValueError("base_delay must be between 0 and max_delay")
        # Call sites may pass plain strings or any iterable
        object.__setattr__(
            self,
            "retryable_error_types",
            frozenset(ErrorType(t) for t in self.retryable_error_types),
        )
