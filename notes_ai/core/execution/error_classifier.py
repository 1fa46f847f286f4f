"""Error classifier for AI calls.

Classifies failures from the generative model boundary into structured
AIError values for retry decisions and user-facing messages.
"""

import asyncio
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import requests

from notes_ai.core.retry_config import ErrorSeverity, ErrorType

_SECRET_PATTERN = re.compile(r"[A-Za-z0-9]{20,}")
_URL_PATTERN = re.compile(r"https?://\S+")
_IP_PATTERN = re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b")


@dataclass(frozen=True)
class AIError:
    """Structured classification of a failure from the AI boundary."""

    type: ErrorType
    severity: ErrorSeverity
    message: str
    user_message: str
    can_retry: bool
    retry_after: Optional[int] = None  # seconds, advisory
    alternative: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for API responses."""
        return {
            "type": self.type.value,
            "severity": self.severity.value,
            "message": self.message,
            "user_message": self.user_message,
            "can_retry": self.can_retry,
            "retry_after": self.retry_after,
            "alternative": self.alternative,
        }


@dataclass(frozen=True)
class _Rule:
    type: ErrorType
    severity: ErrorSeverity
    can_retry: bool
    user_message: str
    alternative: str
    retry_after: Optional[int] = None


API_RULE = _Rule(
    ErrorType.API_ERROR,
    ErrorSeverity.HIGH,
    True,
    "The AI service is unavailable right now. Please try again shortly.",
    "Try writing the summary or tags by hand.",
    retry_after=30,
)
NETWORK_RULE = _Rule(
    ErrorType.NETWORK_ERROR,
    ErrorSeverity.MEDIUM,
    True,
    "Please check your internet connection. The network may be unstable.",
    "Try again once your connection is stable.",
    retry_after=10,
)
AUTH_RULE = _Rule(
    ErrorType.AUTH_ERROR,
    ErrorSeverity.CRITICAL,
    False,
    "There is a problem with your authentication. Please sign in again.",
    "Sign out and sign back in.",
)
RATE_LIMIT_RULE = _Rule(
    ErrorType.RATE_LIMIT_ERROR,
    ErrorSeverity.MEDIUM,
    True,
    "Too many requests. Please wait a moment and try again.",
    "Try again later or write it by hand.",
    retry_after=60,
)
TOO_LONG_RULE = _Rule(
    ErrorType.VALIDATION_ERROR,
    ErrorSeverity.MEDIUM,
    False,
    "The note is too long. Please shorten it.",
    "Split the note into several smaller notes.",
)
VALIDATION_RULE = _Rule(
    ErrorType.VALIDATION_ERROR,
    ErrorSeverity.LOW,
    False,
    "There is a problem with the input. Please check the note content.",
    "Review the note content and try again.",
)
UNKNOWN_RULE = _Rule(
    ErrorType.UNKNOWN_ERROR,
    ErrorSeverity.HIGH,
    True,
    "An unexpected error occurred. Please try again shortly.",
    "If the problem persists, contact the administrator.",
    retry_after=30,
)

# Order matters: a message may contain markers for several rules.
TEXT_RULES = (
    (("api", "gemini", "google"), API_RULE),
    (("network", "fetch", "timeout"), NETWORK_RULE),
    (("auth", "unauthorized", "forbidden"), AUTH_RULE),
    (("rate limit", "quota", "limit"), RATE_LIMIT_RULE),
    (("token", "length", "too long"), TOO_LONG_RULE),
    (("validation", "invalid", "format"), VALIDATION_RULE),
)

# Gemini answers a rejected key with 400 rather than 401
API_KEY_MARKERS = ("api key", "api_key")

STATUS_RULES = {
    400: VALIDATION_RULE,
    401: AUTH_RULE,
    403: AUTH_RULE,
    404: VALIDATION_RULE,
    408: NETWORK_RULE,
    413: TOO_LONG_RULE,
    422: VALIDATION_RULE,
    429: RATE_LIMIT_RULE,
}

NETWORK_EXCEPTIONS = (
    asyncio.TimeoutError,
    TimeoutError,
    ConnectionError,
    requests.exceptions.Timeout,
    requests.exceptions.ConnectionError,
)


class ErrorClassifier:
    """Classifies AI failures into structured AIError values.

    Stateless; all methods are static. Classification runs in three tiers:
    explicit HTTP status, message markers, then exception type.
    """

    @staticmethod
    def classify(error: Union[BaseException, str]) -> AIError:
        """Classify an exception (or raw message) into an AIError.

        Args:
            error: Exception raised by the AI call, or its message

        Returns:
            AIError with type, severity, retryability and user copy
        """
        raw_message = error if isinstance(error, str) else str(error)
        message = ErrorClassifier.normalize(raw_message)

        rule = None
        if not isinstance(error, str):
            status = ErrorClassifier.status_code(error)
            rule = ErrorClassifier._rule_for_status(status)
            if status == 400 and any(marker in raw_message.lower() for marker in API_KEY_MARKERS):
                rule = AUTH_RULE

        if rule is None:
            lowered = raw_message.lower()
            for markers, candidate in TEXT_RULES:
                if any(marker in lowered for marker in markers):
                    rule = candidate
                    break

        if rule is None and isinstance(error, NETWORK_EXCEPTIONS):
            rule = NETWORK_RULE

        return ErrorClassifier._build(rule or UNKNOWN_RULE, message)

    @staticmethod
    def status_code(error: BaseException) -> Optional[int]:
        """Extract an HTTP status code from an exception, if it carries one."""
        for attr in ("status_code", "code"):
            value = getattr(error, attr, None)
            if isinstance(value, int) and not isinstance(value, bool):
                return value

        response = getattr(error, "response", None)
        value = getattr(response, "status_code", None)
        if isinstance(value, int):
            return value
        return None

    @staticmethod
    def normalize(message: str) -> str:
        """Redact secrets, URLs, and IP addresses from an error message."""
        message = _SECRET_PATTERN.sub("[REDACTED]", message)
        message = _URL_PATTERN.sub("[URL]", message)
        message = _IP_PATTERN.sub("[IP]", message)
        return message

    @staticmethod
    def _rule_for_status(status: Optional[int]) -> Optional[_Rule]:
        if status is None:
            return None
        if status in STATUS_RULES:
            return STATUS_RULES[status]
        if 500 <= status < 600:
            return API_RULE
        return None

    @staticmethod
    def _build(rule: _Rule, message: str) -> AIError:
        return AIError(
            type=rule.type,
            severity=rule.severity,
            message=message,
            user_message=rule.user_message,
            can_retry=rule.can_retry,
            retry_after=rule.retry_after,
            alternative=rule.alternative,
        )
