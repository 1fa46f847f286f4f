"""Unit tests for ErrorClassifier."""

import asyncio

import pytest
import requests

from notes_ai.core.exceptions import AIServiceError, PromptTooLongError
from notes_ai.core.execution import ErrorClassifier
from notes_ai.core.retry_config import ErrorSeverity, ErrorType


class StatusError(Exception):
    """Exception carrying an HTTP status like vendor SDK errors do."""

    def __init__(self, message, code):
        super().__init__(message)
        self.code = code


class TestTextClassification:
    """Test message-marker classification."""

    @pytest.mark.parametrize(
        "message",
        ["API request failed", "Gemini returned 500", "google backend error", "bad api key format"],
    )
    def test_api_markers(self, message):
        """Test any message mentioning the API classifies as API_ERROR."""
        error = ErrorClassifier.classify(message)

        assert error.type == ErrorType.API_ERROR
        assert error.severity == ErrorSeverity.HIGH
        assert error.can_retry is True
        assert error.retry_after == 30

    def test_network_markers(self):
        """Test network failures are retryable MEDIUM errors."""
        error = ErrorClassifier.classify(Exception("Failed to fetch"))

        assert error.type == ErrorType.NETWORK_ERROR
        assert error.severity == ErrorSeverity.MEDIUM
        assert error.can_retry is True
        assert error.retry_after == 10

    def test_auth_is_critical_and_not_retryable(self):
        """Test auth failures are CRITICAL and never retryable."""
        error = ErrorClassifier.classify(Exception("Unauthorized request"))

        assert error.type == ErrorType.AUTH_ERROR
        assert error.severity == ErrorSeverity.CRITICAL
        assert error.can_retry is False

    @pytest.mark.parametrize(
        "message",
        ["rate limit exceeded", "quota exhausted", "rate limit hit, token length too long"],
    )
    def test_rate_limit_wins_over_length(self, message):
        """Test the rate limit rule runs before the token length rule."""
        error = ErrorClassifier.classify(message)

        assert error.type == ErrorType.RATE_LIMIT_ERROR
        assert error.can_retry is True
        assert error.retry_after == 60

    def test_too_long_is_not_retryable(self):
        """Test content-too-long errors are MEDIUM validation errors."""
        error = ErrorClassifier.classify("content too long")

        assert error.type == ErrorType.VALIDATION_ERROR
        assert error.severity == ErrorSeverity.MEDIUM
        assert error.can_retry is False

    def test_validation_markers(self):
        """Test invalid input is a LOW validation error."""
        error = ErrorClassifier.classify("invalid payload")

        assert error.type == ErrorType.VALIDATION_ERROR
        assert error.severity == ErrorSeverity.LOW
        assert error.can_retry is False

    def test_unknown_default(self):
        """Test unmatched messages fall back to UNKNOWN_ERROR."""
        error = ErrorClassifier.classify(Exception("something odd happened"))

        assert error.type == ErrorType.UNKNOWN_ERROR
        assert error.severity == ErrorSeverity.HIGH
        assert error.can_retry is True
        assert error.retry_after == 30
        assert error.user_message
        assert error.alternative


class TestStatusClassification:
    """Test HTTP status codes take priority over message text."""

    @pytest.mark.parametrize(
        "status,expected_type",
        [
            (401, ErrorType.AUTH_ERROR),
            (403, ErrorType.AUTH_ERROR),
            (429, ErrorType.RATE_LIMIT_ERROR),
            (408, ErrorType.NETWORK_ERROR),
            (400, ErrorType.VALIDATION_ERROR),
            (500, ErrorType.API_ERROR),
            (503, ErrorType.API_ERROR),
        ],
    )
    def test_status_codes(self, status, expected_type):
        """Test explicit status codes map regardless of wording."""
        error = ErrorClassifier.classify(StatusError("something odd happened", status))

        assert error.type == expected_type

    def test_status_beats_misleading_text(self):
        """Test a 429 mentioning the API is still a rate limit."""
        error = ErrorClassifier.classify(StatusError("Gemini API: resource exhausted", 429))

        assert error.type == ErrorType.RATE_LIMIT_ERROR

    def test_bad_request_with_rejected_key_is_auth(self):
        """Test Gemini's 400 for an invalid key is an auth error, not retried."""
        error = ErrorClassifier.classify(
            StatusError("API key not valid. Please pass a valid API key.", 400)
        )

        assert error.type == ErrorType.AUTH_ERROR
        assert error.can_retry is False

    def test_prompt_too_long_error(self):
        """Test the token guard error classifies as non-retryable validation."""
        error = ErrorClassifier.classify(PromptTooLongError(9000, 8000))

        assert error.type == ErrorType.VALIDATION_ERROR
        assert error.severity == ErrorSeverity.MEDIUM
        assert error.can_retry is False

    def test_missing_api_key_is_auth(self):
        """Test a missing API key (status 401) asks for re-authentication."""
        error = ErrorClassifier.classify(AIServiceError("Gemini API key is not configured", 401))

        assert error.type == ErrorType.AUTH_ERROR
        assert error.severity == ErrorSeverity.CRITICAL

    def test_unmapped_status_falls_back_to_text(self):
        """Test statuses without a rule use the message markers."""
        error = ErrorClassifier.classify(StatusError("request timeout", 418))

        assert error.type == ErrorType.NETWORK_ERROR

    def test_bool_code_is_ignored(self):
        """Test a boolean code attribute is not mistaken for a status."""
        error = ErrorClassifier.classify(StatusError("something odd happened", True))

        assert error.type == ErrorType.UNKNOWN_ERROR


class TestExceptionTypeClassification:
    """Test exception types are used when no marker matches."""

    @pytest.mark.parametrize(
        "exc",
        [
            asyncio.TimeoutError(),
            ConnectionResetError("peer reset"),
            requests.exceptions.ConnectionError("boom"),
        ],
    )
    def test_network_exception_types(self, exc):
        """Test timeouts and connection errors without markers are NETWORK_ERROR."""
        assert ErrorClassifier.classify(exc).type == ErrorType.NETWORK_ERROR


class TestNormalize:
    """Test message redaction."""

    def test_redacts_secret_url_and_ip(self):
        """Test secrets, URLs, and IPs are replaced by placeholders."""
        secret = "AIzaSyA1b2C3d4E5f6G7h8I9j0KLMNOP"
        message = f"key {secret} failed at https://example.com/v1?x=1 from 192.168.0.12"

        normalized = ErrorClassifier.normalize(message)

        assert secret not in normalized
        assert "https://" not in normalized
        assert "192.168.0.12" not in normalized
        assert "[REDACTED]" in normalized
        assert "[URL]" in normalized
        assert "[IP]" in normalized

    def test_short_tokens_are_kept(self):
        """Test ordinary words are left alone."""
        assert ErrorClassifier.normalize("quota exceeded") == "quota exceeded"

    def test_classify_stores_normalized_message(self):
        """Test AIError.message never carries the raw secret."""
        secret = "abcdefghijklmnopqrstuvwxyz0123"
        error = ErrorClassifier.classify(Exception(f"api key {secret} rejected"))

        assert secret not in error.message

    def test_to_dict(self):
        """Test serialization exposes the UI contract."""
        data = ErrorClassifier.classify("rate limit").to_dict()

        assert data["type"] == "RATE_LIMIT_ERROR"
        assert data["severity"] == "MEDIUM"
        assert data["can_retry"] is True
        assert data["retry_after"] == 60
        assert set(data) >= {"message", "user_message", "alternative"}
