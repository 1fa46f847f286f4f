"""Exceptions raised at the AI boundary and by note workflows."""

from typing import Optional


class AIServiceError(RuntimeError):
    """Failure reported by the generative model boundary.

    Carries the upstream HTTP status when one is known so the classifier can
    map it explicitly instead of guessing from the message text.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class PromptTooLongError(AIServiceError):
    """Prompt exceeds the estimated token budget of the model."""

    def __init__(self, estimated_tokens: int, max_tokens: int):
        super().__init__(
            f"Input text is too long: estimated {estimated_tokens} tokens, "
            f"maximum {max_tokens} tokens",
            status_code=413,
        )
        self.estimated_tokens = estimated_tokens
        self.max_tokens = max_tokens


class NoteValidationError(ValueError):
    """User-supplied note, summary, or tag input failed validation."""
