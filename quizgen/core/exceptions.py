"""
Custom exceptions for QuizGen.

Every pipeline stage fails with its own exception type so the caller can
tell the failures apart. Each class carries the HTTP status it maps to.
"""


class QuizGenError(Exception):
    """Base exception for all QuizGen errors."""

    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(QuizGenError):
    """Raised when caller input is malformed (empty or oversized topic, bad answers)."""

    status_code = 400


class PolicyRejection(QuizGenError):
    """Raised when a topic matches a blocked content pattern."""

    status_code = 400


class RateLimited(QuizGenError):
    """Raised when the generative service signals a rate limit."""

    status_code = 429


class QuotaExceeded(QuizGenError):
    """Raised when the generative service signals exhausted quota or billing."""

    status_code = 402


class GenerationFailed(QuizGenError):
    """Raised when the generative service fails or returns no text."""

    status_code = 500


class MalformedResponse(QuizGenError):
    """Raised when generated text cannot be parsed as JSON."""

    status_code = 500

    def __init__(self, message: str, raw_text: str = None):
        self.raw_text = raw_text
        super().__init__(message)


class SchemaViolation(QuizGenError):
    """Raised when parsed output does not match the quiz contract."""

    status_code = 500


class NotFound(QuizGenError):
    """Raised when a referenced quiz or attempt does not exist."""

    status_code = 404


class PersistenceError(QuizGenError):
    """Raised when the storage layer fails."""

    status_code = 500
