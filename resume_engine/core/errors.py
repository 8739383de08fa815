"""
Errors raised on the outer surfaces (AI providers, document readers).

The structuring engine itself never raises; these exist so an AI adapter can
say *why* it failed and the analyzer can log it before falling back.
"""

import math


class StructuringError(Exception):
    def __init__(self, message: str, code: str, user_message: str, recoverable: bool = True):
        super().__init__(message)
        self.code = code
        self.user_message = user_message
        self.recoverable = recoverable


class AIServiceError(StructuringError):
    def __init__(self, message: str, user_message: str = "AI parsing is temporarily unavailable.", recoverable: bool = True):
        super().__init__(message, "AI_SERVICE_ERROR", user_message, recoverable)


class RateLimitError(StructuringError):
    def __init__(self, message: str, retry_after: float):
        minutes = max(1, math.ceil(retry_after / 60))
        super().__init__(
            message,
            "RATE_LIMIT_ERROR",
            f"AI service is temporarily busy. Please try again in {minutes} minutes.",
        )
        self.retry_after = retry_after


class QuotaExceededError(StructuringError):
    def __init__(self, message: str):
        super().__init__(
            message,
            "QUOTA_EXCEEDED",
            "Daily AI quota has been exceeded. Basic parsing was used instead.",
        )


class DocumentExtractionError(StructuringError):
    def __init__(self, message: str):
        super().__init__(
            message,
            "DOCUMENT_EXTRACTION_ERROR",
            "Failed to extract text from the document. Please make sure it is not a scanned image.",
            recoverable=False,
        )
