"""
Exception types raised by the creator studio
"""

from typing import Optional


class CreatorStudioError(Exception):
    """Base class for all creator studio errors"""


class ConfigurationError(CreatorStudioError):
    """Raised when the studio cannot be built from its configuration"""


class MissingApiKeyError(ConfigurationError):
    """Raised when no Gemini API key is available at construction time"""

    def __init__(self, message: str = "GEMINI_API_KEY environment variable not set"):
        super().__init__(message)


class InferenceError(CreatorStudioError):
    """
    The outbound model call failed (network, auth, quota, provider error).

    Malformed or partial model output never raises; only a failed call does,
    so callers can tell "service down" apart from "got nothing useful".
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        base = super().__str__()
        if self.operation:
            return f"{self.operation}: {base}"
        return base


class StorageError(CreatorStudioError):
    """Raised for storage misuse or failed exports"""
