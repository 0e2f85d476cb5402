"""Exceptions raised by Maxinator."""

from typing import Optional


class MaxError(Exception):
    """Base exception for all Maxinator errors."""
    pass


class ConfigurationError(MaxError):
    """Exception raised when a required setting (e.g. bot token) is missing."""
    pass


class ValidationError(MaxError):
    """Exception raised when a value violates a local precondition.

    Attributes:
        field: Name of the offending field (e.g. "button_text", "keyboard.rows")
        size: Measured size (characters, bytes or count), if applicable
        limit: The limit that was exceeded, if applicable
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        size: Optional[int] = None,
        limit: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.field = field
        self.size = size
        self.limit = limit


class ApiError(MaxError):
    """Exception raised for Max API errors.

    Covers both non-2xx responses (status_code set) and transport failures
    (status_code is None).
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        if status_code is not None:
            super().__init__(f"[{status_code}] {message}")
        else:
            super().__init__(message)
