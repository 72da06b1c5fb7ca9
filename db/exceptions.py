"""
db/exceptions.py
----------------
Errors raised by the data access layer.
"""

from typing import Optional


class StorageError(Exception):
    """
    Raised when a database operation fails.

    Attributes:
        message: Human-readable description of the failed operation.
        cause: The underlying driver exception, if any.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message} ({self.cause})"
        return self.message
