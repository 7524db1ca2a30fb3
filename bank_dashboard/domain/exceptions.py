"""Domain-specific exceptions"""

from typing import Any


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class BankAPIError(DomainException):
    """Bank API returned an error status or could not be reached"""

    def __init__(self, status: int, message: str | None = None):
        self.status = status
        super().__init__(message or f"HTTP {status}")


class MovementParseError(DomainException):
    """A single upstream movement record could not be normalized"""

    def __init__(self, index: int, field: str, value: Any):
        self.index = index
        self.field = field
        self.value = value
        super().__init__(f"Movement #{index}: invalid {field} {value!r}")
