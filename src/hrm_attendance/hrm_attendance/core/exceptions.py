from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class PolicyViolationError(ValidationError):
    """Raised when an entry targets a non-working day or a future date."""


class PersistenceError(DomainError):
    """Raised when the backing store rejects or fails a request."""

    def __init__(self, message: str, *, code: int = 500, endpoint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = int(code)
        self.endpoint = endpoint
