from __future__ import annotations

from typing import Iterable


class DomainError(Exception):
    """Base exception for business rule violations."""


class NotFoundError(DomainError):
    """Raised when a referenced employee or record does not exist."""


class ConflictError(DomainError):
    """Raised when a unique business key (employee ID, email, attendance day) is taken."""


class ValidationError(DomainError):
    """Raised when input data is invalid.

    Carries every field-level message, not just the first one found.
    """

    def __init__(self, messages: str | Iterable[str]):
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super().__init__(", ".join(self.messages))
