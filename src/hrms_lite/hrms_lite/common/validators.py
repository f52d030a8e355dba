from __future__ import annotations

import re
from typing import Any, Callable, List, Optional

from ..core.constants import EMAIL_PATTERN
from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(EMAIL_PATTERN)


def require_non_empty(value: Any, field_name: str, max_length: Optional[int] = None) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    value = value.strip()
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{field_name} must be at most {max_length} characters")
    return value


def require_email(value: Any, field_name: str = "Email", max_length: Optional[int] = None) -> str:
    email = require_non_empty(value, field_name, max_length).lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError("Please enter a valid email")
    return email


def require_choice(value: Any, field_name: str, choices: List[str]) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required")
    if value not in choices:
        raise ValidationError(f"{field_name} must be either {' or '.join(choices)}")
    return value


class FieldErrors:
    """Collects validation messages so callers can report every bad field at once."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def check(self, validator: Callable[..., Any], *args: Any) -> Optional[Any]:
        try:
            return validator(*args)
        except ValidationError as e:
            self.messages.extend(e.messages)
            return None

    def raise_if_any(self) -> None:
        if self.messages:
            raise ValidationError(self.messages)
