"""Domain exceptions raised by the service layer.

Each exception carries the HTTP status the API layer answers with;
``main.create_app`` registers a single handler for ``DaymarkError``.
"""


class DaymarkError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    error_type = "internal"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(DaymarkError):
    """Raised when an entity is absent, or not owned by the caller where
    ownership is part of the lookup."""

    status_code = 404
    error_type = "not_found"


class AccessDeniedError(DaymarkError):
    """Raised when an entity exists but belongs to another user."""

    status_code = 403
    error_type = "access_denied"


class CapacityExceededError(DaymarkError):
    """Raised when a per-day or per-user limit is already reached."""

    status_code = 400
    error_type = "capacity"

    def __init__(self, detail: str, limit: int) -> None:
        super().__init__(detail)
        self.limit = limit


class ValidationError(DaymarkError):
    status_code = 400
    error_type = "validation"


class InvalidDateError(ValidationError):
    """Raised when a date path or body value cannot be parsed."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid date: {value!r}. Expected YYYY-MM-DD.")
        self.value = value
