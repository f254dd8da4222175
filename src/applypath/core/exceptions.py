"""Domain errors surfaced to the calling layer.

None of these are retried by the core. Callers map them to whatever their
transport needs (HTTP status codes, CLI exit codes, ...).
"""

from typing import Any

import pydantic


class ApplyPathError(Exception):
    """Base class for all domain errors."""

    default_detail = "Operation failed"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class PermissionDenied(ApplyPathError):
    """The policy engine blocked the operation."""

    default_detail = "Permission denied"


class NotFound(ApplyPathError):
    """The referenced row does not exist (or is not visible to a reader)."""

    default_detail = "Not found"


class Conflict(ApplyPathError):
    """A uniqueness constraint would be violated."""

    default_detail = "Conflict"


class ValidationError(ApplyPathError):
    """Payload rejected before any write."""

    default_detail = "Validation failed"

    def __init__(self, detail: str | None = None, errors: list[dict[str, Any]] | None = None):
        super().__init__(detail)
        self.errors = errors or []

    @classmethod
    def from_pydantic(cls, exc: pydantic.ValidationError) -> "ValidationError":
        errors = exc.errors(include_url=False)
        fields = ", ".join(".".join(str(p) for p in e["loc"]) or "payload" for e in errors)
        return cls(f"Invalid value for: {fields}", errors=errors)
