"""Error types and the boundary result envelope.

Programming errors (an unknown device mode, an unknown parameter key) are
raised as exceptions. Failures of boundary operations (discount creation,
template persistence) are returned as an ``OperationResult`` so the router can
translate them into an HTTP status without try/except at every call site.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class InvalidDevice(ValueError):
    """Raised when a device mode is neither ``desktop`` nor ``mobile``."""

    def __init__(self, device: Any):
        super().__init__(f"Invalid device mode: {device!r} (expected 'desktop' or 'mobile')")
        self.device = device


class UnknownParameter(LookupError):
    """Raised when an edit targets a key the schema does not declare."""

    def __init__(self, key: str):
        super().__init__(f"Unknown parameter: {key}")
        self.key = key


# ---------------------------------------------------------------------------
# Result envelope
# ---------------------------------------------------------------------------

class ErrorKind(str, Enum):
    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_FIELD = "invalid_field"
    EXTERNAL_SERVICE_ERROR = "external_service_error"
    NOT_FOUND = "not_found"
    INTERNAL_FAILURE = "internal_failure"


_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.MISSING_REQUIRED_FIELD: 400,
    ErrorKind.INVALID_FIELD: 400,
    ErrorKind.EXTERNAL_SERVICE_ERROR: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL_FAILURE: 500,
}


@dataclass
class OperationResult:
    """Success-with-payload or failure-with-message."""

    ok: bool
    payload: dict[str, Any] = field(default_factory=dict)
    error: str | None = None
    kind: ErrorKind | None = None

    @property
    def status_code(self) -> int:
        if self.ok:
            return 200
        return _STATUS_BY_KIND.get(self.kind, 500)

    @classmethod
    def success(cls, **payload: Any) -> "OperationResult":
        return cls(ok=True, payload=payload)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "OperationResult":
        return cls(ok=False, error=message, kind=kind)

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"success": True, **self.payload}
        return {"success": False, "error": self.error, "kind": self.kind.value if self.kind else None}
