"""Error Taxonomy — closed set of error kinds and their wire representation.

Invariants:
    - Every error carries an ErrorKind; HTTP status, code and fallback message come from the kind
    - classify_error keeps any StockroomError as raised; everything else is INTERNAL
    - to_response() produces the flat {error, message, statusCode} envelope
    - DATABASE and INTERNAL never expose their own message, only the kind's safe text
    - The wrapped cause is kept for logging and never serialized

Design Decisions:
    - Kind enum over class-hierarchy dispatch: handlers read exc.kind, subclasses are
      thin constructors only (ADR: closed variant set)
"""

from enum import Enum


class ErrorKind(str, Enum):
    """The four error kinds."""
    VALIDATION = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    DATABASE = "DATABASE_ERROR"
    INTERNAL = "INTERNAL_ERROR"

    @property
    def code(self) -> str:
        return self.value

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]

    @property
    def default_message(self) -> str:
        return _DEFAULT_MESSAGES[self]

    @property
    def exposes_message(self) -> bool:
        """Whether a caller-supplied message is safe to return to clients."""
        return self in (ErrorKind.VALIDATION, ErrorKind.NOT_FOUND)


_HTTP_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DATABASE: 500,
    ErrorKind.INTERNAL: 500,
}

_DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.VALIDATION: "Invalid request format or parameters.",
    ErrorKind.NOT_FOUND: "The requested resource was not found.",
    ErrorKind.DATABASE: "Unable to connect to database. Please try again later.",
    ErrorKind.INTERNAL: "An internal error occurred. Please try again later.",
}


def build_error_payload(code: str, message: str, status_code: int) -> dict:
    """Standard error envelope shared by every error response."""
    return {"error": code, "message": message, "statusCode": status_code}


class StockroomError(Exception):
    """Base exception for all Stockroom errors."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message or kind.default_message)
        self.kind = kind
        self.message = message or kind.default_message
        self.cause = cause

    @property
    def http_status(self) -> int:
        return self.kind.http_status

    @property
    def safe_message(self) -> str:
        if self.kind.exposes_message:
            return self.message
        return self.kind.default_message

    def to_response(self) -> dict:
        """Convert to the standard REST error envelope."""
        return build_error_payload(
            self.kind.code, self.safe_message, self.http_status,
        )


# ─── Kind constructors ──────────────────────────────────────────

class ValidationError(StockroomError):
    """Request input failed validation."""
    def __init__(self, message: str | None = None):
        super().__init__(ErrorKind.VALIDATION, message)


class NotFoundError(StockroomError):
    """Requested record does not exist."""
    def __init__(self, message: str | None = None, cause: BaseException | None = None):
        super().__init__(ErrorKind.NOT_FOUND, message, cause)


class DatabaseError(StockroomError):
    """Backing store operation failed."""
    def __init__(self, operation: str, cause: BaseException | None = None):
        super().__init__(
            ErrorKind.DATABASE, f"Database {operation} failed", cause,
        )
        self.operation = operation


class InternalError(StockroomError):
    """Unclassified failure."""
    def __init__(self, cause: BaseException | None = None):
        super().__init__(ErrorKind.INTERNAL, None, cause)


def classify_error(exc: BaseException) -> StockroomError:
    """Map any raised condition onto one of the four kinds.

    StockroomError instances already carry their kind and pass through;
    anything else falls through to INTERNAL with the original as cause.
    """
    if isinstance(exc, StockroomError):
        return exc
    return InternalError(cause=exc)
