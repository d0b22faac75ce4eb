"""
Failure classification.

Every user-visible failure carries a FailureKind and a human-readable
message. The API layer turns KnownError into a FailureDetail response.

Error kinds:
- CatalogueLoadError: the catalogue could not be fetched or parsed.
  Fatal to the session; no retry is attempted.
- ImportValidationError: a save payload was malformed. The import is
  rejected and tracker state is left untouched.
- InvariantViolation: the catalogue broke a data-model invariant the
  engine relies on. Never substituted with a default.

A route with nothing left to catch is NOT a failure; see RouteEstimate.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Rejected user input (save imports)
    INVALID_INPUT = "invalid_input"

    # Catalogue could not be fetched or parsed
    SERVICE_UNAVAILABLE = "service_unavailable"

    # Internal errors
    INVARIANT_VIOLATION = "invariant_violation"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.status_code = status_code
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail."""
        return FailureDetail(kind=self.kind, message=self.message, detail=self.detail)


class CatalogueLoadError(KnownError):
    """Raised when the catalogue cannot be fetched, read or parsed."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.SERVICE_UNAVAILABLE,
            message=f"Error loading Pokémon data: {message}",
            detail=detail,
            status_code=503,
        )


class ImportValidationError(KnownError):
    """Raised when an imported save payload is malformed."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=message,
            detail=detail,
            status_code=400,
        )


class InvariantViolation(KnownError):
    """Raised when catalogue data breaks an invariant the engine depends on."""

    def __init__(self, message: str):
        super().__init__(
            kind=FailureKind.INVARIANT_VIOLATION,
            message=message,
            status_code=500,
        )
