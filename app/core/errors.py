"""
Error taxonomy for the job board.

Every error carries a short user-facing title and message. Services raise
these; the handlers in app.main turn them into JSON responses:

- ValidationError subclasses -> 422 (field-level, shown inline)
- NotFoundError              -> 404
- DuplicateApplicationError  -> 409
- BackendError               -> 502 (generic message, no retry)
- DecodeError                -> 500 (stored document has the wrong shape)
"""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class JobBoardError(Exception):
    """Base class for all job board errors."""
    status_code = 500
    title = "Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(JobBoardError):
    status_code = 422

    def __init__(self, errors: List[FieldError]):
        super().__init__(errors[0].message if errors else "Invalid input")
        self.errors = list(errors)


class ApplicationValidationError(ValidationError):
    """Application form failed validation. Raised before any backend call."""


class JobValidationError(ValidationError):
    """Job form failed validation."""


class NotFoundError(JobBoardError):
    status_code = 404
    title = "Not Found"


class DuplicateApplicationError(JobBoardError):
    status_code = 409
    title = "Duplicate Application"

    def __init__(self, job_id: str, email: str):
        super().__init__("You have already applied for this job with this email address.")
        self.job_id = job_id
        self.email = email


class BackendError(JobBoardError):
    """Network, permission or storage failure in a backend collaborator."""
    status_code = 502

    def __init__(self, message: str = "Something went wrong. Please try again."):
        super().__init__(message)


class DuplicateRecordError(BackendError):
    """Insert rejected by a unique index."""


class DecodeError(JobBoardError):
    """A stored document did not match its schema."""
    status_code = 500

    def __init__(self, entity: str, details: str):
        super().__init__(f"Stored {entity} record is malformed")
        self.entity = entity
        self.details = details


class AuthError(JobBoardError):
    status_code = 401
    title = "Authentication Failed"


class AccountExistsError(JobBoardError):
    status_code = 400
    title = "Registration Failed"
