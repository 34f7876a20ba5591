"""
Form Validation - pure checks on raw form input.

Nothing here touches a backend. Each check returns a FieldError (or None);
validate_application_form collects them all so the caller can show every
problem at once.

Resume rules:
- required, either a file or a URL (not both)
- URL must parse as an absolute URL
- file must be PDF / DOC / DOCX and at most MAX_RESUME_SIZE_BYTES
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError as PydanticValidationError

from app.core.errors import FieldError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MAX_RESUME_SIZE_MB = 5
MAX_RESUME_SIZE_BYTES = MAX_RESUME_SIZE_MB * 1024 * 1024

ALLOWED_RESUME_TYPES = {
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
}

_url_adapter = TypeAdapter(AnyUrl)


@dataclass
class ResumeFile:
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class ApplicationForm:
    full_name: str = ""
    email: str = ""
    resume_url: Optional[str] = None
    resume_file: Optional[ResumeFile] = None
    phone: Optional[str] = None
    cover_letter: Optional[str] = None


def is_valid_email(email: str) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def is_valid_url(url: str) -> bool:
    """True when `url` parses as an absolute URL (scheme and all)."""
    if not url:
        return False
    try:
        _url_adapter.validate_python(url)
    except PydanticValidationError:
        return False
    return True


def validate_full_name(full_name: Optional[str]) -> Optional[FieldError]:
    if not (full_name or "").strip():
        return FieldError("full_name", "Please enter your full name")
    return None


def validate_email(email: Optional[str]) -> Optional[FieldError]:
    if not is_valid_email((email or "").strip()):
        return FieldError("email", "Please enter a valid email address")
    return None


def validate_resume_url(url: str) -> Optional[FieldError]:
    if not is_valid_url(url.strip()):
        return FieldError("resume_url", "Please enter a valid URL for your resume")
    return None


def validate_resume_file(
    resume: ResumeFile, max_size_bytes: int = MAX_RESUME_SIZE_BYTES
) -> Optional[FieldError]:
    content_type = (resume.content_type or "").split(";")[0].strip().lower()
    if content_type not in ALLOWED_RESUME_TYPES:
        return FieldError("resume_file", "Resume must be a PDF, DOC or DOCX file")
    if resume.size == 0:
        return FieldError("resume_file", "Resume file is empty")
    if resume.size > max_size_bytes:
        max_mb = max_size_bytes // (1024 * 1024)
        return FieldError("resume_file", f"Resume file is too large. Maximum size: {max_mb}MB")
    return None


def validate_application_form(
    form: ApplicationForm, max_resume_bytes: int = MAX_RESUME_SIZE_BYTES
) -> List[FieldError]:
    errors = [validate_full_name(form.full_name), validate_email(form.email)]

    has_url = bool((form.resume_url or "").strip())
    has_file = form.resume_file is not None
    if has_url and has_file:
        errors.append(FieldError("resume", "Provide either a resume file or a resume URL, not both"))
    elif has_url:
        errors.append(validate_resume_url(form.resume_url))
    elif has_file:
        errors.append(validate_resume_file(form.resume_file, max_resume_bytes))
    else:
        errors.append(FieldError("resume", "Please provide a resume file or a resume URL"))

    return [e for e in errors if e is not None]


def validate_job_form(title: Optional[str], description: Optional[str]) -> List[FieldError]:
    errors = []
    if not (title or "").strip():
        errors.append(FieldError("title", "Please fill in all fields"))
    if not (description or "").strip():
        errors.append(FieldError("description", "Please fill in all fields"))
    return errors
