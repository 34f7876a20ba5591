"""
Pydantic Schemas - entity structs, request/response validation.

All schemas in one file for simplicity. Documents coming out of MongoDB are
decoded into the entity structs here; a shape mismatch raises DecodeError.
"""

from pydantic import BaseModel, EmailStr, Field, ValidationError as PydanticValidationError
from typing import Optional, List
from datetime import datetime
from enum import Enum

from app.core.errors import DecodeError


# ============================================================
# ENUMS
# ============================================================

class JobSort(str, Enum):
    newest = "newest"
    oldest = "oldest"


class SubmissionState(str, Enum):
    validating = "validating"
    checking_duplicate = "checking-duplicate"
    uploading_resume = "uploading-resume"
    persisting = "persisting"
    done = "done"
    failed = "failed"


# ============================================================
# ENTITIES (what lives in the document store)
# ============================================================

class Job(BaseModel):
    id: str
    title: str
    description: str
    company: Optional[str] = None
    location: Optional[str] = None
    created_at: datetime


class Application(BaseModel):
    id: str
    job_id: str
    job_title: str = ""
    full_name: str
    email: str
    resume_url: str
    phone: Optional[str] = None
    cover_letter: Optional[str] = None
    submitted_at: datetime


class User(BaseModel):
    uid: str
    name: str
    email: str


class StoredUser(User):
    password_hash: str
    created_at: Optional[datetime] = None


def _decode(model, entity: str, doc: dict, id_field: str = "id"):
    if doc is None:
        return None
    data = {k: v for k, v in doc.items() if k != "_id"}
    if "_id" in doc:
        data[id_field] = str(doc["_id"])
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise DecodeError(entity, str(e)) from e


def decode_job(doc: dict) -> Job:
    return _decode(Job, "job", doc)


def decode_application(doc: dict) -> Application:
    return _decode(Application, "application", doc)


def decode_user(doc: dict) -> StoredUser:
    return _decode(StoredUser, "user", doc, id_field="uid")


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    title: str = Field(..., max_length=200)
    description: str
    company: Optional[str] = Field(None, max_length=200)
    location: Optional[str] = Field(None, max_length=200)

class JobListResponse(BaseModel):
    jobs: List[Job]
    total: int


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationListResponse(BaseModel):
    job_id: str
    applications: List[Application]
    total: int

class SubmissionResponse(BaseModel):
    state: SubmissionState
    message: str
    application: Application


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class FieldErrorResponse(BaseModel):
    field: str
    message: str

class ErrorResponse(BaseModel):
    title: str
    detail: str
    errors: List[FieldErrorResponse] = []
