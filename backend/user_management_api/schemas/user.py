"""User Schemas — request/response contracts with field-level validation rules.

Invariants:
    - UserRead never exposes the password or its hash
    - UserCreate: name 2-100 chars (trimmed), valid email (trimmed), strong password
    - UserUpdate: a missing, null or blank field means "leave unchanged";
      present fields obey the same rules as UserCreate
    - Email is stored exactly as entered (trimmed); validation never rewrites it
    - A weak password raises one "password_strength" error whose ctx["rules"]
      lists every failing rule message
    - Duplicate email is not checked here (it is a 409, raised by the service)
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator, validate_email
from pydantic_core import PydanticCustomError

from user_management_api.core.password_rules import check_password_strength

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100


# --- Rule helpers -------------------------------------------------------------

def _strip(v):
    return v.strip() if isinstance(v, str) else v


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


def _check_name(v: str) -> str:
    if not v:
        raise ValueError("Name is required.")
    if len(v) < NAME_MIN_LENGTH:
        raise ValueError(f"Name must be at least {NAME_MIN_LENGTH} characters.")
    if len(v) > NAME_MAX_LENGTH:
        raise ValueError(f"Name must be at most {NAME_MAX_LENGTH} characters.")
    return v


def _check_email(v: str) -> str:
    if not v:
        raise ValueError("Email is required.")
    try:
        _, address = validate_email(v)
    except PydanticCustomError:
        raise ValueError("Email is invalid.")
    # display-name forms ("Joe <joe@example.org>") parse to a different address
    if address.lower() != v.lower():
        raise ValueError("Email is invalid.")
    return v


def _check_password(v: str) -> str:
    if not v:
        raise ValueError("Password is required.")
    failures = check_password_strength(v)
    if failures:
        raise PydanticCustomError(
            "password_strength",
            "{reason}",
            {"reason": " ".join(failures), "rules": failures},
        )
    return v


# --- Schemas ------------------------------------------------------------------

class UserRead(BaseModel):
    """Public view of a user."""
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "examples": [{
                "id": 2,
                "name": "Noura",
                "email": "noura@example.com",
                "createdAt": "2025-08-12T05:21:07Z",
            }],
        },
    )

    id: int
    name: str
    email: str
    created_at: datetime = Field(serialization_alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # SQLite hands back naive datetimes
        return v if v.tzinfo else v.replace(tzinfo=timezone.utc)


class UserCreate(BaseModel):
    """Create request — all fields required."""
    model_config = ConfigDict(
        json_schema_extra={
            "examples": [{
                "name": "Noura",
                "email": "noura@example.com",
                "password": "P@ssw0rd!",
            }],
        },
    )

    name: str
    email: str
    password: str

    @field_validator("name", "email", mode="before")
    @classmethod
    def strip_text(cls, v):
        return _strip(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_name(v)

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password(v)


class UserUpdate(BaseModel):
    """Partial update — only non-blank fields are applied."""
    model_config = ConfigDict(
        json_schema_extra={
            "examples": [{
                "name": "Noura",
                "email": "noura@example.com",
                "password": "P@ssw0rd!",
            }],
        },
    )

    name: str | None = None
    email: str | None = None
    password: str | None = None

    @field_validator("name", "email", mode="before")
    @classmethod
    def strip_text(cls, v):
        return _blank_to_none(_strip(v))

    @field_validator("password", mode="before")
    @classmethod
    def ignore_blank_password(cls, v):
        return _blank_to_none(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return None if v is None else _check_name(v)

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str | None) -> str | None:
        return None if v is None else _check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        return None if v is None else _check_password(v)

    def has_changes(self) -> bool:
        return any(v is not None for v in (self.name, self.email, self.password))
