from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from taskflow.models.enums import Role

BCRYPT_MAX_BYTES = 72


def _check_password_bytes(v: str) -> str:
    """Ensure password does not exceed bcrypt's 72-byte limit when UTF-8 encoded.

    Raise a validation error so API returns a 422 with a clear message.
    """
    if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError("password too long: must be at most 72 bytes when UTF-8 encoded")
    return v


def _normalize_email(v: str) -> str:
    return v.strip().lower()


class UserCreate(BaseModel):
    name: str
    email: EmailStr
    password: str = Field(min_length=6)
    role: Optional[Role] = None

    @field_validator("name")
    @classmethod
    def name_min_length(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v

    @field_validator("email")
    @classmethod
    def email_lower(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def password_max_bytes(cls, v: str) -> str:
        return _check_password_bytes(v)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def email_lower(cls, v: str) -> str:
        return _normalize_email(v)


class ProfileUpdate(BaseModel):
    name: str
    email: EmailStr

    @field_validator("name")
    @classmethod
    def name_min_length(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters long")
        return v

    @field_validator("email")
    @classmethod
    def email_lower(cls, v: str) -> str:
        return _normalize_email(v)


class PasswordChange(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(min_length=1, alias="currentPassword")
    new_password: str = Field(min_length=6, alias="newPassword")

    @field_validator("new_password")
    @classmethod
    def password_max_bytes(cls, v: str) -> str:
        return _check_password_bytes(v)


class UserOut(BaseModel):
    """Sanitized projection; there is deliberately no password field."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: EmailStr
    role: Role


class UserDetail(UserOut):
    created_at: Optional[datetime] = None


class RegisterResponse(BaseModel):
    message: str
    userId: int


class LoginResponse(BaseModel):
    message: str
    token: str
    user: UserOut


class ProfileResponse(BaseModel):
    message: str
    user: UserDetail
