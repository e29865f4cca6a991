# folio/app/schemas/user.py
import re
from datetime import datetime
from typing import Literal, Optional

from pydantic import field_validator, model_validator

from folio.app.schemas.base import CamelModel

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\d{10}$")
GENDERS = ("male", "female", "other")
MIN_PASSWORD_LENGTH = 6


class SignupRequest(CamelModel):
    """
    Body of POST /auth/signup.

    Every field is optional at the type level so that a missing field
    produces the single "All fields are required" message rather than one
    error per field.
    """
    username: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    gender: Optional[str] = None
    password: Optional[str] = None

    @model_validator(mode="after")
    def check_fields(self) -> "SignupRequest":
        if self.username:
            self.username = self.username.strip()
        if self.email:
            self.email = self.email.strip().lower()
        if self.phone_number:
            self.phone_number = self.phone_number.strip()

        if not all([self.username, self.email, self.phone_number, self.gender, self.password]):
            raise ValueError("All fields are required")

        if not EMAIL_RE.match(self.email):
            raise ValueError("Invalid email format")
        if not PHONE_RE.match(self.phone_number):
            raise ValueError("Phone number must be exactly 10 digits")
        if self.gender not in GENDERS:
            raise ValueError("Invalid gender selection")
        if len(self.password) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        return self


class LoginRequest(CamelModel):
    email_or_username: Optional[str] = None
    password: Optional[str] = None

    @field_validator("email_or_username")
    @classmethod
    def strip_identifier(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v else v

    @model_validator(mode="after")
    def check_fields(self) -> "LoginRequest":
        if not self.email_or_username:
            raise ValueError("Email or username is required")
        if not self.password or not self.password.strip():
            raise ValueError("Password is required")
        return self


class DeleteAccountRequest(CamelModel):
    password: Optional[str] = None


# What the outside world may see of a user. No password hash.
class UserPublic(CamelModel):
    id: str
    username: str
    email: str
    phone_number: str
    gender: Literal["male", "female", "other"]
    is_admin: bool
    created_at: datetime


class UserSummary(CamelModel):
    id: str
    username: str
    email: str


class SignupResponse(CamelModel):
    message: str
    user: UserSummary


class LoginResponse(CamelModel):
    message: str
    user: UserPublic


class MeResponse(CamelModel):
    user: Optional[UserPublic] = None


class MessageResponse(CamelModel):
    message: str
