"""User and role schemas."""

from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator

Role = Literal["student", "instructor"]

DEFAULT_ROLE: Role = "student"


class UserCreate(BaseModel):
    """First-login payload; ``role`` only applies when the record is created."""

    email: EmailStr
    name: str = ""
    photo: str = ""
    role: Role = DEFAULT_ROLE

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class RoleResponse(BaseModel):
    role: Role = Field(DEFAULT_ROLE)
