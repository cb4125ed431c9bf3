"""Course schemas.

``CourseCreate`` is the full schema a new course must satisfy.
``CourseUpdate`` is a partial patch: any subset of fields may be sent and
only the fields actually present are written.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, EmailStr, Field, TypeAdapter, ValidationError, field_validator

from courseportal.core.errors import PayloadValidationError

_http_url = TypeAdapter(AnyHttpUrl)


def _check_uri(value: str) -> str:
    try:
        _http_url.validate_python(value)
    except ValidationError as exc:
        raise ValueError("must be a valid http(s) URL") from exc
    return value


class InstructorInfo(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    photo: str = ""

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("photo")
    @classmethod
    def validate_photo(cls, value: str) -> str:
        if not value:
            return ""
        return _check_uri(value)


class CourseCreate(BaseModel):
    title: str = Field(..., min_length=1)
    image: str
    price: float = Field(..., ge=0, allow_inf_nan=False)
    duration: str | int | float
    category: str = Field(..., min_length=1)
    description: str
    isFeatured: bool = False
    instructor: InstructorInfo

    @field_validator("image")
    @classmethod
    def validate_image(cls, value: str) -> str:
        return _check_uri(value)


class CourseUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(None, min_length=1)
    image: str | None = None
    price: float | None = Field(None, ge=0, allow_inf_nan=False)
    duration: str | int | float | None = None
    category: str | None = Field(None, min_length=1)
    description: str | None = None
    isFeatured: bool | None = None
    instructor: InstructorInfo | None = None

    @field_validator("image")
    @classmethod
    def validate_image(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _check_uri(value)

    def to_patch(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


def first_error_field(exc: ValidationError) -> tuple[str, str]:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "body"
    return field, error["msg"]


def validate_course_payload(payload: Mapping[str, Any] | CourseCreate) -> CourseCreate:
    if isinstance(payload, CourseCreate):
        return payload
    try:
        return CourseCreate.model_validate(dict(payload))
    except ValidationError as exc:
        raise PayloadValidationError(*first_error_field(exc)) from exc
