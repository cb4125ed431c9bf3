"""HTTP-aware error types shared by the repositories and routes.

Every error is a ``HTTPException`` so FastAPI maps it to a status code;
``main`` renders the detail as ``{"error": ...}``.
"""

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException, status


class UnauthenticatedError(HTTPException):
    def __init__(self, detail: str = "Unauthorized access") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(HTTPException):
    def __init__(self, detail: str = "Forbidden access") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class InvalidArgumentError(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class PayloadValidationError(InvalidArgumentError):
    """Schema violation on a request payload; ``field`` is the first failing field."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        super().__init__(f"{field}: {reason}")


class NotFoundError(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


def parse_object_id(value: str, label: str = "course") -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as exc:
        raise InvalidArgumentError(f"Invalid {label} id") from exc
