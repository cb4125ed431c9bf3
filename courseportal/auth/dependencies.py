import logging
from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pymongo.database import Database

from courseportal.auth.jwt_handler import IdentityVerifier, get_identity_verifier
from courseportal.core.errors import ForbiddenError, UnauthenticatedError
from courseportal.database import get_db
from courseportal.models.user import Role
from courseportal.repositories import users

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Claims:
    email: str
    subject: str


def get_current_claims(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    verify: IdentityVerifier = Depends(get_identity_verifier),
) -> Claims:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise UnauthenticatedError("Unauthorized access")

    try:
        payload = verify(credentials.credentials)
    except Exception as exc:
        raise UnauthenticatedError("Invalid token") from exc

    email = payload.get("email") or payload.get("sub")
    if not isinstance(email, str) or not email.strip():
        raise UnauthenticatedError("Invalid token subject")

    email = email.strip().lower()
    claims = Claims(email=email, subject=payload.get("sub") or email)
    request.state.user_email = claims.email
    return claims


def authorize(db: Database, claims: Claims, role: Role) -> None:
    user = users.find_user(db, claims.email)
    if user is None or user.get("role") != role:
        logger.warning("Denied %s access for %s.", role, claims.email)
        raise ForbiddenError("Forbidden access")


def require_role(role: Role):
    def dependency(
        claims: Claims = Depends(get_current_claims),
        db: Database = Depends(get_db),
    ) -> Claims:
        authorize(db, claims, role)
        return claims

    dependency.__name__ = f"require_{role}"
    return dependency


require_instructor = require_role("instructor")
require_student = require_role("student")
