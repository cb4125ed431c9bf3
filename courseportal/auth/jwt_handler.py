from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt

from courseportal.core import config

IdentityVerifier = Callable[[str], dict]


def create_access_token(subject: str, email: str | None = None, expires_minutes: int | None = None) -> str:
    expire_minutes = expires_minutes or config.JWT_EXPIRES_MINUTES
    now = datetime.now(timezone.utc)
    payload = {"sub": subject, "email": email or subject, "exp": now + timedelta(minutes=expire_minutes), "iat": now}
    if config.JWT_AUDIENCE:
        payload["aud"] = config.JWT_AUDIENCE
    if config.JWT_ISSUER:
        payload["iss"] = config.JWT_ISSUER
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    return jwt.decode(
        token,
        config.JWT_SECRET_KEY,
        algorithms=[config.JWT_ALGORITHM],
        audience=config.JWT_AUDIENCE,
        issuer=config.JWT_ISSUER,
        options={"require": ["exp"]},
    )


def get_identity_verifier() -> IdentityVerifier:
    return decode_access_token
