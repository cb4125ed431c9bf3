"""Role store backed by the ``users`` collection."""

import logging
from datetime import datetime, timezone

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from courseportal.database import USERS_COLLECTION
from courseportal.models.user import DEFAULT_ROLE, Role, UserCreate

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def find_user(db: Database, email: str) -> dict | None:
    return db[USERS_COLLECTION].find_one({"email": _normalize_email(email)})


def get_role(db: Database, email: str) -> Role:
    """Return the stored role, or ``student`` for unregistered emails."""
    user = find_user(db, email)
    if user is None:
        return DEFAULT_ROLE
    return user.get("role") or DEFAULT_ROLE


def upsert_on_first_login(db: Database, payload: UserCreate) -> dict:
    """Create the user on first login; an existing record is returned unchanged."""
    email = _normalize_email(payload.email)
    new_user = {
        "name": payload.name,
        "photo": payload.photo,
        "role": payload.role,
        "createdAt": datetime.now(timezone.utc),
    }
    try:
        result = db[USERS_COLLECTION].update_one({"email": email}, {"$setOnInsert": new_user}, upsert=True)
    except DuplicateKeyError:
        # A concurrent first login inserted the record between match and upsert.
        result = None

    if result is not None and result.upserted_id is not None:
        logger.info("Registered %s with role %s.", email, payload.role)
    return find_user(db, email)
