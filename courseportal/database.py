import logging

from fastapi import Request
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.server_api import ServerApi

from courseportal.core import config

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
COURSES_COLLECTION = "courses"
ENROLLMENTS_COLLECTION = "enrollments"


class MongoContext:
    """Owns the process-wide MongoClient between startup and shutdown."""

    def __init__(self, uri: str, db_name: str) -> None:
        self.uri = uri
        self.db_name = db_name
        self.client: MongoClient | None = None

    def connect(self) -> Database:
        self.client = MongoClient(
            self.uri,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
            serverSelectionTimeoutMS=config.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
        )
        self.client.admin.command("ping")
        logger.info("Pinged MongoDB deployment; using database '%s'.", self.db_name)
        return self.db

    @property
    def db(self) -> Database:
        if self.client is None:
            raise RuntimeError("MongoContext is not connected.")
        return self.client[self.db_name]

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            self.client = None


def ensure_indexes(db: Database) -> None:
    db[USERS_COLLECTION].create_index([("email", ASCENDING)], unique=True, name="uniq_user_email")
    db[ENROLLMENTS_COLLECTION].create_index(
        [("userEmail", ASCENDING), ("courseId", ASCENDING)],
        unique=True,
        name="uniq_enrollment_user_course",
    )
    db[COURSES_COLLECTION].create_index([("instructor.email", ASCENDING)], name="idx_course_instructor_email")
    db[COURSES_COLLECTION].create_index(
        [("isFeatured", ASCENDING), ("createdAt", DESCENDING)],
        name="idx_course_featured_created",
    )
    db[COURSES_COLLECTION].create_index([("category", ASCENDING)], name="idx_course_category")
    logger.info("MongoDB indexes ensured for database '%s'.", db.name)


def get_db(request: Request) -> Database:
    return request.app.state.mongo.db
