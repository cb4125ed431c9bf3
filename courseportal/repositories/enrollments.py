"""Enrollment repository; one record per (student email, course) pair."""

import logging
from datetime import datetime, timezone

from pymongo import DESCENDING
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from courseportal.core.errors import ConflictError, parse_object_id
from courseportal.database import COURSES_COLLECTION, ENROLLMENTS_COLLECTION

logger = logging.getLogger(__name__)

ALREADY_ENROLLED = "Already enrolled"


def enroll(db: Database, user_email: str, course_id: str) -> str:
    object_id = parse_object_id(course_id)
    collection = db[ENROLLMENTS_COLLECTION]

    if collection.find_one({"userEmail": user_email, "courseId": object_id}) is not None:
        raise ConflictError(ALREADY_ENROLLED)

    try:
        result = collection.insert_one(
            {"userEmail": user_email, "courseId": object_id, "enrolledAt": datetime.now(timezone.utc)}
        )
    except DuplicateKeyError as exc:
        raise ConflictError(ALREADY_ENROLLED) from exc

    logger.info("Enrolled %s in course %s.", user_email, course_id)
    return str(result.inserted_id)


def list_for_user(db: Database, user_email: str) -> list[dict]:
    """Enrollments of ``user_email`` with the course document inlined.

    Enrollments whose course no longer exists are dropped by the unwind.
    """
    pipeline = [
        {"$match": {"userEmail": user_email}},
        {
            "$lookup": {
                "from": COURSES_COLLECTION,
                "localField": "courseId",
                "foreignField": "_id",
                "as": "course",
            }
        },
        {"$unwind": "$course"},
        {"$sort": {"enrolledAt": DESCENDING}},
        {"$project": {"_id": 1, "course": 1, "enrolledAt": 1}},
    ]
    return list(db[ENROLLMENTS_COLLECTION].aggregate(pipeline))
