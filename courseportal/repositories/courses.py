"""Course repository over the ``courses`` collection."""

import logging
import re
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from pymongo import DESCENDING
from pymongo.database import Database

from courseportal.core import config
from courseportal.core.errors import NotFoundError, parse_object_id
from courseportal.database import COURSES_COLLECTION, USERS_COLLECTION
from courseportal.models.course import CourseCreate, CourseUpdate, validate_course_payload

logger = logging.getLogger(__name__)

def clamp_limit(limit: int | None, default: int) -> int:
    if limit is None or limit < 1:
        return default
    return min(limit, config.MAX_PAGE_SIZE)


def build_course_filter(category: str | None = None, search: str | None = None) -> dict[str, Any]:
    query: dict[str, Any] = {}
    if category:
        query["category"] = category
    if search:
        query["title"] = {"$regex": re.escape(search), "$options": "i"}
    return query


def list_courses(
    db: Database,
    category: str | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int = config.DEFAULT_PAGE_SIZE,
) -> list[dict]:
    limit = clamp_limit(limit, config.DEFAULT_PAGE_SIZE)
    skip = (max(page, 1) - 1) * limit
    cursor = db[COURSES_COLLECTION].find(build_course_filter(category, search)).skip(skip).limit(limit)
    return list(cursor)


def get_course(db: Database, course_id: str) -> dict:
    course = db[COURSES_COLLECTION].find_one({"_id": parse_object_id(course_id)})
    if course is None:
        raise NotFoundError("Course not found")
    return course


def insert_course(db: Database, payload: Mapping[str, Any] | CourseCreate) -> str:
    course = validate_course_payload(payload)
    doc = course.model_dump()
    doc["createdAt"] = datetime.now(timezone.utc)
    result = db[COURSES_COLLECTION].insert_one(doc)
    logger.info("Created course %s for %s.", result.inserted_id, course.instructor.email)
    return str(result.inserted_id)


def update_course(db: Database, course_id: str, patch: CourseUpdate) -> int:
    object_id = parse_object_id(course_id)
    fields = patch.to_patch()
    fields["updatedAt"] = datetime.now(timezone.utc)

    result = db[COURSES_COLLECTION].update_one({"_id": object_id}, {"$set": fields})
    if result.matched_count == 0:
        raise NotFoundError("Course not found")
    logger.info("Updated course %s (%s).", course_id, ", ".join(sorted(fields)))
    return result.modified_count


def delete_course(db: Database, course_id: str) -> int:
    result = db[COURSES_COLLECTION].delete_one({"_id": parse_object_id(course_id)})
    if result.deleted_count == 0:
        raise NotFoundError("Course not found")
    logger.info("Deleted course %s.", course_id)
    return result.deleted_count


def _with_image_fallback(course: dict) -> dict:
    if not course.get("image"):
        course["image"] = course.get("imageUrl") or ""
    return course


def list_featured(db: Database, limit: int = config.DEFAULT_FEATURED_LIMIT) -> list[dict]:
    limit = clamp_limit(limit, config.DEFAULT_FEATURED_LIMIT)
    cursor = db[COURSES_COLLECTION].find({"isFeatured": True}).sort("createdAt", DESCENDING).limit(limit)
    return [_with_image_fallback(course) for course in cursor]


def list_instructors(db: Database, limit: int = config.DEFAULT_INSTRUCTOR_LIMIT) -> list[dict]:
    """Instructor directory from registered users, else derived from course documents."""
    limit = clamp_limit(limit, config.DEFAULT_INSTRUCTOR_LIMIT)
    registered = db[USERS_COLLECTION].find({"role": "instructor"}).limit(limit)
    instructors = [
        {"name": user.get("name", ""), "email": user["email"], "photo": user.get("photo", "")}
        for user in registered
    ]
    if instructors:
        return instructors

    pipeline = [
        {"$match": {"instructor.email": {"$exists": True, "$ne": ""}}},
        {
            "$group": {
                "_id": "$instructor.email",
                "name": {"$first": "$instructor.name"},
                "photo": {"$first": "$instructor.photo"},
            }
        },
        {"$limit": limit},
    ]
    return [
        {"name": group.get("name") or "", "email": group["_id"], "photo": group.get("photo") or ""}
        for group in db[COURSES_COLLECTION].aggregate(pipeline)
    ]


def list_by_instructor_email(db: Database, email: str) -> list[dict]:
    return list(db[COURSES_COLLECTION].find({"instructor.email": email}))
