from fastapi import APIRouter, Depends, Query
from pymongo.database import Database

from courseportal.auth.dependencies import Claims, require_instructor
from courseportal.core import config
from courseportal.database import get_db
from courseportal.models.course import CourseCreate, CourseUpdate
from courseportal.models.serialization import serialize_doc
from courseportal.repositories import courses

router = APIRouter(tags=['courses'])


@router.get('/all-courses')
def list_all_courses(
    category: str | None = Query(default=None),
    search: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=config.DEFAULT_PAGE_SIZE, ge=1),
    db: Database = Depends(get_db),
):
    found = courses.list_courses(db, category=category, search=search, page=page, limit=limit)
    return [serialize_doc(course) for course in found]


@router.get('/featured-courses')
def list_featured_courses(
    limit: int = Query(default=config.DEFAULT_FEATURED_LIMIT, ge=1),
    db: Database = Depends(get_db),
):
    return [serialize_doc(course) for course in courses.list_featured(db, limit=limit)]


@router.get('/instructors')
def list_instructors(
    limit: int = Query(default=config.DEFAULT_INSTRUCTOR_LIMIT, ge=1),
    db: Database = Depends(get_db),
):
    return courses.list_instructors(db, limit=limit)


@router.get('/courses/{course_id}')
def get_course(course_id: str, db: Database = Depends(get_db)):
    return serialize_doc(courses.get_course(db, course_id))


@router.post('/courses')
def create_course(
    data: CourseCreate,
    claims: Claims = Depends(require_instructor),
    db: Database = Depends(get_db),
):
    return {'insertedId': courses.insert_course(db, data)}


# Any instructor may edit or delete any course; ownership is not checked here.
@router.put('/courses/{course_id}')
def update_course(
    course_id: str,
    data: CourseUpdate,
    claims: Claims = Depends(require_instructor),
    db: Database = Depends(get_db),
):
    return {'modifiedCount': courses.update_course(db, course_id, data)}


@router.delete('/courses/{course_id}')
def delete_course(
    course_id: str,
    claims: Claims = Depends(require_instructor),
    db: Database = Depends(get_db),
):
    return {'deletedCount': courses.delete_course(db, course_id)}


@router.get('/my-courses')
def list_my_courses(claims: Claims = Depends(require_instructor), db: Database = Depends(get_db)):
    return [serialize_doc(course) for course in courses.list_by_instructor_email(db, claims.email)]
