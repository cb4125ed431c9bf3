from fastapi import APIRouter, Depends
from pymongo.database import Database

from courseportal.auth.dependencies import Claims, require_student
from courseportal.database import get_db
from courseportal.models.enrollment import EnrollRequest
from courseportal.models.serialization import serialize_doc
from courseportal.repositories import enrollments

router = APIRouter(tags=['enrollments'])


@router.post('/enroll')
def enroll_in_course(
    data: EnrollRequest,
    claims: Claims = Depends(require_student),
    db: Database = Depends(get_db),
):
    return {'insertedId': enrollments.enroll(db, claims.email, data.courseId)}


@router.get('/enrolled')
def list_enrolled_courses(claims: Claims = Depends(require_student), db: Database = Depends(get_db)):
    return [serialize_doc(entry) for entry in enrollments.list_for_user(db, claims.email)]
