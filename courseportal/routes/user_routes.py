from fastapi import APIRouter, Depends, Query
from pymongo.database import Database

from courseportal.database import get_db
from courseportal.models.serialization import serialize_doc
from courseportal.models.user import RoleResponse, UserCreate
from courseportal.repositories import users

router = APIRouter(tags=['users'])


@router.get('/users', response_model=RoleResponse)
def get_user_role(email: str = Query(..., min_length=1), db: Database = Depends(get_db)):
    return RoleResponse(role=users.get_role(db, email))


@router.post('/users')
def save_user_on_first_login(data: UserCreate, db: Database = Depends(get_db)):
    return serialize_doc(users.upsert_on_first_login(db, data))
