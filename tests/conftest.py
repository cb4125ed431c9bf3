import mongomock
import pytest
from fastapi.testclient import TestClient

from courseportal.auth.jwt_handler import create_access_token
from courseportal.database import ensure_indexes, get_db
from courseportal.main import app


@pytest.fixture
def mongo_db():
    client = mongomock.MongoClient()
    db = client['course-portal-test']
    ensure_indexes(db)
    try:
        yield db
    finally:
        client.close()


@pytest.fixture
def client(mongo_db):
    app.dependency_overrides[get_db] = lambda: mongo_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_header():
    def build(email: str) -> dict[str, str]:
        return {'Authorization': f'Bearer {create_access_token(subject=email)}'}

    return build


@pytest.fixture
def course_payload():
    def build(**overrides) -> dict:
        payload = {
            'title': 'Intro to Python',
            'image': 'https://img.example.com/python.png',
            'price': 49.0,
            'duration': '6 weeks',
            'category': 'programming',
            'description': 'Learn the basics.',
            'instructor': {
                'name': 'Ada Lovelace',
                'email': 'ada@example.com',
                'photo': 'https://img.example.com/ada.png',
            },
        }
        payload.update(overrides)
        return payload

    return build
