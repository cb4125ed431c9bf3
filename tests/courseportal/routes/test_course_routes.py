import json
from datetime import datetime

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from courseportal.repositories import courses


@pytest.fixture
def instructor(mongo_db, auth_header):
    mongo_db['users'].insert_one({'email': 'ada@example.com', 'name': 'Ada', 'role': 'instructor'})
    return auth_header('ada@example.com')


@pytest.fixture
def student(mongo_db, auth_header):
    mongo_db['users'].insert_one({'email': 'sam@example.com', 'name': 'Sam', 'role': 'student'})
    return auth_header('sam@example.com')


def test_list_all_courses_filters_and_serializes(client, mongo_db, course_payload) -> None:
    courses.insert_course(mongo_db, course_payload())
    courses.insert_course(mongo_db, course_payload(title='Sketching', category='design'))

    response = client.get('/all-courses', params={'category': 'design'})

    assert response.status_code == 200
    body = response.json()
    assert [course['title'] for course in body] == ['Sketching']
    assert isinstance(body[0]['_id'], str)
    assert isinstance(body[0]['createdAt'], str)


def test_list_all_courses_rejects_page_zero(client) -> None:
    response = client.get('/all-courses', params={'page': 0})

    assert response.status_code == 400
    assert response.json()['error'].startswith('page:')


def test_get_course_maps_errors_to_json_bodies(client) -> None:
    malformed = client.get('/courses/not-an-id')
    missing = client.get(f'/courses/{ObjectId()}')

    assert malformed.status_code == 400
    assert malformed.json() == {'error': 'Invalid course id'}
    assert missing.status_code == 404
    assert missing.json() == {'error': 'Course not found'}


def test_featured_courses_endpoint_limits_results(client, mongo_db) -> None:
    for day in range(1, 4):
        mongo_db['courses'].insert_one({'title': f'F{day}', 'isFeatured': True, 'createdAt': datetime(2024, 1, day)})

    response = client.get('/featured-courses', params={'limit': 2})

    assert [course['title'] for course in response.json()] == ['F3', 'F2']


def test_instructors_endpoint_lists_registered_instructors(client, instructor) -> None:
    response = client.get('/instructors')

    assert response.json() == [{'name': 'Ada', 'email': 'ada@example.com', 'photo': ''}]


def test_create_course_requires_bearer_token(client, course_payload) -> None:
    missing = client.post('/courses', json=course_payload())
    malformed = client.post('/courses', json=course_payload(), headers={'Authorization': 'Token abc'})
    invalid = client.post('/courses', json=course_payload(), headers={'Authorization': 'Bearer not-a-jwt'})

    assert missing.status_code == 401
    assert malformed.status_code == 401
    assert invalid.status_code == 401
    assert invalid.json() == {'error': 'Invalid token'}


def test_create_course_forbidden_without_role_record(client, auth_header, course_payload) -> None:
    response = client.post('/courses', json=course_payload(), headers=auth_header('stranger@example.com'))

    assert response.status_code == 403
    assert response.json() == {'error': 'Forbidden access'}


def test_create_course_forbidden_for_student(client, student, course_payload) -> None:
    response = client.post('/courses', json=course_payload(), headers=student)

    assert response.status_code == 403


def test_create_course_as_instructor(client, mongo_db, instructor, course_payload) -> None:
    response = client.post('/courses', json=course_payload(), headers=instructor)

    assert response.status_code == 200
    inserted_id = response.json()['insertedId']
    assert mongo_db['courses'].find_one({'_id': ObjectId(inserted_id)})['title'] == 'Intro to Python'


def test_create_course_reports_first_invalid_field(client, instructor, course_payload) -> None:
    response = client.post('/courses', json=course_payload(price=-5), headers=instructor)

    assert response.status_code == 400
    assert response.json()['error'].startswith('price:')


def test_update_and_delete_course_as_instructor(client, mongo_db, instructor, course_payload) -> None:
    course_id = courses.insert_course(mongo_db, course_payload())

    updated = client.put(f'/courses/{course_id}', json={'title': 'Renamed'}, headers=instructor)
    deleted = client.delete(f'/courses/{course_id}', headers=instructor)

    assert updated.json() == {'modifiedCount': 1}
    assert deleted.json() == {'deletedCount': 1}
    assert mongo_db['courses'].count_documents({}) == 0


def test_update_unknown_course_returns_not_found(client, instructor) -> None:
    response = client.put(f'/courses/{ObjectId()}', json={'title': 'Renamed'}, headers=instructor)

    assert response.status_code == 404
    assert response.json() == {'error': 'Course not found'}


def test_my_courses_returns_only_callers_courses(client, mongo_db, instructor, course_payload) -> None:
    courses.insert_course(mongo_db, course_payload())
    courses.insert_course(
        mongo_db,
        course_payload(title='Not mine', instructor={'name': 'Alan', 'email': 'alan@example.com', 'photo': ''}),
    )

    response = client.get('/my-courses', headers=instructor)

    assert [course['title'] for course in response.json()] == ['Intro to Python']


def test_database_failure_returns_opaque_500(client, monkeypatch: pytest.MonkeyPatch) -> None:
    def fail(*_args, **_kwargs):
        raise ServerSelectionTimeoutError('no servers')

    monkeypatch.setattr(courses, 'list_courses', fail)

    response = client.get('/all-courses')

    assert response.status_code == 500
    assert response.json() == {'error': 'Internal server error'}


def test_my_courses_matches_mixed_case_instructor_email(client, auth_header, course_payload) -> None:
    client.post('/users', json={'email': 'Ada.L@Example.com', 'name': 'Ada', 'role': 'instructor'})
    headers = auth_header('Ada.L@Example.com')
    payload = course_payload(instructor={'name': 'Ada', 'email': 'Ada.L@Example.com', 'photo': ''})

    created = client.post('/courses', json=payload, headers=headers)
    response = client.get('/my-courses', headers=headers)

    assert created.status_code == 200
    assert [course['_id'] for course in response.json()] == [created.json()['insertedId']]


def test_create_course_rejects_infinite_price(client, mongo_db, instructor, course_payload) -> None:
    body = json.dumps(course_payload()).replace('"price": 49.0', '"price": 1e999')

    response = client.post('/courses', content=body, headers={**instructor, 'Content-Type': 'application/json'})

    assert response.status_code == 400
    assert response.json()['error'].startswith('price:')
    assert mongo_db['courses'].count_documents({}) == 0
