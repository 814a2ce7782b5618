import pytest
from fastapi.testclient import TestClient

from app.core.constants import RoleEnum
from tests.helpers.asserts import api_call, assert_error


@pytest.fixture
def course(instructor, course_factory):
    return course_factory(instructor)


def test_create_and_read_quiz(client: TestClient, instructor, course, auth_headers, quiz_payload):
    r = api_call(client, "POST", f"/api/quizzes/{course.id}", headers=auth_headers(instructor), json=quiz_payload())
    assert r.status_code == 201
    quiz = r.json()["data"]
    assert quiz["course_id"] == course.id
    assert quiz["instructor_id"] == instructor.id
    assert len(quiz["questions"]) == 2
    assert quiz["questions"][0]["options"][0] == {"text": "4", "correct": True}

    r = api_call(client, "GET", f"/api/quizzes/{course.id}", headers=auth_headers(instructor))
    assert [q["id"] for q in r.json()["data"]] == [quiz["id"]]

    r = api_call(client, "GET", f"/api/quizzes/single/{quiz['id']}", headers=auth_headers(instructor))
    assert r.json()["data"]["title"] == "Week 1 Check"


@pytest.mark.parametrize("questions,message", [
    ([], "At least one question is required"),
    ([{"q_content": "   ", "options": [{"text": "a", "correct": True}]}], "Question 1: Content is required"),
    ([{"q_content": "Q", "options": []}], "Question 1: At least one option is required"),
    (
        [
            {"q_content": "Q1", "options": [{"text": "a", "correct": True}]},
            {"q_content": "Q2", "options": [{"text": "a", "correct": False}, {"text": "b", "correct": False}]},
        ],
        "Question 2: At least one correct option is required",
    ),
    (
        [{"q_content": "Q", "options": [{"text": "a", "correct": True}, {"text": " ", "correct": False}]}],
        "Question 1, Option 2: Text is required",
    ),
])
def test_create_quiz_validation(client: TestClient, instructor, course, auth_headers, quiz_payload, questions, message):
    r = client.post(f"/api/quizzes/{course.id}", headers=auth_headers(instructor), json=quiz_payload(questions=questions))
    assert_error(r, 400, "BAD_REQUEST", message)


def test_create_quiz_rejects_bad_duration(client: TestClient, instructor, course, auth_headers, quiz_payload):
    payload = {**quiz_payload(), "duration": "fifteen minutes"}
    r = client.post(f"/api/quizzes/{course.id}", headers=auth_headers(instructor), json=payload)
    assert_error(r, 422, "VALIDATION_ERROR")


def test_non_owner_cannot_create_quiz(client: TestClient, user_factory, course, auth_headers, quiz_payload):
    other = user_factory(role=RoleEnum.INSTRUCTOR)
    r = client.post(f"/api/quizzes/{course.id}", headers=auth_headers(other), json=quiz_payload())
    assert_error(r, 403, "FORBIDDEN")


def test_update_quiz_validates_questions_only_when_supplied(client: TestClient, instructor, course, auth_headers, quiz_payload):
    quiz_id = api_call(client, "POST", f"/api/quizzes/{course.id}", headers=auth_headers(instructor), json=quiz_payload()).json()["data"]["id"]

    r = api_call(client, "PUT", f"/api/quizzes/{quiz_id}", headers=auth_headers(instructor), json={"title": "Renamed"})
    assert r.json()["data"]["title"] == "Renamed"
    assert len(r.json()["data"]["questions"]) == 2

    r = client.put(
        f"/api/quizzes/{quiz_id}",
        headers=auth_headers(instructor),
        json={"questions": [{"q_content": "Q", "options": [{"text": "a", "correct": False}]}]},
    )
    assert_error(r, 400, "BAD_REQUEST", "Question 1: At least one correct option is required")


def test_only_author_updates_or_deletes(client: TestClient, instructor, user_factory, course, auth_headers, quiz_payload):
    quiz_id = api_call(client, "POST", f"/api/quizzes/{course.id}", headers=auth_headers(instructor), json=quiz_payload()).json()["data"]["id"]
    other = user_factory(role=RoleEnum.INSTRUCTOR)

    r = client.put(f"/api/quizzes/{quiz_id}", headers=auth_headers(other), json={"title": "Hijack"})
    assert_error(r, 403, "FORBIDDEN")
    r = client.delete(f"/api/quizzes/{quiz_id}", headers=auth_headers(other))
    assert_error(r, 403, "FORBIDDEN")

    r = api_call(client, "DELETE", f"/api/quizzes/{quiz_id}", headers=auth_headers(instructor))
    assert r.json()["data"]["id"] == quiz_id
    r = client.get(f"/api/quizzes/single/{quiz_id}", headers=auth_headers(instructor))
    assert_error(r, 404, "NOT_FOUND", "Quiz not found")


def test_student_access_follows_enrollment(client: TestClient, instructor, student, course, enroll, auth_headers, quiz_payload):
    quiz_id = api_call(client, "POST", f"/api/quizzes/{course.id}", headers=auth_headers(instructor), json=quiz_payload()).json()["data"]["id"]

    r = client.get(f"/api/quizzes/{course.id}", headers=auth_headers(student))
    assert_error(r, 403, "FORBIDDEN", "Not enrolled in this course")
    r = client.get(f"/api/quizzes/single/{quiz_id}", headers=auth_headers(student))
    assert_error(r, 403, "FORBIDDEN", "Not enrolled in this course")

    enroll(student, course)
    api_call(client, "GET", f"/api/quizzes/{course.id}", headers=auth_headers(student))
    api_call(client, "GET", f"/api/quizzes/single/{quiz_id}", headers=auth_headers(student))
