import pytest
from fastapi.testclient import TestClient

from app.core.constants import RoleEnum
from app.crud.assignment import assignment as crud_assignment
from tests.helpers.asserts import api_call, assert_error

ASSIGNMENT_FORM = {"title": "Essay 1", "total_marks": "20", "due_date": "2030-01-15T23:59:00Z", "description": "500 words"}


@pytest.fixture
def course(instructor, course_factory):
    return course_factory(instructor)


@pytest.fixture
def assignment(client, instructor, course, auth_headers):
    r = api_call(
        client, "POST", f"/api/courses/{course.id}/assignments",
        headers=auth_headers(instructor),
        data=ASSIGNMENT_FORM,
        files={"file": ("brief.pdf", b"%PDF brief", "application/pdf")},
    )
    return r.json()["data"]


def _submit(client, user, assignment, auth_headers, name="essay.docx"):
    return client.post(
        f"/api/assignments/{assignment['id']}/submissions",
        headers=auth_headers(user),
        files={"file": (name, b"essay body", "application/octet-stream")},
    )


def test_create_assignment(client: TestClient, course, assignment):
    assert assignment["course_id"] == course.id
    assert assignment["total_marks"] == 20
    assert assignment["submissions_count"] == 0
    assert assignment["file_url"].startswith("https://storage.test/assignments/")


def test_create_assignment_requires_positive_total(client: TestClient, instructor, course, auth_headers):
    r = client.post(
        f"/api/courses/{course.id}/assignments",
        headers=auth_headers(instructor),
        data={**ASSIGNMENT_FORM, "total_marks": "0"},
    )
    assert_error(r, 422, "VALIDATION_ERROR")


def test_list_and_read_assignment(client: TestClient, instructor, student, course, assignment, enroll, auth_headers):
    r = client.get(f"/api/courses/{course.id}/assignments", headers=auth_headers(student))
    assert_error(r, 403, "FORBIDDEN", "Not enrolled in this course")

    enroll(student, course)
    r = api_call(client, "GET", f"/api/courses/{course.id}/assignments", headers=auth_headers(student))
    assert [a["id"] for a in r.json()["data"]] == [assignment["id"]]

    r = api_call(client, "GET", f"/api/assignments/{assignment['id']}", headers=auth_headers(student))
    assert r.json()["data"]["title"] == "Essay 1"


def test_download_assignment_brief(client: TestClient, student, course, assignment, enroll, auth_headers):
    enroll(student, course)
    r = api_call(client, "GET", f"/api/assignments/{assignment['id']}/download", headers=auth_headers(student))
    assert r.json()["data"]["url"].endswith(".pdf?expires=300")


def test_download_without_brief(client: TestClient, instructor, course, auth_headers):
    r = api_call(
        client, "POST", f"/api/courses/{course.id}/assignments", headers=auth_headers(instructor), data=ASSIGNMENT_FORM
    )
    r = client.get(f"/api/assignments/{r.json()['data']['id']}/download", headers=auth_headers(instructor))
    assert_error(r, 404, "NOT_FOUND", "No assignment file available")


def test_student_submits_and_count_increments(client: TestClient, student, course, assignment, enroll, auth_headers, db_session):
    enroll(student, course)
    r = _submit(client, student, assignment, auth_headers)
    assert r.status_code == 201, r.text
    submission = r.json()["data"]
    assert submission["student_id"] == student.id
    assert submission["student_name"] == student.name
    assert submission["marks"] is None

    _submit(client, student, assignment, auth_headers, name="essay-v2.docx")
    assert crud_assignment.get(db_session, id=assignment["id"]).submissions_count == 2


def test_submission_requires_enrollment(client: TestClient, student, assignment, auth_headers):
    r = _submit(client, student, assignment, auth_headers)
    assert_error(r, 403, "FORBIDDEN", "Not enrolled in this course")


def test_student_view_includes_own_submission(client: TestClient, student, user_factory, course, assignment, enroll, auth_headers):
    classmate = user_factory()
    enroll(student, course)
    enroll(classmate, course)
    _submit(client, classmate, assignment, auth_headers)

    r = api_call(client, "GET", f"/api/courses/{course.id}/assignments/student", headers=auth_headers(student))
    assert r.json()["data"][0]["submission"] is None

    _submit(client, student, assignment, auth_headers)
    r = api_call(client, "GET", f"/api/courses/{course.id}/assignments/student", headers=auth_headers(student))
    assert r.json()["data"][0]["submission"]["student_id"] == student.id


def test_owner_lists_submissions(client: TestClient, instructor, student, course, assignment, enroll, auth_headers):
    enroll(student, course)
    _submit(client, student, assignment, auth_headers)
    r = api_call(client, "GET", f"/api/assignments/{assignment['id']}/submissions", headers=auth_headers(instructor))
    assert len(r.json()["data"]) == 1


def test_update_assignment(client: TestClient, instructor, assignment, auth_headers, storage):
    old_brief = storage.uploads[-1]
    r = api_call(
        client, "PUT", f"/api/assignments/{assignment['id']}",
        headers=auth_headers(instructor),
        data={"title": "Essay 1 (revised)"},
        files={"file": ("brief-v2.pdf", b"%PDF v2", "application/pdf")},
    )
    data = r.json()["data"]
    assert data["title"] == "Essay 1 (revised)"
    assert data["total_marks"] == 20
    assert storage.destroyed == [old_brief]


def test_failed_update_keeps_previous_brief(client: TestClient, instructor, assignment, auth_headers, storage, monkeypatch):
    def broken_update(*args, **kwargs):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(crud_assignment, "update", broken_update)
    with pytest.raises(RuntimeError):
        client.put(
            f"/api/assignments/{assignment['id']}",
            headers=auth_headers(instructor),
            files={"file": ("brief-v2.pdf", b"%PDF v2", "application/pdf")},
        )
    assert storage.destroyed == []


def test_delete_assignment_removes_submissions(client: TestClient, instructor, student, course, assignment, enroll, auth_headers, db_session):
    from app.crud.assignment import assignment_submission as crud_assignment_submission
    enroll(student, course)
    submission_id = _submit(client, student, assignment, auth_headers).json()["data"]["id"]

    api_call(client, "DELETE", f"/api/assignments/{assignment['id']}", headers=auth_headers(instructor))
    assert crud_assignment.get(db_session, id=assignment["id"]) is None
    assert crud_assignment_submission.get(db_session, id=submission_id) is None


def test_grading_bounds(client: TestClient, instructor, student, course, assignment, enroll, auth_headers):
    enroll(student, course)
    submission_id = _submit(client, student, assignment, auth_headers).json()["data"]["id"]

    r = client.put(f"/api/assignment-submissions/{submission_id}/grade", headers=auth_headers(instructor), json={"marks": 21})
    assert_error(r, 400, "BAD_REQUEST", "Marks cannot exceed 20")

    r = api_call(client, "PUT", f"/api/assignment-submissions/{submission_id}/grade", headers=auth_headers(instructor), json={"marks": 20})
    assert r.json()["data"]["marks"] == 20


def test_grading_by_other_instructor(client: TestClient, student, user_factory, course, assignment, enroll, auth_headers):
    enroll(student, course)
    submission_id = _submit(client, student, assignment, auth_headers).json()["data"]["id"]
    other = user_factory(role=RoleEnum.INSTRUCTOR)
    r = client.put(f"/api/assignment-submissions/{submission_id}/grade", headers=auth_headers(other), json={"marks": 5})
    assert_error(r, 403, "FORBIDDEN")


def test_submission_download_access(client: TestClient, instructor, student, user_factory, course, assignment, enroll, auth_headers):
    classmate = user_factory()
    enroll(student, course)
    enroll(classmate, course)
    submission_id = _submit(client, student, assignment, auth_headers).json()["data"]["id"]
    path = f"/api/assignment-submissions/{submission_id}/download"

    r = api_call(client, "GET", path, headers=auth_headers(student))
    assert r.json()["data"]["url"].endswith(".docx?expires=300")
    api_call(client, "GET", path, headers=auth_headers(instructor))

    r = client.get(path, headers=auth_headers(classmate))
    assert_error(r, 403, "FORBIDDEN")
