from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.models.assignment import Assignment, AssignmentSubmission
from app.models.course_enrollment import CourseEnrollment
from app.models.course_file import CourseFile
from app.models.course_progress import CourseProgress
from app.models.file_progress import FileProgress
from app.models.quiz import Quiz
from app.models.quiz_submission import QuizSubmission
from tests.helpers.asserts import api_call


def test_course_delete_removes_dependent_rows(client: TestClient, db_session: Session, instructor, student, course_factory, file_factory, enroll, auth_headers, quiz_payload, storage):
    print("\n[TEST] Course deletion cascade")
    course = course_factory(instructor)
    course_id = course.id
    other = course_factory(instructor)
    untouched = file_factory(other)
    item = file_factory(course)
    enroll(student, course)
    student_headers = auth_headers(student)
    instructor_headers = auth_headers(instructor)

    print("[1] Populate quiz, submission, assignment and progress")
    r = api_call(client, "POST", f"/api/quizzes/{course_id}", headers=instructor_headers, json=quiz_payload())
    quiz_id = r.json()["data"]["id"]
    api_call(client, "POST", f"/api/submissions/{quiz_id}", headers=student_headers, json={
        "course_id": course_id,
        "answers": [{"question_id": 0, "selected_option_id": "0"}],
        "score": 2,
        "total_questions": 2,
    })
    r = api_call(
        client, "POST", f"/api/courses/{course_id}/assignments",
        headers=instructor_headers,
        data={"title": "Essay", "total_marks": "10", "due_date": "2030-06-01T12:00:00Z"},
        files={"file": ("brief.pdf", b"%PDF", "application/pdf")},
    )
    assignment_id = r.json()["data"]["id"]
    api_call(
        client, "POST", f"/api/assignments/{assignment_id}/submissions",
        headers=student_headers,
        files={"file": ("answer.pdf", b"%PDF", "application/pdf")},
    )
    api_call(client, "POST", "/api/course-progress/toggle-content-complete", headers=student_headers, json={
        "user_id": student.id, "course_id": course_id, "content_id": item.id,
    })
    api_call(client, "POST", "/api/file-progress/toggle", headers=student_headers, json={
        "file_id": item.id, "course_id": course_id,
    })

    print("[2] Delete the course")
    r = api_call(client, "DELETE", f"/api/create-course/{course_id}", headers=instructor_headers)
    assert r.json()["data"]["id"] == course_id

    print("[3] Nothing that belonged to it survives")
    for model in (CourseEnrollment, CourseFile, Quiz, QuizSubmission, Assignment, AssignmentSubmission, CourseProgress, FileProgress):
        assert db_session.query(model).filter(model.course_id == course_id).count() == 0, model.__name__

    assert db_session.get(CourseFile, untouched.id) is not None
    r = api_call(client, "GET", "/api/courses/enrolled", headers=student_headers)
    assert r.json()["data"] == []
    print("[OK] Cascade verified")
