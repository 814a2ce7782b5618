import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import itertools
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.constants import ContentTypeEnum, RoleEnum
from app.core.database import Base, create_db_engine, create_session_factory
from app.core.security import get_password_hash
from app.crud.course import course as crud_course
from app.crud.course_enrollment import course_enrollment as crud_enrollment
from app.crud.course_file import course_file as crud_course_file
from app.crud.user import user as crud_user
from app.models import registry  # noqa: F401
from app.services.storage import StorageError, StoredFile
from app.utils import deps as deps_utils
import main

_counter = itertools.count(1)


class FakeStorage:
    """In-memory stand-in for the Cloudinary-backed StorageService."""

    def __init__(self):
        self.signed_url_ttl = 300
        self.max_image_bytes = 10 * 1024 * 1024
        self.max_content_bytes = 50 * 1024 * 1024
        self.uploads = []
        self.destroyed = []
        self.fail = False

    def _store(self, folder, resource_type):
        if self.fail:
            raise StorageError("Failed to upload file to storage")
        n = next(_counter)
        public_id = f"{folder}/file-{n}"
        self.uploads.append(public_id)
        return StoredFile(
            url=f"https://storage.test/{public_id}",
            public_id=public_id,
            resource_type=resource_type,
        )

    def upload(self, file, folder, resource_type="auto"):
        return self._store(folder, "raw" if resource_type == "auto" else resource_type)

    def upload_image(self, file, folder):
        return self._store(folder, "image")

    def destroy(self, public_id, resource_type="image"):
        self.destroyed.append(public_id)

    def signed_download_url(self, public_id, file_format, resource_type="raw"):
        return f"https://storage.test/signed/{resource_type}/{public_id}.{file_format}?expires={self.signed_url_ttl}"


@pytest.fixture(scope="function")
def database_engine():
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture(scope="function")
def db_session(database_engine):
    SessionLocal = create_session_factory(database_engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()

@pytest.fixture
def storage():
    return FakeStorage()

@pytest.fixture(scope="function")
def app(database_engine, db_session, storage):
    test_app = main.create_app(settings=Settings(DATABASE_URL="sqlite://", LOG_LEVEL="WARNING"), engine=database_engine)
    test_app.dependency_overrides[deps_utils.get_db] = lambda: db_session
    test_app.dependency_overrides[deps_utils.get_transactional_db] = lambda: db_session
    test_app.dependency_overrides[deps_utils.get_storage] = lambda: storage
    return test_app

@pytest.fixture(scope="function")
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user_factory(db_session):
    def _user_factory(role=RoleEnum.STUDENT, email=None, name=None, password="testpass123"):
        n = next(_counter)
        user_data = {
            "name": name or f"Test {role.value.title()} {n}",
            "email": email or f"{role.value}-{n}@test.com",
            "hashed_password": get_password_hash(password),
            "role": role,
            "bio": "",
        }
        return crud_user.create(db_session, obj_in=user_data)
    return _user_factory

@pytest.fixture
def instructor(user_factory):
    return user_factory(role=RoleEnum.INSTRUCTOR)

@pytest.fixture
def student(user_factory):
    return user_factory(role=RoleEnum.STUDENT)

@pytest.fixture
def token_for(app):
    token_service = app.state.context.token_service

    def _token_for(user):
        return token_service.issue({
            "id": user.id,
            "role": user.role.value,
            "name": user.name,
            "email": user.email,
        })
    return _token_for

@pytest.fixture
def auth_headers(token_for):
    def _auth_headers(user):
        return {"Authorization": f"Bearer {token_for(user)}"}
    return _auth_headers

@pytest.fixture
def course_factory(db_session):
    def _course_factory(instructor, title=None, price=0, duration_weeks=4):
        return crud_course.create(db_session, obj_in={
            "title": title or f"Course {next(_counter)}",
            "price": price,
            "duration_weeks": duration_weeks,
            "description": "",
            "instructor_id": instructor.id,
            "instructor_name": instructor.name,
            "instructor_email": instructor.email,
        })
    return _course_factory

@pytest.fixture
def file_factory(db_session):
    def _file_factory(course, file_name=None, content_type=ContentTypeEnum.PDF):
        n = next(_counter)
        return crud_course_file.create(db_session, obj_in={
            "course_id": course.id,
            "file_name": file_name or f"lesson-{n}.pdf",
            "file_url": f"https://storage.test/course_files/lesson-{n}.pdf",
            "public_id": f"course_files/lesson-{n}",
            "resource_type": "raw",
            "content_type": content_type,
            "uploaded_by": course.instructor_id,
        })
    return _file_factory

@pytest.fixture
def enroll(db_session):
    def _enroll(user, course):
        return crud_enrollment.create(db_session, obj_in={"user_id": user.id, "course_id": course.id})
    return _enroll

@pytest.fixture
def quiz_payload():
    def _quiz_payload(title="Week 1 Check", questions=None):
        return {
            "title": title,
            "duration": "00:15:00",
            "questions": questions if questions is not None else [
                {
                    "q_content": "2 + 2 = ?",
                    "options": [{"text": "4", "correct": True}, {"text": "5", "correct": False}],
                },
                {
                    "q_content": "Capital of France?",
                    "options": [{"text": "Paris", "correct": True}, {"text": "Rome", "correct": False}],
                },
            ],
        }
    return _quiz_payload
